from .base import Base
from .session import engine, async_session_factory, get_db_session, enable_sqlite_foreign_keys
from .models import (
    AgentSkillModel,
    FieldTypeModel,
    ProficiencyModel,
    ServiceRequestLogModel,
    SkillModel,
    TagModel,
    TagTypeModel,
    TeamModel,
    TicketMessageModel,
    TicketMetadataModel,
    TicketModel,
    TicketTagModel,
    UserModel,
)

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "get_db_session",
    "enable_sqlite_foreign_keys",
    "AgentSkillModel",
    "FieldTypeModel",
    "ProficiencyModel",
    "ServiceRequestLogModel",
    "SkillModel",
    "TagModel",
    "TagTypeModel",
    "TeamModel",
    "TicketMessageModel",
    "TicketMetadataModel",
    "TicketModel",
    "TicketTagModel",
    "UserModel",
]
