from .service_request_log import ServiceRequestLogModel
from .user_models import AgentSkillModel, ProficiencyModel, SkillModel, TeamModel, UserModel
from .ticket_models import TagModel, TagTypeModel, TicketMessageModel, TicketModel, TicketTagModel
from .metadata_models import FieldTypeModel, TicketMetadataModel

__all__ = [
    "ServiceRequestLogModel",
    "AgentSkillModel",
    "ProficiencyModel",
    "SkillModel",
    "TeamModel",
    "UserModel",
    "TagModel",
    "TagTypeModel",
    "TicketMessageModel",
    "TicketModel",
    "TicketTagModel",
    "FieldTypeModel",
    "TicketMetadataModel",
]
