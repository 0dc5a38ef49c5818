from .service_request_log_repository import SQLAlchemyServiceRequestLogRepository
from .field_definition_repository import (
    SQLAlchemyFieldDefinitionRepository,
    SQLAlchemyMetadataValueRepository,
)
from .ticket_repository import SQLAlchemyTicketRepository
from .tag_repository import SQLAlchemyTagRepository
from .user_repository import SQLAlchemyUserRepository
from .team_repository import SQLAlchemyTeamRepository
from .skill_repository import SQLAlchemySkillRepository, SQLAlchemyVocabularyRepository
from .message_repository import SQLAlchemyMessageRepository

__all__ = [
    "SQLAlchemyServiceRequestLogRepository",
    "SQLAlchemyFieldDefinitionRepository",
    "SQLAlchemyMetadataValueRepository",
    "SQLAlchemyTicketRepository",
    "SQLAlchemyTagRepository",
    "SQLAlchemyUserRepository",
    "SQLAlchemyTeamRepository",
    "SQLAlchemySkillRepository",
    "SQLAlchemyVocabularyRepository",
    "SQLAlchemyMessageRepository",
]
