from .chat_provider import ChatProvider
from .service_request_log_repository import ServiceRequestLogRepository
from .field_definition_repository import FieldDefinitionRepository, MetadataValueRepository
from .ticket_repository import TicketRepository
from .tag_repository import TagRepository
from .team_repository import TeamRepository
from .user_repository import UserRepository
from .skill_repository import SkillRepository, VocabularyRepository
from .message_repository import MessageRepository
from .bulk_mutation_executor import BulkMutationExecutor

__all__ = [
    "ChatProvider",
    "ServiceRequestLogRepository",
    "FieldDefinitionRepository",
    "MetadataValueRepository",
    "TicketRepository",
    "TagRepository",
    "TeamRepository",
    "UserRepository",
    "SkillRepository",
    "VocabularyRepository",
    "MessageRepository",
    "BulkMutationExecutor",
]
