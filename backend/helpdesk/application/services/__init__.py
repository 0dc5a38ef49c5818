from .llm_usage_logger import LLMUsageLogger
from .change_feed import ChangeFeed
from .field_catalog_service import FieldCatalogService
from .ticket_metadata_service import TicketMetadataService
from .filter_builder import FilterBuilder
from .bulk_mutation_controller import BulkMutationController, MutationOutcome, PendingAction
from .bulk_executors import TicketBulkExecutor, UserBulkExecutor
from .result_disambiguator import classify, parse_command_output, to_command_result
from .command_dispatcher import CommandDispatcher, build_list_operators_tool
from .power_tools_session import PowerToolsSession
from .ticket_service import TicketService
from .user_service import UserService
from .team_service import TeamService
from .tag_service import TagService
from .message_service import MessageService
from .skill_service import SkillService

__all__ = [
    "LLMUsageLogger",
    "ChangeFeed",
    "FieldCatalogService",
    "TicketMetadataService",
    "FilterBuilder",
    "BulkMutationController",
    "MutationOutcome",
    "PendingAction",
    "TicketBulkExecutor",
    "UserBulkExecutor",
    "classify",
    "parse_command_output",
    "to_command_result",
    "CommandDispatcher",
    "build_list_operators_tool",
    "PowerToolsSession",
    "TicketService",
    "UserService",
    "TeamService",
    "TagService",
    "MessageService",
    "SkillService",
]
