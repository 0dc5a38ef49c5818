from .chat_message import ChatMessage, TokenUsage, ChatCompletionResult, ToolCall, ToolCallFunction
from .service_request_log import ServiceRequestLog
from .field_definition import (
    FieldDefinition,
    MetadataPayload,
    MetadataValue,
    ValueKind,
    VALUE_KIND_COLUMNS,
)
from .filtering import FilterPredicate, PredicateOperator, QueryPredicate, TicketQuery
from .ticket import Ticket, TicketDetail, TicketMessage, Tag, TagType
from .user import (
    AgentSkill,
    OperatorRecord,
    Proficiency,
    Skill,
    SkillAssignment,
    Team,
    User,
    UserOverview,
    UserRole,
)
from .command import (
    Classification,
    CommandAction,
    CommandKind,
    CommandOutcome,
    CommandResult,
    ExecutionTrace,
    OperatorQuery,
    OUTPUT_FIELDS,
    Person,
    TraceEntry,
)
from .change import RowChange, RowPredicate

__all__ = [
    "ChatMessage",
    "TokenUsage",
    "ChatCompletionResult",
    "ToolCall",
    "ToolCallFunction",
    "ServiceRequestLog",
    "FieldDefinition",
    "MetadataPayload",
    "MetadataValue",
    "ValueKind",
    "VALUE_KIND_COLUMNS",
    "FilterPredicate",
    "PredicateOperator",
    "QueryPredicate",
    "TicketQuery",
    "Ticket",
    "TicketDetail",
    "TicketMessage",
    "Tag",
    "TagType",
    "AgentSkill",
    "OperatorRecord",
    "Proficiency",
    "Skill",
    "SkillAssignment",
    "Team",
    "User",
    "UserOverview",
    "UserRole",
    "Classification",
    "CommandAction",
    "CommandKind",
    "CommandOutcome",
    "CommandResult",
    "ExecutionTrace",
    "OperatorQuery",
    "OUTPUT_FIELDS",
    "Person",
    "TraceEntry",
    "RowChange",
    "RowPredicate",
]
