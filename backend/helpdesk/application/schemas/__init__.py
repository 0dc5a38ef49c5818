from .field_type import FieldTypeCreate, FieldTypeResponse, MetadataValueResponse, MetadataValueSet
from .tag import TagCreate, TagResponse, TagTypeCreate, TagTypeResponse
from .ticket import (
    BulkIdsRequest,
    BulkMutationResponse,
    BulkTeamRequest,
    FilterPredicateSchema,
    TicketCreate,
    TicketDetailResponse,
    TicketResponse,
    TicketSearchRequest,
    TicketTeamUpdate,
)
from .user import (
    NamedResponse,
    RoleUpdate,
    SkillAssign,
    SkillAssignmentResponse,
    TeamCreate,
    TeamLeadUpdate,
    TeamMembersReassignRequest,
    TeamMembersRequest,
    TeamResponse,
    UserCreate,
    UserOverviewResponse,
    UserResponse,
)
from .message import MessageCreate, MessageResponse
from .command import CommandRequest, CommandResponse, CommandResultSchema, PersonSchema, command_metadata

__all__ = [
    "FieldTypeCreate",
    "FieldTypeResponse",
    "MetadataValueResponse",
    "MetadataValueSet",
    "TagCreate",
    "TagResponse",
    "TagTypeCreate",
    "TagTypeResponse",
    "BulkIdsRequest",
    "BulkMutationResponse",
    "BulkTeamRequest",
    "FilterPredicateSchema",
    "TicketCreate",
    "TicketDetailResponse",
    "TicketResponse",
    "TicketSearchRequest",
    "TicketTeamUpdate",
    "NamedResponse",
    "RoleUpdate",
    "SkillAssign",
    "SkillAssignmentResponse",
    "TeamCreate",
    "TeamLeadUpdate",
    "TeamMembersReassignRequest",
    "TeamMembersRequest",
    "TeamResponse",
    "UserCreate",
    "UserOverviewResponse",
    "UserResponse",
    "MessageCreate",
    "MessageResponse",
    "CommandRequest",
    "CommandResponse",
    "CommandResultSchema",
    "PersonSchema",
    "command_metadata",
]
