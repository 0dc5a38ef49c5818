"""Pydantic DTOs for users, teams and skills."""

from datetime import datetime

from pydantic import BaseModel, Field

from helpdesk.domain.entities import UserOverview, UserRole


class UserCreate(BaseModel):
    full_name: str | None = Field(None, max_length=255)
    role: UserRole = UserRole.CUSTOMER


class UserResponse(BaseModel):
    id: str
    full_name: str | None = None
    role: UserRole
    team_id: str | None = None
    is_team_lead: bool = False
    created_at: datetime

    model_config = {"from_attributes": True}


class UserOverviewResponse(UserResponse):
    team_name: str | None = None
    created_ticket_count: int = 0

    @classmethod
    def from_entity(cls, overview: UserOverview) -> "UserOverviewResponse":
        user = overview.user
        return cls(
            id=user.id,
            full_name=user.full_name,
            role=user.role,
            team_id=user.team_id,
            is_team_lead=user.is_team_lead,
            created_at=user.created_at,
            team_name=overview.team_name,
            created_ticket_count=overview.created_ticket_count,
        )


class RoleUpdate(BaseModel):
    role: UserRole


class TeamCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, examples=["Second Line"])
    description: str | None = None


class TeamResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class TeamLeadUpdate(BaseModel):
    is_team_lead: bool


class TeamMembersRequest(BaseModel):
    user_ids: list[str] = Field(..., min_length=1)


class TeamMembersReassignRequest(TeamMembersRequest):
    target_team_id: str


class NamedResponse(BaseModel):
    """Skill or proficiency level."""

    id: str
    name: str

    model_config = {"from_attributes": True}


class SkillAssign(BaseModel):
    skill_id: str
    proficiency_id: str | None = None


class SkillAssignmentResponse(BaseModel):
    skill: str
    proficiency: str | None = None

    model_config = {"from_attributes": True}
