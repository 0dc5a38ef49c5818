"""Domain entities for users, teams and agent skills."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class UserRole(str, Enum):
    ADMINISTRATOR = "administrator"
    AGENT = "agent"
    CUSTOMER = "customer"


@dataclass
class User:
    """A person known to the helpdesk: customer, agent or administrator."""

    full_name: str | None
    role: UserRole = UserRole.CUSTOMER
    team_id: str | None = None
    is_team_lead: bool = False
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class Team:
    name: str
    description: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class UserOverview:
    """A user row as shown on the user administration screen."""

    user: User
    team_name: str | None = None
    created_ticket_count: int = 0


@dataclass
class Skill:
    name: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass
class Proficiency:
    name: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass
class AgentSkill:
    """Association of an agent with a skill at a proficiency level."""

    agent_id: str
    skill_id: str
    proficiency_id: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass
class SkillAssignment:
    """A resolved skill name with its proficiency name."""

    skill: str
    proficiency: str | None = None

    def label(self) -> str:
        if self.proficiency:
            return f"{self.skill} ({self.proficiency})"
        return self.skill


@dataclass
class OperatorRecord:
    """A user joined to their team and skills, as returned by operator search."""

    id: str
    name: str | None
    role: UserRole
    is_team_lead: bool
    team: str | None = None
    skills: list[SkillAssignment] = field(default_factory=list)
