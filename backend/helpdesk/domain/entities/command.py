"""Domain entities for natural-language admin commands."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

OUTPUT_FIELDS = ("name", "role", "is_team_lead", "team", "skills")


class CommandKind(str, Enum):
    LISTING = "listing"
    DELETE_PENDING = "delete-pending"
    REASSIGN_PENDING = "reassign-pending"


class CommandAction(str, Enum):
    LIST = "list"
    DELETE = "delete"
    REASSIGN = "reassign"


@dataclass
class OperatorQuery:
    """Filters and projection requested by the model for an operator listing."""

    description: str = ""
    team_name: str | None = None
    skill: str | None = None
    proficiency: str | None = None
    is_team_lead: bool | None = None
    output_fields: list[str] = field(default_factory=lambda: list(OUTPUT_FIELDS))
    action: CommandAction = CommandAction.LIST
    target_team: str | None = None


@dataclass
class Person:
    """One row of a command result."""

    name: str
    id: str | None = None
    role: str | None = None
    is_team_lead: bool | None = None
    team: str | None = None
    skills: list[str] | None = None
    delete: bool = False
    reassign: bool = False
    target_team: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Person":
        skills = row.get("skills")
        return cls(
            name=str(row.get("name") or ""),
            id=row.get("id"),
            role=row.get("role"),
            is_team_lead=row.get("is_team_lead"),
            team=row.get("team"),
            skills=list(skills) if isinstance(skills, list) else None,
            delete=row.get("delete") is True,
            reassign=row.get("reassign") is True,
            target_team=row.get("targetTeam"),
        )


@dataclass
class Classification:
    is_delete: bool = False
    is_reassign: bool = False


@dataclass
class CommandResult:
    """The interpreted outcome of a command, ready for the admin screen."""

    kind: CommandKind
    subjects: list[Person] = field(default_factory=list)
    target_team: str | None = None
    raw_text: str | None = None
    ambiguous: bool = False


@dataclass
class TraceEntry:
    type: str  # "vocabulary" | "model_call" | "function_call" | "function_result"
    name: str
    arguments: Any = None
    result: Any = None

    def to_dict(self) -> dict[str, Any]:
        entry: dict[str, Any] = {"type": self.type, "name": self.name}
        if self.arguments is not None:
            entry["arguments"] = self.arguments
        if self.result is not None:
            entry["result"] = self.result
        return entry


@dataclass
class ExecutionTrace:
    entries: list[TraceEntry] = field(default_factory=list)

    def add(self, type: str, name: str, arguments: Any = None, result: Any = None) -> TraceEntry:
        entry = TraceEntry(type=type, name=name, arguments=arguments, result=result)
        self.entries.append(entry)
        return entry

    def types(self) -> list[str]:
        return [entry.type for entry in self.entries]

    def to_list(self) -> list[dict[str, Any]]:
        return [entry.to_dict() for entry in self.entries]


@dataclass
class CommandOutcome:
    """Everything one dispatch produced."""

    input: str
    output: str
    description: str
    result: CommandResult
    trace: ExecutionTrace
    processed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    processing_time_ms: int = 0
