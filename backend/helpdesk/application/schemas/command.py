"""Pydantic DTOs for natural-language commands."""

from typing import Any

from pydantic import BaseModel, Field

from helpdesk.domain.entities import CommandKind, CommandOutcome


class CommandRequest(BaseModel):
    text: str = Field(..., min_length=1, examples=["Which agents in Second Line are experts in networking?"])


class PersonSchema(BaseModel):
    id: str | None = None
    name: str
    role: str | None = None
    is_team_lead: bool | None = None
    team: str | None = None
    skills: list[str] | None = None
    delete: bool = False
    reassign: bool = False
    target_team: str | None = None

    model_config = {"from_attributes": True}


class CommandResultSchema(BaseModel):
    kind: CommandKind
    subjects: list[PersonSchema] = Field(default_factory=list)
    target_team: str | None = None
    raw_text: str | None = None
    ambiguous: bool = False

    model_config = {"from_attributes": True}


class CommandMetadata(BaseModel):
    processedAt: str
    processingTimeMs: int


class CommandResponse(BaseModel):
    """Response of the power-tools command endpoint."""

    input: str
    output: str
    description: str
    result: CommandResultSchema
    metadata: CommandMetadata
    trace: list[dict[str, Any]]
    consequences: str | None = None

    @classmethod
    def from_outcome(cls, outcome: CommandOutcome, consequences: str | None = None) -> "CommandResponse":
        return cls(
            input=outcome.input,
            output=outcome.output,
            description=outcome.description,
            result=CommandResultSchema.model_validate(outcome.result, from_attributes=True),
            metadata=command_metadata(outcome),
            trace=outcome.trace.to_list(),
            consequences=consequences,
        )


def command_metadata(outcome: CommandOutcome) -> CommandMetadata:
    return CommandMetadata(
        processedAt=outcome.processed_at.isoformat().replace("+00:00", "Z"),
        processingTimeMs=outcome.processing_time_ms,
    )
