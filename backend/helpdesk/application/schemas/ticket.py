"""Pydantic DTOs for tickets, ticket search and bulk ticket actions."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from helpdesk.application.schemas.field_type import MetadataValueResponse
from helpdesk.application.schemas.tag import TagResponse
from helpdesk.domain.entities import TicketDetail


class TicketCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=500, examples=["Printer on floor 2 is offline"])
    description: str | None = None
    creator_id: str | None = None
    team_id: str | None = None


class TicketResponse(BaseModel):
    id: str
    title: str
    description: str | None = None
    creator_id: str | None = None
    team_id: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TicketDetailResponse(TicketResponse):
    team_name: str | None = None
    creator_name: str | None = None
    tags: list[TagResponse] = Field(default_factory=list)
    metadata: list[MetadataValueResponse] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, detail: TicketDetail) -> "TicketDetailResponse":
        ticket = detail.ticket
        return cls(
            id=ticket.id,
            title=ticket.title,
            description=ticket.description,
            creator_id=ticket.creator_id,
            team_id=ticket.team_id,
            created_at=ticket.created_at,
            updated_at=ticket.updated_at,
            team_name=detail.team_name,
            creator_name=detail.creator_name,
            tags=[TagResponse.model_validate(tag, from_attributes=True) for tag in detail.tags],
            metadata=[MetadataValueResponse.from_entity(value) for value in detail.metadata],
        )


class TicketTeamUpdate(BaseModel):
    team_id: str | None = None


class FilterPredicateSchema(BaseModel):
    field_id: str
    value: Any


class TicketSearchRequest(BaseModel):
    """Metadata predicates (one per field, last one wins) and required tags."""

    predicates: list[FilterPredicateSchema] = Field(default_factory=list)
    tag_ids: list[str] = Field(default_factory=list)
    enabled: bool = True
    team_id: str | None = None
    skip: int = Field(0, ge=0)
    limit: int = Field(100, ge=1, le=500)


class BulkIdsRequest(BaseModel):
    ids: list[str] = Field(..., min_length=1)


class BulkTeamRequest(BulkIdsRequest):
    team_id: str


class BulkMutationResponse(BaseModel):
    action: str
    affected: int
    ids: list[str]
    target_team_id: str | None = None
