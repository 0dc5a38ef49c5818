"""Pydantic DTOs for metadata field definitions and values."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from helpdesk.domain.entities import MetadataValue, ValueKind


class FieldTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, examples=["Priority"])
    value_type: str = Field(
        ...,
        description="One of text, integer, float, boolean, date, timestamp, user, ticket.",
        examples=["integer"],
    )
    description: str | None = Field(None, max_length=2000)


class FieldTypeResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    value_kind: ValueKind
    created_at: datetime

    model_config = {"from_attributes": True}


class MetadataValueSet(BaseModel):
    """Raw value; it is validated against the field's value kind."""

    value: Any = Field(..., examples=[3])


class MetadataValueResponse(BaseModel):
    id: str
    ticket_id: str
    field_id: str
    field_name: str
    value_kind: ValueKind
    value: Any
    updated_at: datetime

    @classmethod
    def from_entity(cls, entity: MetadataValue) -> "MetadataValueResponse":
        return cls(
            id=entity.id,
            ticket_id=entity.ticket_id,
            field_id=entity.definition.id,
            field_name=entity.definition.name,
            value_kind=entity.definition.value_kind,
            value=entity.payload.to_json(),
            updated_at=entity.updated_at,
        )
