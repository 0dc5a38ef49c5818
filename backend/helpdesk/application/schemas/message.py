"""Pydantic DTOs for ticket messages."""

from datetime import datetime

from pydantic import BaseModel, Field


class MessageCreate(BaseModel):
    content: str = Field(..., min_length=1)
    sender_id: str | None = None


class MessageResponse(BaseModel):
    id: str
    ticket_id: str
    sender_id: str | None = None
    sender_name: str | None = None
    content: str
    created_at: datetime

    model_config = {"from_attributes": True}
