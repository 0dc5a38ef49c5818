"""Domain entities for tickets, their messages and tags."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from .field_definition import MetadataValue


@dataclass
class Ticket:
    title: str
    description: str | None = None
    creator_id: str | None = None
    team_id: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class TicketMessage:
    ticket_id: str
    content: str
    sender_id: str | None = None
    sender_name: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class TagType:
    name: str
    description: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass
class Tag:
    name: str
    type_id: str
    description: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass
class TicketDetail:
    """A ticket with everything the detail view shows alongside it."""

    ticket: Ticket
    team_name: str | None = None
    creator_name: str | None = None
    tags: list[Tag] = field(default_factory=list)
    metadata: list[MetadataValue] = field(default_factory=list)
