"""SQLAlchemy ORM models for ticket metadata fields and values."""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import (
    BigInteger,
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from helpdesk.infrastructure.database.base import Base


def _generate_uuid() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FieldTypeModel(Base):
    """ORM model: maps to the 'ticket_metadata_field_types' table."""

    __tablename__ = "ticket_metadata_field_types"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_generate_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    value_type: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)


class TicketMetadataModel(Base):
    """ORM model: maps to the 'ticket_metadata' table.

    One typed slot per value kind; only the slot matching the field's
    value type is populated.
    """

    __tablename__ = "ticket_metadata"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_generate_uuid)
    ticket_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("tickets.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    field_type_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("ticket_metadata_field_types.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    field_value_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    field_value_int: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    field_value_float: Mapped[float | None] = mapped_column(Float, nullable=True)
    field_value_bool: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    field_value_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    field_value_timestamp: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    field_value_user: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True,
    )
    field_value_ticket: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("tickets.id", ondelete="CASCADE"), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False,
    )

    field_type: Mapped[FieldTypeModel] = relationship()

    __table_args__ = (
        UniqueConstraint("ticket_id", "field_type_id", name="uq_ticket_metadata_ticket_field"),
    )
