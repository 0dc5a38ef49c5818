"""Concrete repositories for metadata field definitions and values."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from helpdesk.application.interfaces import FieldDefinitionRepository, MetadataValueRepository
from helpdesk.domain.entities import (
    FieldDefinition,
    MetadataPayload,
    MetadataValue,
    VALUE_KIND_COLUMNS,
    ValueKind,
)
from helpdesk.infrastructure.database.models import FieldTypeModel, TicketMetadataModel

_INSERT_BY_DIALECT = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def field_to_entity(model: FieldTypeModel) -> FieldDefinition:
    """Map ORM model → domain entity."""
    return FieldDefinition(
        id=model.id,
        name=model.name,
        description=model.description,
        value_kind=ValueKind.parse(model.value_type),
        created_at=model.created_at,
    )


def metadata_to_entity(model: TicketMetadataModel, definition: FieldDefinition) -> MetadataValue:
    """Map a metadata row to a tagged value, reading only the slot of its kind."""
    columns = {column: getattr(model, column) for column in VALUE_KIND_COLUMNS.values()}
    payload = MetadataPayload.from_columns(definition.value_kind, columns)
    # SQLite hands back naive datetimes; values are always stored in UTC.
    if isinstance(payload.value, datetime) and payload.value.tzinfo is None:
        payload = MetadataPayload(payload.kind, payload.value.replace(tzinfo=timezone.utc))
    return MetadataValue(
        id=model.id,
        ticket_id=model.ticket_id,
        definition=definition,
        payload=payload,
        updated_at=model.updated_at,
    )


class SQLAlchemyFieldDefinitionRepository(FieldDefinitionRepository):
    """Implements the FieldDefinitionRepository port using SQLAlchemy."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_all(self) -> list[FieldDefinition]:
        stmt = select(FieldTypeModel).order_by(FieldTypeModel.name)
        result = await self._session.execute(stmt)
        return [field_to_entity(row) for row in result.scalars().all()]

    async def get_by_id(self, field_id: str) -> FieldDefinition | None:
        model = await self._session.get(FieldTypeModel, field_id)
        return field_to_entity(model) if model else None

    async def get_by_name(self, name: str) -> FieldDefinition | None:
        stmt = select(FieldTypeModel).where(
            func.lower(FieldTypeModel.name) == name.strip().lower()
        )
        result = await self._session.execute(stmt)
        model = result.scalars().first()
        return field_to_entity(model) if model else None

    async def create(self, definition: FieldDefinition) -> FieldDefinition:
        model = FieldTypeModel(
            id=definition.id,
            name=definition.name,
            description=definition.description,
            value_type=definition.value_kind.value,
        )
        self._session.add(model)
        await self._session.flush()
        return field_to_entity(model)

    async def delete(self, field_id: str) -> bool:
        result = await self._session.execute(
            delete(FieldTypeModel).where(FieldTypeModel.id == field_id)
        )
        return result.rowcount > 0


class SQLAlchemyMetadataValueRepository(MetadataValueRepository):
    """Implements the MetadataValueRepository port using SQLAlchemy.

    Writes go through INSERT .. ON CONFLICT (ticket_id, field_type_id) so a
    ticket never holds two values for the same field.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    def _insert(self):
        dialect = self._session.get_bind().dialect.name
        try:
            return _INSERT_BY_DIALECT[dialect]
        except KeyError:
            raise NotImplementedError(f"Metadata upsert is not supported on '{dialect}'") from None

    async def upsert(self, ticket_id: str, definition: FieldDefinition, payload: MetadataPayload) -> MetadataValue:
        now = datetime.now(timezone.utc)
        slots = payload.to_columns()
        insert = self._insert()
        stmt = insert(TicketMetadataModel).values(
            id=str(uuid.uuid4()),
            ticket_id=ticket_id,
            field_type_id=definition.id,
            created_at=now,
            updated_at=now,
            **slots,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["ticket_id", "field_type_id"],
            set_={**slots, "updated_at": now},
        )
        await self._session.execute(stmt)

        result = await self._session.execute(
            select(TicketMetadataModel)
            .where(
                TicketMetadataModel.ticket_id == ticket_id,
                TicketMetadataModel.field_type_id == definition.id,
            )
            .execution_options(populate_existing=True)
        )
        return metadata_to_entity(result.scalars().one(), definition)

    async def delete(self, ticket_id: str, field_id: str) -> bool:
        result = await self._session.execute(
            delete(TicketMetadataModel).where(
                TicketMetadataModel.ticket_id == ticket_id,
                TicketMetadataModel.field_type_id == field_id,
            )
        )
        return result.rowcount > 0

    async def list_for_ticket(self, ticket_id: str) -> list[MetadataValue]:
        stmt = (
            select(TicketMetadataModel)
            .join(TicketMetadataModel.field_type)
            .options(contains_eager(TicketMetadataModel.field_type))
            .where(TicketMetadataModel.ticket_id == ticket_id)
            .order_by(FieldTypeModel.name)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return [
            metadata_to_entity(row, field_to_entity(row.field_type))
            for row in result.scalars().all()
        ]

    async def count_for_field(self, field_id: str) -> int:
        stmt = select(func.count(TicketMetadataModel.id)).where(
            TicketMetadataModel.field_type_id == field_id
        )
        return (await self._session.execute(stmt)).scalar_one()
