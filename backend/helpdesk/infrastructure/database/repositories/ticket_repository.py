"""Concrete repository for tickets backed by SQLAlchemy."""

from datetime import date, datetime, time, timedelta, timezone

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from helpdesk.application.interfaces import TicketRepository
from helpdesk.domain.entities import (
    PredicateOperator,
    QueryPredicate,
    Tag,
    Ticket,
    TicketDetail,
    TicketQuery,
    ValueKind,
)
from helpdesk.infrastructure.database.models import (
    FieldTypeModel,
    TicketMetadataModel,
    TicketModel,
    TicketTagModel,
)
from helpdesk.infrastructure.database.repositories.field_definition_repository import (
    field_to_entity,
    metadata_to_entity,
)


def _day_bounds(value: date | datetime) -> tuple[datetime, datetime]:
    day = value.astimezone(timezone.utc).date() if isinstance(value, datetime) else value
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    return start, start + timedelta(days=1)


class SQLAlchemyTicketRepository(TicketRepository):
    """Implements the TicketRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: TicketModel) -> Ticket:
        """Map ORM model → domain entity."""
        return Ticket(
            id=model.id,
            title=model.title,
            description=model.description,
            creator_id=model.creator_id,
            team_id=model.team_id,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _predicate_clause(self, predicate: QueryPredicate):
        """EXISTS clause matching tickets whose metadata satisfies the predicate."""
        column = getattr(TicketMetadataModel, predicate.column)
        match = select(TicketMetadataModel.id).where(
            TicketMetadataModel.ticket_id == TicketModel.id,
            TicketMetadataModel.field_type_id == predicate.field_id,
        )
        if predicate.operator is PredicateOperator.DATE_EQ:
            if predicate.value_kind is ValueKind.TIMESTAMP:
                start, end = _day_bounds(predicate.value)
                match = match.where(column >= start, column < end)
            else:
                day = predicate.value.date() if isinstance(predicate.value, datetime) else predicate.value
                match = match.where(column == day)
        else:
            match = match.where(column == predicate.value)
        return match.exists()

    async def get_by_id(self, ticket_id: str) -> Ticket | None:
        stmt = (
            select(TicketModel)
            .where(TicketModel.id == ticket_id)
            .execution_options(populate_existing=True)
        )
        model = (await self._session.execute(stmt)).scalars().first()
        return self._to_entity(model) if model else None

    async def get_detail(self, ticket_id: str) -> TicketDetail | None:
        stmt = (
            select(TicketModel)
            .where(TicketModel.id == ticket_id)
            .options(
                selectinload(TicketModel.team),
                selectinload(TicketModel.creator),
                selectinload(TicketModel.tags),
            )
            .execution_options(populate_existing=True)
        )
        model = (await self._session.execute(stmt)).scalars().first()
        if model is None:
            return None

        meta_stmt = (
            select(TicketMetadataModel)
            .join(TicketMetadataModel.field_type)
            .options(selectinload(TicketMetadataModel.field_type))
            .where(TicketMetadataModel.ticket_id == ticket_id)
            .order_by(FieldTypeModel.name)
        )
        meta_rows = (await self._session.execute(meta_stmt)).scalars().all()

        return TicketDetail(
            ticket=self._to_entity(model),
            team_name=model.team.name if model.team else None,
            creator_name=model.creator.full_name if model.creator else None,
            tags=[
                Tag(id=tag.id, name=tag.name, type_id=tag.type_id, description=tag.description)
                for tag in sorted(model.tags, key=lambda t: t.name)
            ],
            metadata=[metadata_to_entity(row, field_to_entity(row.field_type)) for row in meta_rows],
        )

    async def search(self, query: TicketQuery, *, skip: int = 0, limit: int = 100) -> list[Ticket]:
        stmt = select(TicketModel)
        for predicate in query.predicates:
            stmt = stmt.where(self._predicate_clause(predicate))
        for tag_id in query.tag_ids:
            tagged = select(TicketTagModel.ticket_id).where(
                TicketTagModel.ticket_id == TicketModel.id,
                TicketTagModel.tag_id == tag_id,
            )
            stmt = stmt.where(tagged.exists())
        if query.team_id is not None:
            stmt = stmt.where(TicketModel.team_id == query.team_id)
        stmt = stmt.order_by(TicketModel.created_at.desc()).offset(skip).limit(limit)
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, ticket: Ticket) -> Ticket:
        model = TicketModel(
            id=ticket.id,
            title=ticket.title,
            description=ticket.description,
            creator_id=ticket.creator_id,
            team_id=ticket.team_id,
            created_at=ticket.created_at,
            updated_at=ticket.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def set_team(self, ticket_id: str, team_id: str | None) -> Ticket | None:
        model = await self._session.get(TicketModel, ticket_id)
        if model is None:
            return None
        model.team_id = team_id
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, ticket_id: str) -> bool:
        result = await self._session.execute(delete(TicketModel).where(TicketModel.id == ticket_id))
        return result.rowcount > 0

    async def delete_many(self, ticket_ids: list[str]) -> int:
        if not ticket_ids:
            return 0
        result = await self._session.execute(
            delete(TicketModel)
            .where(TicketModel.id.in_(ticket_ids))
        )
        return result.rowcount

    async def move_many(self, ticket_ids: list[str], team_id: str | None) -> int:
        if not ticket_ids:
            return 0
        result = await self._session.execute(
            update(TicketModel)
            .where(TicketModel.id.in_(ticket_ids))
            .values(team_id=team_id, updated_at=datetime.now(timezone.utc))
        )
        return result.rowcount

    async def add_tag(self, ticket_id: str, tag_id: str) -> None:
        existing = await self._session.get(TicketTagModel, (ticket_id, tag_id))
        if existing is None:
            self._session.add(TicketTagModel(ticket_id=ticket_id, tag_id=tag_id))
            await self._session.flush()

    async def remove_tag(self, ticket_id: str, tag_id: str) -> bool:
        result = await self._session.execute(
            delete(TicketTagModel).where(
                TicketTagModel.ticket_id == ticket_id,
                TicketTagModel.tag_id == tag_id,
            )
        )
        return result.rowcount > 0
