"""Concrete repository for ticket messages backed by SQLAlchemy."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from helpdesk.application.interfaces import MessageRepository
from helpdesk.domain.entities import TicketMessage
from helpdesk.infrastructure.database.models import TicketMessageModel, UserModel


class SQLAlchemyMessageRepository(MessageRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: TicketMessageModel, sender_name: str | None) -> TicketMessage:
        return TicketMessage(
            id=model.id,
            ticket_id=model.ticket_id,
            sender_id=model.sender_id,
            sender_name=sender_name,
            content=model.content,
            created_at=model.created_at,
        )

    async def list_for_ticket(self, ticket_id: str) -> list[TicketMessage]:
        stmt = (
            select(TicketMessageModel)
            .where(TicketMessageModel.ticket_id == ticket_id)
            .options(selectinload(TicketMessageModel.sender))
            .order_by(TicketMessageModel.created_at, TicketMessageModel.id)
        )
        result = await self._session.execute(stmt)
        return [
            self._to_entity(row, row.sender.full_name if row.sender else None)
            for row in result.scalars().all()
        ]

    async def create(self, message: TicketMessage) -> TicketMessage:
        model = TicketMessageModel(
            id=message.id,
            ticket_id=message.ticket_id,
            sender_id=message.sender_id,
            content=message.content,
            created_at=message.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        sender_name = None
        if model.sender_id:
            sender = await self._session.get(UserModel, model.sender_id)
            sender_name = sender.full_name if sender else None
        return self._to_entity(model, sender_name)
