"""Application service for ticket conversations."""

from collections.abc import Awaitable, Callable

from helpdesk.application.interfaces import MessageRepository, TicketRepository, UserRepository
from helpdesk.application.services.change_feed import ChangeFeed
from helpdesk.domain.entities import TicketMessage
from helpdesk.domain.exceptions import EntityNotFoundError

MESSAGES_TABLE = "ticket_messages"

Commit = Callable[[], Awaitable[None]]


class MessageService:
    """Lists and posts messages.

    A new message is committed before it is published on the change feed,
    so subscribers that re-fetch always find the row. Only inserts are
    published; messages removed by a ticket or user cascade are not announced.
    """

    def __init__(
        self,
        messages: MessageRepository,
        tickets: TicketRepository,
        users: UserRepository,
        change_feed: ChangeFeed,
        commit: Commit,
    ):
        self._messages = messages
        self._tickets = tickets
        self._users = users
        self._change_feed = change_feed
        self._commit = commit

    async def _require_ticket(self, ticket_id: str) -> None:
        if await self._tickets.get_by_id(ticket_id) is None:
            raise EntityNotFoundError("Ticket", ticket_id)

    async def list_messages(self, ticket_id: str) -> list[TicketMessage]:
        await self._require_ticket(ticket_id)
        return await self._messages.list_for_ticket(ticket_id)

    async def post_message(self, ticket_id: str, content: str, sender_id: str | None = None) -> TicketMessage:
        if not content.strip():
            raise ValueError("Message content must not be empty")
        await self._require_ticket(ticket_id)
        if sender_id and await self._users.get_by_id(sender_id) is None:
            raise EntityNotFoundError("User", sender_id)

        message = await self._messages.create(
            TicketMessage(ticket_id=ticket_id, sender_id=sender_id, content=content)
        )
        await self._commit()
        await self._change_feed.publish(
            MESSAGES_TABLE,
            "INSERT",
            {
                "id": message.id,
                "ticket_id": message.ticket_id,
                "sender_id": message.sender_id,
                "sender_name": message.sender_name,
                "content": message.content,
                "created_at": message.created_at.isoformat(),
            },
        )
        return message
