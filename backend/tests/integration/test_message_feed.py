"""Message posting and the change feed: events follow the commit."""

import asyncio

import pytest

from helpdesk.application.services import ChangeFeed, MessageService
from helpdesk.application.services.message_service import MESSAGES_TABLE
from helpdesk.domain.entities import RowPredicate, Ticket
from helpdesk.infrastructure.database.repositories import (
    SQLAlchemyMessageRepository,
    SQLAlchemyTicketRepository,
    SQLAlchemyUserRepository,
)


def _service(session, feed: ChangeFeed, commit=None) -> MessageService:
    return MessageService(
        messages=SQLAlchemyMessageRepository(session),
        tickets=SQLAlchemyTicketRepository(session),
        users=SQLAlchemyUserRepository(session),
        change_feed=feed,
        commit=commit or session.commit,
    )


async def _ticket(session) -> Ticket:
    ticket = await SQLAlchemyTicketRepository(session).create(Ticket(title="Printer on fire"))
    await session.commit()
    return ticket


async def _listen(feed: ChangeFeed, ticket_id: str):
    """Start waiting for the next change on a ticket's messages."""
    stream = feed.subscribe(MESSAGES_TABLE, RowPredicate("ticket_id", ticket_id))
    pending = asyncio.ensure_future(stream.__anext__())
    await asyncio.sleep(0)
    assert feed.subscriber_count == 1
    return stream, pending


@pytest.mark.asyncio
async def test_failed_commit_publishes_nothing(session, session_factory):
    feed = ChangeFeed()
    ticket = await _ticket(session)
    stream, pending = await _listen(feed, ticket.id)

    async def failing_commit() -> None:
        raise RuntimeError("database went away")

    with pytest.raises(RuntimeError):
        await _service(session, feed, commit=failing_commit).post_message(ticket.id, "Is anyone there?")
    await session.rollback()
    await asyncio.sleep(0)

    assert not pending.done()
    async with session_factory() as fresh:
        assert await SQLAlchemyMessageRepository(fresh).list_for_ticket(ticket.id) == []

    pending.cancel()
    with pytest.raises(asyncio.CancelledError):
        await pending
    assert feed.subscriber_count == 0


@pytest.mark.asyncio
async def test_event_is_delivered_once_the_message_is_stored(session, session_factory):
    feed = ChangeFeed()
    ticket = await _ticket(session)
    stream, pending = await _listen(feed, ticket.id)

    message = await _service(session, feed).post_message(ticket.id, "Fire is out")
    change = await asyncio.wait_for(pending, timeout=1)

    assert change.event == "INSERT"
    assert change.row["id"] == message.id
    # A subscriber re-fetching on the event sees the committed row.
    async with session_factory() as fresh:
        stored = await SQLAlchemyMessageRepository(fresh).list_for_ticket(ticket.id)
    assert [m.content for m in stored] == ["Fire is out"]

    await stream.aclose()
