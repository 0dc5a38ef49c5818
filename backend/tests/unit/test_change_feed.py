"""Unit tests for the in-process ChangeFeed."""

import asyncio
import json

import pytest

from helpdesk.application.services import ChangeFeed
from helpdesk.domain.entities import RowChange, RowPredicate


async def _collect(feed: ChangeFeed, table: str, predicate: RowPredicate | None, out: list[RowChange]) -> None:
    async for change in feed.subscribe(table, predicate):
        out.append(change)


@pytest.mark.asyncio
async def test_subscriber_only_receives_matching_rows():
    feed = ChangeFeed()
    received: list[RowChange] = []
    task = asyncio.create_task(_collect(feed, "ticket_messages", RowPredicate("ticket_id", "t1"), received))
    await asyncio.sleep(0)

    assert await feed.publish("ticket_messages", "INSERT", {"id": "m1", "ticket_id": "t1"}) == 1
    assert await feed.publish("ticket_messages", "INSERT", {"id": "m2", "ticket_id": "t2"}) == 0
    assert await feed.publish("tickets", "INSERT", {"id": "t1", "ticket_id": "t1"}) == 0
    await asyncio.sleep(0)
    await feed.shutdown()
    await task

    assert [c.row["id"] for c in received] == ["m1"]
    assert feed.subscriber_count == 0


@pytest.mark.asyncio
async def test_slow_subscriber_is_disconnected():
    feed = ChangeFeed(max_queue_size=2)
    received: list[RowChange] = []
    task = asyncio.create_task(_collect(feed, "ticket_messages", None, received))
    await asyncio.sleep(0)

    delivered = [await feed.publish("ticket_messages", "INSERT", {"id": f"m{i}"}) for i in range(3)]
    await asyncio.wait_for(task, timeout=1)

    assert delivered == [1, 1, 0]
    # Undelivered changes are dropped with the subscriber.
    assert received == []
    assert feed.subscriber_count == 0


def test_to_sse_formats_a_change_event():
    change = RowChange(table="ticket_messages", event="INSERT", row={"id": "m1", "ticket_id": "t1"})

    frame = ChangeFeed.to_sse(change)

    assert frame.startswith("event: change\ndata: ")
    assert frame.endswith("\n\n")
    payload = json.loads(frame.split("data: ", 1)[1])
    assert payload["row"] == {"id": "m1", "ticket_id": "t1"}
    assert payload["event"] == "INSERT"
