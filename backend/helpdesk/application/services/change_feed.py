"""Change feed: in-process broadcaster of row changes.

Subscribers register for one table and an optional equality predicate
(e.g. messages of one ticket) and receive matching RowChange events.

The feed carries only what publishers announce, after their commit. Today
that is message inserts from MessageService; rows removed by cascading
deletes (a ticket or its sender going away) produce no event, so clients
should re-fetch when they navigate rather than rely on DELETE events.
"""

import asyncio
import json
import logging
from collections.abc import AsyncGenerator
from dataclasses import dataclass
from typing import Any

from helpdesk.domain.entities import RowChange, RowPredicate

logger = logging.getLogger(__name__)


@dataclass
class _Subscription:
    table: str
    predicate: RowPredicate | None
    queue: asyncio.Queue

    def wants(self, change: RowChange) -> bool:
        if change.table != self.table:
            return False
        return self.predicate is None or self.predicate.matches(change.row)


class ChangeFeed:
    """Each subscriber owns a bounded asyncio.Queue; a subscriber that falls
    too far behind is disconnected instead of blocking publishers.
    """

    def __init__(self, max_queue_size: int = 100) -> None:
        self._subscriptions: list[_Subscription] = []
        self._max_queue_size = max_queue_size

    async def subscribe(
        self, table: str, predicate: RowPredicate | None = None
    ) -> AsyncGenerator[RowChange, None]:
        """Yield changes on ``table`` matching ``predicate`` until shutdown.

        The subscription is removed when the consumer stops iterating.
        """
        subscription = _Subscription(table, predicate, asyncio.Queue(self._max_queue_size))
        self._subscriptions.append(subscription)
        logger.debug("Subscribed to %s (%s)", table, predicate)
        try:
            while True:
                change = await subscription.queue.get()
                if change is None:
                    break
                yield change
        finally:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

    async def publish(self, table: str, event: str, row: dict[str, Any]) -> int:
        """Deliver a change to every matching subscriber; returns deliveries."""
        change = RowChange(table=table, event=event, row=row)
        delivered = 0
        for subscription in list(self._subscriptions):
            if not subscription.wants(change):
                continue
            try:
                subscription.queue.put_nowait(change)
                delivered += 1
            except asyncio.QueueFull:
                logger.warning("Change feed subscriber on %s is not keeping up; disconnecting", table)
                self._disconnect(subscription)
        return delivered

    def _disconnect(self, subscription: _Subscription) -> None:
        self._subscriptions.remove(subscription)
        while not subscription.queue.empty():
            subscription.queue.get_nowait()
        subscription.queue.put_nowait(None)

    async def shutdown(self) -> None:
        """Disconnect all subscribers."""
        for subscription in list(self._subscriptions):
            self._disconnect(subscription)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    @staticmethod
    def to_sse(change: RowChange) -> str:
        payload = {
            "table": change.table,
            "event": change.event,
            "row": change.row,
            "occurred_at": change.occurred_at.isoformat(),
        }
        return f"event: change\ndata: {json.dumps(payload, default=str)}\n\n"
