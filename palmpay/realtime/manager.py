"""Per-account event fan-out with owned subscription handles."""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Dict, Set

logger = logging.getLogger(__name__)

EVENT_ACCOUNT = "account"
EVENT_NOTIFICATION = "notification"


@dataclass(slots=True, frozen=True)
class RealtimeEvent:
    type: str
    data: Dict[str, Any] = field(default_factory=dict)

    def to_message(self) -> Dict[str, Any]:
        return {"type": self.type, "data": self.data}


class Subscription:
    """Bounded queue of events for one account, released by its owner."""

    def __init__(self, account_id: str, queue_size: int) -> None:
        self.account_id = account_id
        self._queue: asyncio.Queue[RealtimeEvent] = asyncio.Queue(maxsize=queue_size)
        self.closed = False
        self.dropped = 0

    def offer(self, event: RealtimeEvent) -> None:
        if self.closed:
            return
        if self._queue.full():
            self._queue.get_nowait()
            self.dropped += 1
            logger.warning("Subscription for %s is full, dropped oldest event", self.account_id)
        self._queue.put_nowait(event)

    async def get(self) -> RealtimeEvent:
        return await self._queue.get()

    def get_nowait(self) -> RealtimeEvent | None:
        try:
            return self._queue.get_nowait()
        except asyncio.QueueEmpty:
            return None

    def pending(self) -> int:
        return self._queue.qsize()

    def __aiter__(self) -> AsyncIterator[RealtimeEvent]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[RealtimeEvent]:
        while not self.closed:
            yield await self._queue.get()


class SubscriptionManager:
    def __init__(self, queue_size: int = 100) -> None:
        self.queue_size = queue_size
        self._subscriptions: Dict[str, Set[Subscription]] = defaultdict(set)

    @asynccontextmanager
    async def subscribe(self, account_id: str) -> AsyncIterator[Subscription]:
        subscription = Subscription(account_id, self.queue_size)
        self._subscriptions[account_id].add(subscription)
        logger.info("Account %s subscribed to realtime events", account_id)
        try:
            yield subscription
        finally:
            subscription.closed = True
            subscribers = self._subscriptions.get(account_id)
            if subscribers is not None:
                subscribers.discard(subscription)
                if not subscribers:
                    del self._subscriptions[account_id]
            logger.info("Account %s subscription released", account_id)

    def publish(self, account_id: str, event: RealtimeEvent) -> int:
        """Queue ``event`` for every live subscription of ``account_id``; never blocks."""
        subscribers = list(self._subscriptions.get(account_id, ()))
        for subscription in subscribers:
            subscription.offer(event)
        return len(subscribers)

    def subscriber_count(self, account_id: str) -> int:
        return len(self._subscriptions.get(account_id, ()))

    def is_online(self, account_id: str) -> bool:
        return self.subscriber_count(account_id) > 0
