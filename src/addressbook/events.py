"""In-process publish/subscribe channel for live GraphQL subscriptions."""

from __future__ import annotations

import asyncio
from collections import defaultdict
from collections.abc import AsyncIterator
from typing import Any

from .logging import get_logger

logger = get_logger(__name__)

PERSON_ADDED = "PERSON_ADDED"


class EventBus:
    """Fan out published payloads to every live subscriber of a topic.

    Publishing enqueues onto each subscriber's unbounded queue before
    returning, so each subscriber observes payloads in publish order.
    Subscribers only see events published after they subscribed.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, set[asyncio.Queue[Any]]] = defaultdict(set)

    def publish(self, topic: str, payload: Any) -> int:
        """Deliver ``payload`` to current subscribers; returns how many received it."""
        queues = list(self._subscribers.get(topic, ()))
        for queue in queues:
            queue.put_nowait(payload)

        logger.debug("Event published", topic=topic, subscribers=len(queues))
        return len(queues)

    async def subscribe(self, topic: str) -> AsyncIterator[Any]:
        """Yield payloads published to ``topic`` until the iterator is closed."""
        queue: asyncio.Queue[Any] = asyncio.Queue()
        self._subscribers[topic].add(queue)
        logger.info("Subscribed to topic", topic=topic, subscribers=len(self._subscribers[topic]))
        try:
            while True:
                yield await queue.get()
        finally:
            self._subscribers[topic].discard(queue)
            if not self._subscribers[topic]:
                del self._subscribers[topic]
            logger.info("Unsubscribed from topic", topic=topic)

    def subscriber_count(self, topic: str) -> int:
        return len(self._subscribers.get(topic, ()))
