"""
Notification Hub - In-memory pub/sub for live record events (SSE).
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, AsyncIterator, Dict, List, Optional

logger = logging.getLogger(__name__)

# Bounded queue size to prevent unbounded memory growth with slow consumers
DEFAULT_QUEUE_MAXSIZE = 1000

# Queued by Subscription.cancel() to wake a waiting consumer
_CLOSED = object()


class SubscriptionClosed(RuntimeError):
    """Raised when reading from a cancelled subscription."""


def _put_dropping_oldest(queue: asyncio.Queue, item: Any) -> bool:
    """Enqueue without blocking, evicting the oldest item if full.

    Returns False if an item had to be evicted.
    """
    try:
        queue.put_nowait(item)
        return True
    except asyncio.QueueFull:
        pass
    try:
        queue.get_nowait()
    except asyncio.QueueEmpty:
        pass
    queue.put_nowait(item)
    return False


class Subscription:
    """
    Handle for one listener registration on a topic.

    Iterate it (``async for``) to receive events published after registration.
    The iteration never ends on its own; ``cancel()`` (or leaving the
    ``async with`` block) deregisters it and ends any pending iteration,
    including one waiting in another task.
    """

    def __init__(self, hub: "NotificationHub", topic: str, queue: asyncio.Queue) -> None:
        self._hub = hub
        self.topic = topic
        self.queue = queue
        self.cancelled = False

    def _check(self, item: Any) -> Any:
        if item is _CLOSED:
            raise SubscriptionClosed(f"Subscription to {self.topic} is cancelled")
        return item

    async def get(self) -> Any:
        """Wait for the next event. Raises SubscriptionClosed once cancelled."""
        if self.cancelled and self.queue.empty():
            raise SubscriptionClosed(f"Subscription to {self.topic} is cancelled")
        return self._check(await self.queue.get())

    def get_nowait(self) -> Any:
        """Return the next pending event, raises asyncio.QueueEmpty if none."""
        if self.cancelled:
            raise SubscriptionClosed(f"Subscription to {self.topic} is cancelled")
        return self._check(self.queue.get_nowait())

    async def cancel(self) -> None:
        """Deregister from the hub. Safe to call more than once."""
        if self.cancelled:
            return
        self.cancelled = True
        await self._hub.unsubscribe(self.topic, self.queue)
        # Pending events are discarded; only the close marker remains
        while not self.queue.empty():
            self.queue.get_nowait()
        _put_dropping_oldest(self.queue, _CLOSED)

    def __aiter__(self) -> "Subscription":
        return self

    async def __anext__(self) -> Any:
        try:
            return await self.get()
        except SubscriptionClosed:
            raise StopAsyncIteration from None

    async def __aenter__(self) -> "Subscription":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.cancel()


class NotificationHub:
    """Per-topic listener queues for live streaming with bounded memory."""

    def __init__(self, queue_maxsize: int = DEFAULT_QUEUE_MAXSIZE) -> None:
        self._listeners: Dict[str, List[asyncio.Queue]] = {}
        self._lock = asyncio.Lock()
        self._queue_maxsize = queue_maxsize

    async def subscribe(self, topic: str) -> Subscription:
        """
        Register a new listener on a topic.

        Only events published after this call are delivered to it.
        """
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._queue_maxsize)
        async with self._lock:
            self._listeners.setdefault(topic, []).append(queue)
            count = len(self._listeners[topic])

        logger.info(f"NotificationHub: Listener added on {topic} (total: {count})")
        return Subscription(self, topic, queue)

    async def unsubscribe(self, topic: str, queue: asyncio.Queue) -> None:
        """Remove a listener queue; drop the topic once it has none."""
        async with self._lock:
            queues = self._listeners.get(topic, [])
            if queue in queues:
                queues.remove(queue)
            if not queues:
                self._listeners.pop(topic, None)
            remaining = len(queues)

        logger.info(f"NotificationHub: Listener removed from {topic} (remaining: {remaining})")

    async def listen(self, topic: str) -> AsyncIterator[Any]:
        """
        Lazily subscribe and yield events until the consumer stops.

        Registration happens on first iteration; closing the generator
        (or cancelling the consuming task) deregisters the listener.
        """
        subscription = await self.subscribe(topic)
        try:
            async for event in subscription:
                yield event
        finally:
            await subscription.cancel()

    def subscriber_count(self, topic: Optional[str] = None) -> int:
        """Number of listeners on a topic, or across all topics."""
        if topic is not None:
            return len(self._listeners.get(topic, []))
        return sum(len(queues) for queues in self._listeners.values())

    def publish(self, topic: str, payload: Any) -> None:
        """
        Deliver an event to every listener of a topic.

        With no listeners the event is discarded. A listener whose queue is
        full loses its oldest pending event instead of blocking the publisher.
        """
        for queue in self._listeners.get(topic, ()):
            if not _put_dropping_oldest(queue, payload):
                logger.warning(
                    f"NotificationHub: Listener queue full on {topic}, dropped oldest event"
                )
