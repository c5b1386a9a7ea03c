"""
Notification broker: fan-out of collection snapshots to live subscribers.

Manages subscriber registration and best-effort delivery. Each subscriber
owns a small bounded queue; a publish never waits on any of them. A
subscriber whose queue is full when a publish arrives is evicted on the
spot: it cannot keep up, and blocking the publisher would stall the
mutation path for everyone.

Delivery is at-most-once with no replay. A subscriber sees exactly the
publishes made while it was registered, in publish order.
"""

import asyncio
import itertools
import json
import logging
import threading
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, List, Optional

from libs.tracker.models import Item, dump_items

logger = logging.getLogger(__name__)

DEFAULT_BUFFER = 4
DEFAULT_KEEPALIVE_SECONDS = 30.0
UPDATE_EVENT_TYPE = "update"


def build_update_event(items: List[Item]) -> str:
    """Wire payload carrying the full collection (never a diff)."""
    return json.dumps({"type": UPDATE_EVENT_TYPE, "items": dump_items(items)})


class Subscription:
    """
    One live subscriber: its queue plus the delivery loop that drains it.

    Created by ``NotificationBroker.subscribe``; do not construct directly.
    """

    def __init__(
        self,
        broker: "NotificationBroker",
        subscription_id: int,
        buffer_size: int,
        keepalive_interval: float,
    ):
        self.id = subscription_id
        self.queue: asyncio.Queue = asyncio.Queue(maxsize=buffer_size)
        self.keepalive_interval = keepalive_interval
        self._broker = broker
        self._closed = asyncio.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def close(self) -> None:
        """Stop the delivery loop at its next wake-up."""
        self._closed.set()

    async def events(
        self,
        is_disconnected: Optional[Callable[[], Awaitable[bool]]] = None,
    ) -> AsyncIterator[Dict[str, Any]]:
        """
        Delivery loop for this subscriber, as SSE-shaped dicts.

        Races the next queued payload, the keep-alive deadline and the
        subscription being closed. Keep-alives run on a fixed cadence that
        publishes do not reset. Every yielded dict is one complete frame:
        ``{"data": ...}`` for an update, ``{"comment": ...}`` otherwise.

        The subscription is deregistered however the loop ends, including
        cancellation when the client goes away.

        Args:
            is_disconnected: Optional probe, checked on every keep-alive tick
        """
        loop = asyncio.get_running_loop()
        next_keepalive = loop.time() + self.keepalive_interval
        closed_wait = asyncio.ensure_future(self._closed.wait())
        pending_get: Optional[asyncio.Future] = None

        try:
            yield {"comment": "connected"}

            while True:
                pending_get = asyncio.ensure_future(self.queue.get())
                timeout = max(0.0, next_keepalive - loop.time())
                done, _ = await asyncio.wait(
                    {pending_get, closed_wait},
                    timeout=timeout,
                    return_when=asyncio.FIRST_COMPLETED,
                )

                if pending_get in done:
                    payload = pending_get.result()
                    pending_get = None
                    yield {"data": payload}
                    continue

                pending_get.cancel()
                pending_get = None

                if closed_wait in done:
                    logger.info(f"[Broker] Subscriber {self.id} closed")
                    return

                # Keep-alive deadline reached
                if is_disconnected is not None and await is_disconnected():
                    logger.info(f"[Broker] Subscriber {self.id} disconnected")
                    return
                next_keepalive = loop.time() + self.keepalive_interval
                yield {"comment": "keep-alive"}
        finally:
            if pending_get is not None:
                pending_get.cancel()
            closed_wait.cancel()
            self._broker.unsubscribe(self.id)


class NotificationBroker:
    """
    Registry of live subscriptions with non-blocking broadcast.

    The registry has its own lock, independent of the item store, so a slow
    subscriber can never hold up a mutation. ``publish`` must be called from
    the event loop that owns the subscriber queues.
    """

    def __init__(
        self,
        buffer_size: int = DEFAULT_BUFFER,
        keepalive_interval: float = DEFAULT_KEEPALIVE_SECONDS,
    ):
        self.buffer_size = buffer_size
        self.keepalive_interval = keepalive_interval
        self._subscriptions: Dict[int, Subscription] = {}
        self._ids = itertools.count()
        self._lock = threading.Lock()

    def subscribe(self) -> Subscription:
        """Register a new subscriber with an empty bounded queue."""
        with self._lock:
            subscription = Subscription(
                self, next(self._ids), self.buffer_size, self.keepalive_interval
            )
            self._subscriptions[subscription.id] = subscription
            total = len(self._subscriptions)
        logger.info(f"[Broker] Subscriber {subscription.id} connected (total: {total})")
        return subscription

    def unsubscribe(self, subscription_id: int) -> None:
        """Deregister a subscriber. Unknown ids are ignored."""
        with self._lock:
            removed = self._subscriptions.pop(subscription_id, None)
            total = len(self._subscriptions)
        if removed is not None:
            logger.info(f"[Broker] Subscriber {subscription_id} removed (total: {total})")

    def publish(self, payload: str) -> int:
        """
        Offer ``payload`` to every subscriber without waiting.

        Subscribers whose queue is already full are evicted and their
        delivery loop is told to stop.

        Returns:
            Number of subscribers the payload was queued for
        """
        delivered = 0
        evicted: List[Subscription] = []
        with self._lock:
            for subscription_id, subscription in list(self._subscriptions.items()):
                try:
                    subscription.queue.put_nowait(payload)
                    delivered += 1
                except asyncio.QueueFull:
                    del self._subscriptions[subscription_id]
                    evicted.append(subscription)

        for subscription in evicted:
            subscription.close()
            logger.debug(f"[Broker] Evicted subscriber {subscription.id} (buffer full)")

        return delivered

    def publish_items(self, items: List[Item]) -> int:
        """Broadcast the full collection as an update event."""
        return self.publish(build_update_event(items))

    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def close_all(self) -> None:
        """Close every live subscription (used at shutdown)."""
        with self._lock:
            subscriptions = list(self._subscriptions.values())
            self._subscriptions.clear()
        for subscription in subscriptions:
            subscription.close()
