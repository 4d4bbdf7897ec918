"""
In-process Server-Sent Events fan-out.

Each connected client gets a bounded queue. ``publish`` pushes an event
into every queue whose metadata passes the filter; ``stream`` turns one
queue into SSE frames with keepalive comments while idle.
"""

import asyncio
import json
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Callable, Dict, Optional

logger = logging.getLogger(__name__)

FilterFn = Callable[[Dict[str, Any]], bool]

QUEUE_SIZE = 100


@dataclass
class Subscription:
    id: str
    meta: Dict[str, Any]
    queue: asyncio.Queue = field(default_factory=lambda: asyncio.Queue(maxsize=QUEUE_SIZE))


def format_event(payload: Dict[str, Any]) -> str:
    return f"data: {json.dumps(payload)}\n\n"


class AlertBroadcaster:
    """
    Delivers published events to subscribed SSE clients.

    Delivery is best effort: a subscriber whose queue is full is dropped,
    and a filter that raises skips that subscriber for the event.
    """

    def __init__(self):
        self._subscribers: Dict[str, Subscription] = {}

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, meta: Optional[Dict[str, Any]] = None) -> Subscription:
        """Register a client and queue its initial ``connected`` event."""
        meta = dict(meta or {})
        subscription = Subscription(id=uuid.uuid4().hex, meta=meta)
        subscription.queue.put_nowait({"type": "connected", "meta": meta})
        self._subscribers[subscription.id] = subscription
        logger.info(f"SSE client {subscription.id} connected (user={meta.get('userId')})")
        return subscription

    def unsubscribe(self, subscription_id: str) -> None:
        if self._subscribers.pop(subscription_id, None) is not None:
            logger.info(f"SSE client {subscription_id} disconnected")

    def publish(
        self,
        channel: str,
        payload: Dict[str, Any],
        filter_fn: Optional[FilterFn] = None,
    ) -> int:
        """
        Fan an event out to matching subscribers.

        Args:
            channel: Channel name, merged into the event as "channel"
            payload: Event body
            filter_fn: Receives subscriber meta, returns True to deliver

        Returns:
            Number of subscribers the event was queued for
        """
        event = {"channel": channel, **payload}
        delivered = 0

        for subscription in list(self._subscribers.values()):
            if filter_fn is not None:
                try:
                    if not filter_fn(subscription.meta):
                        continue
                except Exception as e:
                    logger.warning(f"SSE filter failed for {subscription.id}: {e}")
                    continue

            try:
                subscription.queue.put_nowait(event)
                delivered += 1
            except asyncio.QueueFull:
                logger.warning(f"SSE client {subscription.id} is not reading, dropping it")
                self.unsubscribe(subscription.id)

        return delivered

    async def stream(
        self,
        subscription: Subscription,
        keepalive_seconds: float = 15.0,
    ) -> AsyncIterator[str]:
        """
        Yield SSE frames for one subscriber until the client goes away.
        """
        try:
            while subscription.id in self._subscribers or not subscription.queue.empty():
                try:
                    event = await asyncio.wait_for(subscription.queue.get(), timeout=keepalive_seconds)
                except asyncio.TimeoutError:
                    yield ": keepalive\n\n"
                    continue
                yield format_event(event)
        finally:
            self.unsubscribe(subscription.id)
