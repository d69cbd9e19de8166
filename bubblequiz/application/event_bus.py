"""Publish/subscribe channel between the game core and its host.

One bus is built per process and handed to whoever needs it. Delivery is
synchronous and in subscription order; subscriptions live as long as the bus.
"""
import logging
from collections import defaultdict
from typing import Callable, Dict, List

log = logging.getLogger("bubblequiz.bus")

PHASE_READY = "phase-ready"
OVERLAY_REQUESTED = "overlay-requested"

Handler = Callable[..., None]


class EventBus:
    """Topic-keyed listeners. Publishing to a topic nobody listens to does nothing."""

    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = defaultdict(list)

    def subscribe(self, topic: str, handler: Handler) -> Handler:
        if not topic:
            raise ValueError("Topic cannot be empty")
        self._subscribers[topic].append(handler)
        return handler

    def publish(self, topic: str, *args) -> int:
        """Deliver to every current listener. Returns how many were called."""
        # Listeners added while delivering wait for the next publish.
        handlers = list(self._subscribers.get(topic, ()))
        for handler in handlers:
            try:
                handler(*args)
            except Exception:
                # A broken listener must never break game flow.
                log.exception("Listener %r failed on topic %r", handler, topic)
        return len(handlers)

    def subscriber_count(self, topic: str) -> int:
        return len(self._subscribers.get(topic, ()))

    def topics(self) -> List[str]:
        return [t for t, handlers in self._subscribers.items() if handlers]
