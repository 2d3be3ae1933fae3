"""
src/services/broadcaster.py
───────────────────────────
In-process publish/subscribe for telemetry updates.

Each subscriber owns a bounded queue. A subscriber whose queue is full when an
event is published is treated as disconnected and dropped.
"""
from __future__ import annotations

import logging
import queue
import threading
from typing import Any

from config.settings import settings

logger = logging.getLogger(__name__)


class Subscription:
    def __init__(self, maxsize: int):
        self.queue: queue.Queue[dict[str, Any]] = queue.Queue(maxsize=maxsize)

    def get(self, timeout: float | None = None) -> dict[str, Any]:
        """Next event; raises queue.Empty on timeout."""
        return self.queue.get(timeout=timeout)


class TelemetryBroadcaster:
    def __init__(self, queue_size: int = settings.BROADCAST_QUEUE_SIZE):
        self.queue_size = queue_size
        self._subscribers: set[Subscription] = set()
        self._lock = threading.Lock()

    def subscribe(self) -> Subscription:
        """Attach point for a live-update transport (e.g. an SSE stream)."""
        sub = Subscription(self.queue_size)
        with self._lock:
            self._subscribers.add(sub)
        sub.queue.put_nowait({"type": "connected"})
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            self._subscribers.discard(sub)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def publish(self, event: dict[str, Any]) -> int:
        """Deliver `event` to every subscriber. Returns the number reached."""
        with self._lock:
            subscribers = list(self._subscribers)

        delivered = 0
        dropped: list[Subscription] = []
        for sub in subscribers:
            try:
                sub.queue.put_nowait(event)
                delivered += 1
            except queue.Full:
                dropped.append(sub)

        if dropped:
            logger.info("Dropping %d stalled subscriber(s)", len(dropped))
            with self._lock:
                self._subscribers.difference_update(dropped)
        return delivered


broadcaster = TelemetryBroadcaster()
