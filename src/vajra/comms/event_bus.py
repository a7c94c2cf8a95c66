# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""EventBus — thread-safe pub/sub for pushing engine events to consumers.

The engine itself is single-threaded, but rendering collaborators may read
from their own threads, so each subscriber gets a bounded queue.  A slow
subscriber drops messages instead of blocking the publisher; drops are
counted so they can be surfaced in diagnostics.

Message shape::

    {"type": "state_changed", "data": {...}}
"""

from __future__ import annotations

import queue
import threading


class EventBus:
    """Simple thread-safe pub/sub for pushing events to subscribers."""

    def __init__(self, maxsize: int = 100) -> None:
        self._lock = threading.Lock()
        self._subscribers: list[queue.Queue] = []
        self._maxsize = maxsize
        self._dropped = 0

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    @property
    def dropped(self) -> int:
        """Messages discarded because a subscriber queue was full."""
        return self._dropped

    def subscribe(self) -> queue.Queue:
        q: queue.Queue = queue.Queue(maxsize=self._maxsize)
        with self._lock:
            self._subscribers.append(q)
        return q

    def unsubscribe(self, q: queue.Queue) -> None:
        with self._lock:
            try:
                self._subscribers.remove(q)
            except ValueError:
                pass

    def publish(self, event_type: str, data: dict | None = None) -> int:
        """Deliver a message to every subscriber.  Returns the delivery count."""
        msg = {"type": event_type}
        if data is not None:
            msg["data"] = data
        delivered = 0
        with self._lock:
            for q in self._subscribers:
                try:
                    q.put_nowait(msg)
                    delivered += 1
                except queue.Full:
                    self._dropped += 1
        return delivered
