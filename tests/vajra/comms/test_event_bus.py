"""Unit tests for EventBus — pub/sub with bounded subscriber queues."""

from __future__ import annotations

import queue
import threading

import pytest

from vajra.comms.event_bus import EventBus


pytestmark = pytest.mark.unit


class TestPublish:
    def test_message_shape(self):
        bus = EventBus()
        q = bus.subscribe()
        bus.publish("state_changed", {"is_jammed": True})
        assert q.get_nowait() == {"type": "state_changed", "data": {"is_jammed": True}}

    def test_no_data_key_when_none(self):
        bus = EventBus()
        q = bus.subscribe()
        bus.publish("ping")
        assert q.get_nowait() == {"type": "ping"}

    def test_fan_out(self):
        bus = EventBus()
        queues = [bus.subscribe() for _ in range(3)]
        assert bus.publish("x") == 3
        assert all(q.qsize() == 1 for q in queues)

    def test_no_subscribers(self):
        assert EventBus().publish("x") == 0


class TestSubscription:
    def test_unsubscribe(self):
        bus = EventBus()
        q = bus.subscribe()
        bus.unsubscribe(q)
        bus.publish("x")
        assert q.empty()
        assert bus.subscriber_count == 0

    def test_unsubscribe_unknown_is_safe(self):
        EventBus().unsubscribe(queue.Queue())

    def test_full_queue_drops(self):
        bus = EventBus(maxsize=2)
        q = bus.subscribe()
        for i in range(5):
            bus.publish("x", {"i": i})
        assert q.qsize() == 2
        assert bus.dropped == 3
        assert q.get_nowait()["data"]["i"] == 0

    def test_cross_thread_consumer(self):
        bus = EventBus()
        q = bus.subscribe()
        received = []

        def consume():
            received.append(q.get(timeout=2.0))

        t = threading.Thread(target=consume)
        t.start()
        bus.publish("deadman_triggered", {"timestamp": 30.0})
        t.join(timeout=2.0)
        assert received[0]["type"] == "deadman_triggered"
