"""Unit tests for AILog — bounded newest-first reasoning log."""

from __future__ import annotations

import pytest

from vajra.simulation.ai_log import AILog
from vajra.simulation.state import Severity


pytestmark = pytest.mark.unit


def _make_log(now: float = 0.0) -> AILog:
    return AILog(lambda: now)


class TestAdd:
    def test_entry_fields(self):
        log = _make_log(now=12.5)
        entry = log.add("contact", Severity.WARNING)
        assert entry.message == "contact"
        assert entry.severity == Severity.WARNING
        assert entry.timestamp == 12.5
        assert entry.id == "log-1"

    def test_string_severity_accepted(self):
        log = _make_log()
        assert log.add("x", "critical").severity == Severity.CRITICAL

    def test_unknown_severity_rejected(self):
        log = _make_log()
        with pytest.raises(ValueError):
            log.add("x", "panic")

    def test_ids_are_unique(self):
        log = _make_log()
        ids = {log.add(f"m{i}").id for i in range(5)}
        assert len(ids) == 5

    def test_newest_first(self):
        log = _make_log()
        log.add("first")
        log.add("second")
        assert [e.message for e in log.entries] == ["second", "first"]

    def test_mirrored_to_loguru(self, log_messages):
        log = _make_log()
        log.add("GPS lost", Severity.CRITICAL)
        assert "[AI] GPS lost" in log_messages


class TestCapacity:
    def test_capped_at_ten(self):
        log = _make_log()
        for i in range(25):
            log.add(f"m{i}")
        assert len(log) == 10
        assert log.capacity == 10

    def test_keeps_most_recent(self):
        log = _make_log()
        for i in range(15):
            log.add(f"m{i}")
        assert [e.message for e in log.entries] == [f"m{i}" for i in range(14, 4, -1)]

    def test_count_and_clear(self):
        log = _make_log()
        log.add("dup")
        log.add("other")
        log.add("dup")
        assert log.count("dup") == 2
        log.clear()
        assert len(log) == 0
