# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""AILog -- bounded, newest-first reasoning log fed by every simulator.

Each entry is also mirrored to loguru so a headless run leaves a trace.
"""

from __future__ import annotations

import itertools
from collections import deque
from typing import Callable

from loguru import logger

from .state import MAX_LOG_ENTRIES, LogEntry, Severity

_LOGURU_LEVEL = {
    Severity.INFO: "INFO",
    Severity.WARNING: "WARNING",
    Severity.CRITICAL: "CRITICAL",
}


class AILog:
    """Append-only ring of LogEntry records, newest first."""

    def __init__(self, clock: Callable[[], float], capacity: int = MAX_LOG_ENTRIES) -> None:
        self._clock = clock
        self._entries: deque[LogEntry] = deque(maxlen=capacity)
        self._ids = itertools.count(1)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen

    @property
    def entries(self) -> list[LogEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, message: str, severity: Severity | str = Severity.INFO) -> LogEntry:
        """Prepend a new entry; the oldest one falls off past capacity."""
        severity = Severity(severity)
        entry = LogEntry(
            id=f"log-{next(self._ids)}",
            message=message,
            timestamp=self._clock(),
            severity=severity,
        )
        self._entries.appendleft(entry)
        logger.log(_LOGURU_LEVEL[severity], "[AI] {}", message)
        return entry

    def count(self, message: str) -> int:
        """How many retained entries carry exactly *message*."""
        return sum(1 for e in self._entries if e.message == message)

    def clear(self) -> None:
        self._entries.clear()
