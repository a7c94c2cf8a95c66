# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Pluggable random source for the simulated sensors.

Every simulator draws exclusively through ``random()`` (uniform in
[0, 1)), so any ``random.Random`` instance works, and tests can feed an
exact sequence through ScriptedRandom.
"""

from __future__ import annotations

from collections import deque
from typing import Iterable, Protocol


class RandomSource(Protocol):
    def random(self) -> float: ...


class ScriptedRandom:
    """Replays a fixed sequence of draws.

    When the script runs out, ``fallback`` is returned forever (or
    IndexError is raised if no fallback was given).
    """

    def __init__(self, values: Iterable[float] = (), fallback: float | None = None) -> None:
        self._values: deque[float] = deque()
        self._fallback = fallback
        self.draws = 0
        self.extend(values)

    def extend(self, values: Iterable[float]) -> None:
        for v in values:
            if not 0.0 <= v < 1.0:
                raise ValueError(f"scripted draw {v} outside [0, 1)")
            self._values.append(v)

    @property
    def remaining(self) -> int:
        return len(self._values)

    def random(self) -> float:
        self.draws += 1
        if self._values:
            return self._values.popleft()
        if self._fallback is None:
            raise IndexError("ScriptedRandom exhausted")
        return self._fallback
