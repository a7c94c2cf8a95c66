# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Scheduler — named periodic and one-shot tasks on a logical clock.

Every timer in the engine goes through one Scheduler so teardown is a
single ``cancel_all()`` and tests can fast-forward time with ``advance()``
instead of sleeping.

Time model:
  - ``now`` is logical seconds, starting at ``start`` (default 0.0).
  - ``advance(dt)`` fires every task whose deadline falls inside the
    window, in deadline order (ties broken by registration order), moving
    ``now`` to each deadline before its callback runs.
  - ``run()`` is the real-time driver: it sleeps and advances by the
    measured wall-clock delta until stopped.

Tasks are keyed by name.  Registering a name that is already scheduled
replaces the old task, so a self-rescheduling one-shot never ends up with
two live copies.
"""

from __future__ import annotations

import itertools
import time
from dataclasses import dataclass
from typing import Callable

from loguru import logger


@dataclass
class ScheduledTask:
    """A pending timer owned by the Scheduler."""

    name: str
    deadline: float
    callback: Callable[[], None]
    interval: float | None = None  # None = one-shot
    seq: int = 0

    @property
    def periodic(self) -> bool:
        return self.interval is not None


class Scheduler:
    """Single-threaded timer facility driving every simulator."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._tasks: dict[str, ScheduledTask] = {}
        self._seq = itertools.count()
        self._running = False
        self.fired = 0

    @property
    def now(self) -> float:
        return self._now

    @property
    def task_names(self) -> list[str]:
        return sorted(self._tasks)

    @property
    def next_deadline(self) -> float | None:
        task = self._next_task()
        return task.deadline if task is not None else None

    def has_task(self, name: str) -> bool:
        return name in self._tasks

    def deadline_of(self, name: str) -> float | None:
        task = self._tasks.get(name)
        return task.deadline if task is not None else None

    # -- Registration -------------------------------------------------------

    def call_every(
        self, name: str, interval: float, callback: Callable[[], None]
    ) -> ScheduledTask:
        """Run *callback* every *interval* seconds, first at now + interval."""
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        return self._register(name, self._now + interval, callback, interval)

    def call_later(
        self, name: str, delay: float, callback: Callable[[], None]
    ) -> ScheduledTask:
        """Run *callback* once, *delay* seconds from now."""
        if delay < 0:
            raise ValueError(f"delay must not be negative, got {delay}")
        return self._register(name, self._now + delay, callback, None)

    def _register(
        self,
        name: str,
        deadline: float,
        callback: Callable[[], None],
        interval: float | None,
    ) -> ScheduledTask:
        if name in self._tasks:
            logger.debug("Replacing scheduled task {}", name)
        task = ScheduledTask(
            name=name,
            deadline=deadline,
            callback=callback,
            interval=interval,
            seq=next(self._seq),
        )
        self._tasks[name] = task
        return task

    def cancel(self, name: str) -> bool:
        """Remove a task.  Safe to call for unknown or already-fired names."""
        return self._tasks.pop(name, None) is not None

    def cancel_all(self) -> None:
        self._tasks.clear()

    # -- Driving ------------------------------------------------------------

    def _next_task(self) -> ScheduledTask | None:
        if not self._tasks:
            return None
        return min(self._tasks.values(), key=lambda t: (t.deadline, t.seq))

    def _fire(self, task: ScheduledTask) -> None:
        self._now = max(self._now, task.deadline)
        if task.periodic:
            task.deadline += task.interval
            task.seq = next(self._seq)
        elif self._tasks.get(task.name) is task:
            # Dropped before the callback so it can re-register the same name
            del self._tasks[task.name]
        self.fired += 1
        try:
            task.callback()
        except Exception:
            logger.exception("Scheduled task {} failed", task.name)

    def advance(self, seconds: float) -> int:
        """Move logical time forward, firing every task that comes due.

        Returns the number of callbacks fired.
        """
        if seconds < 0:
            raise ValueError(f"cannot advance by negative time {seconds}")
        target = self._now + seconds
        count = 0
        while True:
            task = self._next_task()
            if task is None or task.deadline > target:
                break
            self._fire(task)
            count += 1
        self._now = target
        return count

    def step(self) -> str | None:
        """Jump to the next deadline and fire that single task."""
        task = self._next_task()
        if task is None:
            return None
        self._fire(task)
        return task.name

    def run(
        self,
        duration: float | None = None,
        resolution: float = 0.1,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Drive the scheduler against the wall clock until ``stop()``.

        If *duration* is given the loop also ends after that much logical time.
        """
        self._running = True
        end = self._now + duration if duration is not None else None
        last = clock()
        try:
            while self._running:
                sleep(resolution)
                current = clock()
                delta = max(0.0, current - last)
                last = current
                if end is not None:
                    delta = min(delta, end - self._now)
                self.advance(delta)
                if end is not None and self._now >= end:
                    break
        finally:
            self._running = False

    def stop(self) -> None:
        self._running = False
