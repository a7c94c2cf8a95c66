# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""JammingLifecycle -- clear/jammed signal state with timed auto-recovery.

  clear  --trigger()-->  jammed   is_jammed=True, signal forced to VBN
  jammed --10s------->   clear    is_jammed=False, signal left on VBN

The operator has to toggle back to GPS by hand.  Triggering while already
jammed does nothing, so there is never more than one pending auto-clear.
"""

from __future__ import annotations

import enum
from typing import Callable

from loguru import logger

from .ai_log import AILog
from .clock import Scheduler
from .state import Severity, SignalStatus, TacticalState

JAM_CLEAR_TASK = "jam-clear"
JAM_CLEAR_DELAY = 10.0


class JamState(str, enum.Enum):
    CLEAR = "clear"
    JAMMED = "jammed"


class JammingLifecycle:
    """One-shot jamming state machine driven by the shared Scheduler."""

    def __init__(
        self,
        scheduler: Scheduler,
        log: AILog,
        clear_delay: float = JAM_CLEAR_DELAY,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._log = log
        self.clear_delay = clear_delay
        self._on_change = on_change
        self._state = JamState.CLEAR
        self.cleared_at: float | None = None

    @property
    def state(self) -> JamState:
        return self._state

    @property
    def clear_deadline(self) -> float | None:
        return self._scheduler.deadline_of(JAM_CLEAR_TASK)

    def trigger(self, state: TacticalState) -> bool:
        """Enter the jammed state.  Returns False if already jammed."""
        if self._state == JamState.JAMMED:
            logger.debug("Jamming already active, ignoring trigger")
            return False
        self._state = JamState.JAMMED
        state.is_jammed = True
        state.signal_status = SignalStatus.VBN
        self._log.add(
            "SIGNAL JAMMING DETECTED - Switching to Vision-Based Navigation",
            Severity.CRITICAL,
        )
        self._scheduler.call_later(
            JAM_CLEAR_TASK, self.clear_delay, lambda: self._auto_clear(state)
        )
        return True

    def _auto_clear(self, state: TacticalState) -> None:
        if self._state != JamState.JAMMED:
            return
        self._state = JamState.CLEAR
        self.cleared_at = self._scheduler.now
        state.is_jammed = False
        self._log.add("Jamming cleared - GPS signal restored", Severity.INFO)
        if self._on_change is not None:
            self._on_change()

    def reset(self, state: TacticalState | None = None) -> None:
        """Drop any pending auto-clear and mark the signal unjammed (teardown)."""
        self._scheduler.cancel(JAM_CLEAR_TASK)
        self._state = JamState.CLEAR
        if state is not None:
            state.is_jammed = False
