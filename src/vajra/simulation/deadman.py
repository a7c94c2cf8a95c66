# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""DeadManSwitch -- fail-safe countdown that ends in a wipe signal.

States::

  disarmed --arm()--> armed(30) --1s--> armed(29) ... armed(0) --> triggered
      ^                   |                                           |
      +----cancel()-------+---------------<---------------------------+

Each countdown step is a one-shot timer that schedules the next one.
cancel() both removes the scheduled one-shot and bumps the session
generation; a tick carrying an old generation is ignored, so nothing from a
cancelled session can ever decrement or trigger.

The wipe itself is not performed here.  Triggering logs the wipe message
and calls every registered wipe handler; whatever actually destroys data
lives outside the engine.
"""

from __future__ import annotations

import enum
from typing import Callable

from loguru import logger

from .ai_log import AILog
from .clock import Scheduler
from .state import Severity, TacticalState

DEADMAN_TASK = "deadman-tick"
DEADMAN_SECONDS = 30

ARMED_MESSAGE = "DEAD-MAN SWITCH ARMED - {seconds} seconds to cancel"
WIPE_MESSAGE = "DEAD-MAN SWITCH ACTIVATED - INITIATING DATA WIPE"
CANCEL_MESSAGE = "Dead-man switch cancelled"


class DeadManState(str, enum.Enum):
    DISARMED = "disarmed"
    ARMED = "armed"
    TRIGGERED = "triggered"


class DeadManSwitch:
    """Countdown state machine writing ``dead_man_countdown`` on TacticalState."""

    def __init__(
        self,
        scheduler: Scheduler,
        log: AILog,
        seconds: int = DEADMAN_SECONDS,
        tick_interval: float = 1.0,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._log = log
        self.seconds = seconds
        self.tick_interval = tick_interval
        self._on_change = on_change
        self._state = DeadManState.DISARMED
        self._generation = 0
        self._wipe_handlers: list[Callable[[], None]] = []
        self.trigger_count = 0

    @property
    def state(self) -> DeadManState:
        return self._state

    @property
    def armed(self) -> bool:
        return self._state == DeadManState.ARMED

    @property
    def generation(self) -> int:
        return self._generation

    def on_wipe(self, handler: Callable[[], None]) -> None:
        """Register a callback invoked once per trigger."""
        self._wipe_handlers.append(handler)

    # -- Actions ------------------------------------------------------------

    def arm(self, state: TacticalState) -> bool:
        """disarmed -> armed(seconds).  Returns False if already armed."""
        if self._state == DeadManState.ARMED:
            logger.debug("Dead-man switch already armed, ignoring")
            return False
        self._generation += 1
        self._state = DeadManState.ARMED
        state.dead_man_countdown = self.seconds
        self._log.add(ARMED_MESSAGE.format(seconds=self.seconds), Severity.CRITICAL)
        self._schedule_tick(state)
        return True

    def cancel(self, state: TacticalState) -> bool:
        """armed -> disarmed.  Returns False if nothing was armed."""
        if self._state != DeadManState.ARMED:
            return False
        self._scheduler.cancel(DEADMAN_TASK)
        self._generation += 1
        self._state = DeadManState.DISARMED
        state.dead_man_countdown = None
        self._log.add(CANCEL_MESSAGE, Severity.INFO)
        return True

    def reset(self, state: TacticalState | None = None) -> None:
        """Silently drop any armed session (teardown)."""
        self._scheduler.cancel(DEADMAN_TASK)
        self._generation += 1
        self._state = DeadManState.DISARMED
        if state is not None:
            state.dead_man_countdown = None

    # -- Countdown ----------------------------------------------------------

    def _schedule_tick(self, state: TacticalState) -> None:
        generation = self._generation
        self._scheduler.call_later(
            DEADMAN_TASK, self.tick_interval, lambda: self._tick(state, generation)
        )

    def _tick(self, state: TacticalState, generation: int) -> None:
        if generation != self._generation or self._state != DeadManState.ARMED:
            logger.debug("Stale dead-man tick from session {} ignored", generation)
            return
        remaining = max(0, (state.dead_man_countdown or 0) - 1)
        state.dead_man_countdown = remaining
        if remaining > 0:
            self._schedule_tick(state)
        else:
            self._trigger(state)
        if self._on_change is not None:
            self._on_change()

    def _trigger(self, state: TacticalState) -> None:
        self._state = DeadManState.TRIGGERED
        self.trigger_count += 1
        self._log.add(WIPE_MESSAGE, Severity.CRITICAL)
        for handler in list(self._wipe_handlers):
            try:
                handler()
            except Exception:
                logger.exception("Wipe handler failed")
        self._generation += 1
        self._state = DeadManState.DISARMED
        state.dead_man_countdown = None
