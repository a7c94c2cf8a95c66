# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""TacticalEngine — owner of TacticalState and every timer that mutates it.

Architecture
------------
The engine holds the one TacticalState aggregate and wires the simulators
to a single Scheduler:

  vitals      (1s periodic)  VitalsSimulator.tick, high-stress hysteresis
  drones      (3s periodic)  ThreatGenerator.tick_drones
  gunfire     (5s periodic)  ThreatGenerator.tick_gunfire
  navigation  (2s periodic)  PositionDrift.tick
  jam-clear   (one-shot)     JammingLifecycle auto-recovery
  deadman-tick (one-shot)    DeadManSwitch countdown step

Everything runs on the scheduler's thread, so state writes are serialised
without locks.  Consumers never touch TacticalState; they call
``snapshot()`` or subscribe to the EventBus, which receives a
``state_changed`` message after every mutation and a ``deadman_triggered``
message when the wipe fires.

Actions that make no sense in the current state (arming an armed switch,
jamming a jammed link, cancelling nothing) are no-ops that return False.

Mode precedence: high-stress preempts stealth.  When the heart rate comes
back down, the engine returns to the mode that was preempted.  An explicit
``set_system_mode`` always applies immediately.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Callable

from loguru import logger

from .ai_log import AILog
from .clock import Scheduler
from .deadman import DeadManSwitch
from .jamming import JammingLifecycle
from .navigation import PositionDrift
from .random_source import RandomSource
from .squad import generate_squad
from .state import (
    Coordinates,
    DroneAlert,
    LogEntry,
    Severity,
    SignalStatus,
    SystemMode,
    TacticalSnapshot,
    TacticalState,
    ViewMode,
)
from .threats import ThreatGenerator, active_alerts, critical_alerts
from .vitals import VitalsSimulator, VitalStatus, vital_status

if TYPE_CHECKING:
    from vajra.comms.event_bus import EventBus
    from vajra.config import Settings

STEALTH_MESSAGE = "STEALTH MODE ENGAGED - Switching to IR spectrum"


class TacticalEngine:
    """Drives the simulated sensors and exposes immutable snapshots."""

    def __init__(
        self,
        settings: Settings | None = None,
        scheduler: Scheduler | None = None,
        rng: RandomSource | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        if settings is None:
            from vajra.config import Settings
            settings = Settings()
        self._settings = settings
        self._scheduler = scheduler if scheduler is not None else Scheduler()
        self._rng = rng if rng is not None else random.Random(settings.seed)
        self._event_bus = event_bus
        self._running = False

        origin = Coordinates(
            lat=settings.start_lat,
            lng=settings.start_lng,
            alt=settings.start_alt,
            heading=settings.start_heading,
        )
        self._state = TacticalState(
            coordinates=origin,
            squad_members=generate_squad(self._rng, origin),
        )

        clock = lambda: self._scheduler.now  # noqa: E731
        self.log = AILog(clock)
        self.vitals = VitalsSimulator(self._rng)
        self.threats = ThreatGenerator(
            self._rng,
            self.log,
            clock,
            drone_probability=settings.drone_probability,
            gunfire_probability=settings.gunfire_probability,
            critical_distance=settings.critical_distance,
        )
        self.navigation = PositionDrift(self._rng)
        self.jamming = JammingLifecycle(
            self._scheduler,
            self.log,
            clear_delay=settings.jam_clear_delay,
            on_change=self._commit,
        )
        self.deadman = DeadManSwitch(
            self._scheduler,
            self.log,
            seconds=settings.deadman_seconds,
            tick_interval=settings.deadman_tick,
            on_change=self._commit,
        )
        self.deadman.on_wipe(self._publish_wipe)

    # -- Accessors ----------------------------------------------------------

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def event_bus(self) -> EventBus | None:
        return self._event_bus

    @property
    def running(self) -> bool:
        return self._running

    @property
    def now(self) -> float:
        return self._scheduler.now

    # -- Lifecycle ----------------------------------------------------------

    def start(self) -> None:
        """Register the periodic simulators.  Idempotent."""
        if self._running:
            return
        self._running = True
        s = self._settings
        self._every("vitals", s.vitals_interval, self.vitals.tick)
        self._every("drones", s.drone_interval, self.threats.tick_drones)
        self._every("gunfire", s.gunfire_interval, self.threats.tick_gunfire)
        self._every("navigation", s.navigation_interval, self.navigation.tick)
        logger.info("{} engine started", s.app_name)

    def stop(self) -> None:
        """Cancel every outstanding timer, one-shots included."""
        self.jamming.reset(self._state)
        self.deadman.reset(self._state)
        self._scheduler.cancel_all()
        self._running = False
        logger.info("{} engine stopped", self._settings.app_name)

    def _every(self, name: str, interval: float, tick: Callable[[TacticalState], object]) -> None:
        def run() -> None:
            tick(self._state)
            self._commit()
        self._scheduler.call_every(name, interval, run)

    def advance(self, seconds: float) -> int:
        """Fast-forward logical time (tests, replays)."""
        return self._scheduler.advance(seconds)

    # -- Reads --------------------------------------------------------------

    def snapshot(self) -> TacticalSnapshot:
        return TacticalSnapshot.from_state(self._state, self._scheduler.now, self.log.entries)

    def active_alerts(self, now: float | None = None) -> list[DroneAlert]:
        now = self._scheduler.now if now is None else now
        return active_alerts(self._state.drone_alerts, now, self._settings.drone_alert_ttl)

    def critical_alerts(self, now: float | None = None) -> list[DroneAlert]:
        now = self._scheduler.now if now is None else now
        return critical_alerts(
            self._state.drone_alerts,
            now,
            self._settings.drone_alert_ttl,
            self._settings.critical_distance,
        )

    def vital_status(self) -> dict[str, VitalStatus]:
        return vital_status(self._state.vitals)

    # -- Actions ------------------------------------------------------------

    def set_view_mode(self, mode: ViewMode | str) -> None:
        self._state.view_mode = ViewMode(mode)
        self._commit()

    def toggle_signal_status(self) -> SignalStatus:
        state = self._state
        state.signal_status = (
            SignalStatus.VBN if state.signal_status == SignalStatus.GPS else SignalStatus.GPS
        )
        self._commit()
        return state.signal_status

    def set_system_mode(self, mode: SystemMode | str) -> None:
        mode = SystemMode(mode)
        self._state.system_mode = mode
        self.vitals.reset_resume(mode)
        if mode == SystemMode.STEALTH:
            self.log.add(STEALTH_MESSAGE, Severity.INFO)
        self._commit()

    def simulate_jamming(self) -> bool:
        changed = self.jamming.trigger(self._state)
        if changed:
            self._commit()
        return changed

    def start_dead_man_switch(self) -> bool:
        changed = self.deadman.arm(self._state)
        if changed:
            self._commit()
        return changed

    def cancel_dead_man_switch(self) -> bool:
        changed = self.deadman.cancel(self._state)
        if changed:
            self._commit()
        return changed

    def add_log(self, message: str, severity: Severity | str = Severity.INFO) -> LogEntry:
        entry = self.log.add(message, severity)
        self._commit()
        return entry

    # -- Publication --------------------------------------------------------

    def _commit(self) -> None:
        """Notify subscribers of a mutation."""
        if self._event_bus is not None:
            self._event_bus.publish("state_changed", self.snapshot().model_dump(mode="json"))

    def _publish_wipe(self) -> None:
        logger.critical("Dead-man switch triggered at t={:.1f}", self._scheduler.now)
        if self._event_bus is not None:
            self._event_bus.publish("deadman_triggered", {"timestamp": self._scheduler.now})
