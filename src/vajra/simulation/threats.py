# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""ThreatGenerator -- probabilistic drone and gunfire detections.

Two independent generators, each on its own timer:

  drones   every 3s, p=0.15: type/distance/bearing/confidence drawn uniformly
  gunfire  every 5s, p=0.08: bearing/distance drawn uniformly

Each emission is prepended to a bounded buffer (5 drones, 3 gunfire) and
reported to the AI log.  Buffers only ever shed entries by count; age is a
display concern handled by the query helpers below and by the projection
layer.
"""

from __future__ import annotations

import itertools
import math
from typing import Callable, Iterable

from .ai_log import AILog
from .random_source import RandomSource
from .state import (
    MAX_DRONE_ALERTS,
    MAX_GUNFIRE_EVENTS,
    DroneAlert,
    GunfireEvent,
    Severity,
    TacticalState,
)

DRONE_TYPES = ("Mavic-3 Pro", "DJI Mini", "Custom FPV", "Fixed-Wing ISR")

# Distances below this are reported as critical (meters)
CRITICAL_DISTANCE = 300.0

# Age after which a drone alert no longer counts as active (seconds)
DRONE_ALERT_TTL = 30.0

# Uniform draw ranges: low + floor(r * span)
_DRONE_DISTANCE = (100, 900)
_DRONE_CONFIDENCE = (70, 30)
_GUNFIRE_DISTANCE = (50, 500)


def active_alerts(
    alerts: Iterable[DroneAlert], now: float, ttl: float = DRONE_ALERT_TTL
) -> list[DroneAlert]:
    """Alerts younger than *ttl* seconds, order preserved."""
    return [a for a in alerts if now - a.timestamp < ttl]


def critical_alerts(
    alerts: Iterable[DroneAlert],
    now: float,
    ttl: float = DRONE_ALERT_TTL,
    threshold: float = CRITICAL_DISTANCE,
) -> list[DroneAlert]:
    """Active alerts closer than *threshold*."""
    return [a for a in active_alerts(alerts, now, ttl) if a.distance < threshold]


def active_gunfire(
    events: Iterable[GunfireEvent], now: float, ttl: float
) -> list[GunfireEvent]:
    return [e for e in events if now - e.timestamp < ttl]


def _draw_int(rng: RandomSource, low: int, span: int) -> int:
    return low + math.floor(rng.random() * span)


class ThreatGenerator:
    """Emits drone alerts and gunfire events into TacticalState."""

    def __init__(
        self,
        rng: RandomSource,
        log: AILog,
        clock: Callable[[], float],
        drone_probability: float = 0.15,
        gunfire_probability: float = 0.08,
        critical_distance: float = CRITICAL_DISTANCE,
    ) -> None:
        self._rng = rng
        self._log = log
        self._clock = clock
        self.drone_probability = drone_probability
        self.gunfire_probability = gunfire_probability
        self.critical_distance = critical_distance
        self._drone_ids = itertools.count(1)
        self._shot_ids = itertools.count(1)

    def _roll(self, probability: float) -> bool:
        return self._rng.random() > 1.0 - probability

    # -- Drones -------------------------------------------------------------

    def tick_drones(self, state: TacticalState) -> DroneAlert | None:
        """One drone-generator tick.  Returns the new alert, if any."""
        if not self._roll(self.drone_probability):
            return None
        drone_type = DRONE_TYPES[math.floor(self._rng.random() * len(DRONE_TYPES))]
        distance = _draw_int(self._rng, *_DRONE_DISTANCE)
        bearing = _draw_int(self._rng, 0, 360)
        confidence = _draw_int(self._rng, *_DRONE_CONFIDENCE)
        return self.record_drone(state, drone_type, distance, bearing, confidence)

    def record_drone(
        self,
        state: TacticalState,
        drone_type: str,
        distance: float,
        bearing: float,
        confidence: float,
    ) -> DroneAlert:
        alert = DroneAlert(
            id=f"drone-{next(self._drone_ids)}",
            type=drone_type,
            distance=distance,
            bearing=bearing,
            confidence=confidence,
            timestamp=self._clock(),
        )
        state.drone_alerts = [alert, *state.drone_alerts[: MAX_DRONE_ALERTS - 1]]
        severity = Severity.CRITICAL if distance < self.critical_distance else Severity.WARNING
        self._log.add(f"Acoustic signature matched to {drone_type} @ {distance}m", severity)
        return alert

    # -- Gunfire ------------------------------------------------------------

    def tick_gunfire(self, state: TacticalState) -> GunfireEvent | None:
        """One gunfire-generator tick.  Returns the new event, if any."""
        if not self._roll(self.gunfire_probability):
            return None
        bearing = _draw_int(self._rng, 0, 360)
        distance = _draw_int(self._rng, *_GUNFIRE_DISTANCE)
        return self.record_gunfire(state, bearing, distance)

    def record_gunfire(
        self, state: TacticalState, bearing: float, distance: float
    ) -> GunfireEvent:
        event = GunfireEvent(
            id=f"shot-{next(self._shot_ids)}",
            bearing=bearing,
            distance=distance,
            timestamp=self._clock(),
        )
        state.gunfire_events = [event, *state.gunfire_events[: MAX_GUNFIRE_EVENTS - 1]]
        self._log.add(
            f"Triangulating gunshot via Mesh-Net nodes @ {bearing}°",
            Severity.CRITICAL,
        )
        return event
