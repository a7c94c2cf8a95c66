# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Tactical state — enums, record models, the mutable aggregate, and snapshots.

Records (vitals, alerts, log entries, ...) are frozen pydantic models: a
new value replaces the old one on every mutation, and the range checks on
each field turn any out-of-range value into a ValidationError at the point
it was produced.  TacticalState is the one mutable aggregate; only the
engine and its simulators write to it.  Consumers get a TacticalSnapshot,
which is frozen all the way down.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field

# Bounds for each simulated vital (clamped, never wrapped)
HEART_RATE_RANGE = (55.0, 180.0)
SPO2_RANGE = (88.0, 100.0)
HRV_STRESS_RANGE = (10.0, 100.0)
HAPE_RISK_RANGE = (0.0, 100.0)

# Ring-buffer caps
MAX_DRONE_ALERTS = 5
MAX_GUNFIRE_EVENTS = 3
MAX_LOG_ENTRIES = 10


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


class ViewMode(str, enum.Enum):
    OPERATOR = "operator"
    COMMANDER = "commander"


class SignalStatus(str, enum.Enum):
    GPS = "GPS"
    VBN = "VBN"


class SystemMode(str, enum.Enum):
    NORMAL = "normal"
    STEALTH = "stealth"
    HIGH_STRESS = "high-stress"


class Severity(str, enum.Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class SquadStatus(str, enum.Enum):
    ACTIVE = "active"
    WOUNDED = "wounded"
    EXTRACTED = "extracted"


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class Vitals(_Record):
    heart_rate: float = Field(ge=HEART_RATE_RANGE[0], le=HEART_RATE_RANGE[1])
    spo2: float = Field(ge=SPO2_RANGE[0], le=SPO2_RANGE[1])
    hrv_stress: float = Field(ge=HRV_STRESS_RANGE[0], le=HRV_STRESS_RANGE[1])
    hape_risk: float = Field(ge=HAPE_RISK_RANGE[0], le=HAPE_RISK_RANGE[1])


class Coordinates(_Record):
    lat: float
    lng: float
    alt: float
    heading: float = Field(ge=0.0, lt=360.0)


class DroneAlert(_Record):
    id: str
    type: str
    distance: float = Field(gt=0)
    bearing: float = Field(ge=0.0, lt=360.0)
    confidence: float = Field(ge=0.0, le=100.0)
    timestamp: float


class GunfireEvent(_Record):
    id: str
    bearing: float = Field(ge=0.0, lt=360.0)
    distance: float = Field(gt=0)
    timestamp: float


class LogEntry(_Record):
    id: str
    message: str
    timestamp: float
    severity: Severity


class SquadMember(_Record):
    id: str
    callsign: str
    status: SquadStatus = SquadStatus.ACTIVE
    vitals: Vitals
    position: Coordinates


INITIAL_VITALS = Vitals(heart_rate=72.0, spo2=98.0, hrv_stress=35.0, hape_risk=12.0)


@dataclass
class TacticalState:
    """The engine-owned mutable aggregate."""

    coordinates: Coordinates
    squad_members: tuple[SquadMember, ...] = ()
    view_mode: ViewMode = ViewMode.OPERATOR
    signal_status: SignalStatus = SignalStatus.GPS
    is_jammed: bool = False
    system_mode: SystemMode = SystemMode.NORMAL
    vitals: Vitals = INITIAL_VITALS
    drone_alerts: list[DroneAlert] = field(default_factory=list)
    gunfire_events: list[GunfireEvent] = field(default_factory=list)
    dead_man_countdown: int | None = None


class TacticalSnapshot(_Record):
    """Immutable view of TacticalState handed to consumers."""

    taken_at: float
    view_mode: ViewMode
    signal_status: SignalStatus
    is_jammed: bool
    system_mode: SystemMode
    vitals: Vitals
    coordinates: Coordinates
    drone_alerts: tuple[DroneAlert, ...] = Field(max_length=MAX_DRONE_ALERTS)
    gunfire_events: tuple[GunfireEvent, ...] = Field(max_length=MAX_GUNFIRE_EVENTS)
    ai_log: tuple[LogEntry, ...] = Field(max_length=MAX_LOG_ENTRIES)
    squad_members: tuple[SquadMember, ...]
    dead_man_countdown: int | None = Field(default=None, ge=0)

    @classmethod
    def from_state(
        cls,
        state: TacticalState,
        now: float,
        ai_log: Iterable[LogEntry] = (),
    ) -> TacticalSnapshot:
        return cls(
            taken_at=now,
            view_mode=state.view_mode,
            signal_status=state.signal_status,
            is_jammed=state.is_jammed,
            system_mode=state.system_mode,
            vitals=state.vitals,
            coordinates=state.coordinates,
            drone_alerts=tuple(state.drone_alerts),
            gunfire_events=tuple(state.gunfire_events),
            ai_log=tuple(ai_log),
            squad_members=state.squad_members,
            dead_man_countdown=state.dead_man_countdown,
        )

    @property
    def dead_man_armed(self) -> bool:
        return self.dead_man_countdown is not None
