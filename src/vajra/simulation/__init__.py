"""Simulation subsystem — tactical state, timers, simulators, engine."""
from .ai_log import AILog
from .clock import Scheduler, ScheduledTask
from .deadman import DeadManState, DeadManSwitch
from .engine import TacticalEngine
from .jamming import JammingLifecycle, JamState
from .navigation import PositionDrift
from .random_source import RandomSource, ScriptedRandom
from .state import (
    Coordinates,
    DroneAlert,
    GunfireEvent,
    LogEntry,
    Severity,
    SignalStatus,
    SquadMember,
    SystemMode,
    TacticalSnapshot,
    TacticalState,
    ViewMode,
    Vitals,
)
from .threats import ThreatGenerator, active_alerts, critical_alerts
from .vitals import VitalsSimulator, VitalStatus, next_system_mode, vital_status

__all__ = [
    "AILog",
    "Coordinates",
    "DeadManState",
    "DeadManSwitch",
    "DroneAlert",
    "GunfireEvent",
    "JamState",
    "JammingLifecycle",
    "LogEntry",
    "PositionDrift",
    "RandomSource",
    "Scheduler",
    "ScheduledTask",
    "ScriptedRandom",
    "Severity",
    "SignalStatus",
    "SquadMember",
    "SystemMode",
    "TacticalEngine",
    "TacticalSnapshot",
    "TacticalState",
    "ThreatGenerator",
    "ViewMode",
    "VitalStatus",
    "Vitals",
    "VitalsSimulator",
    "active_alerts",
    "critical_alerts",
    "next_system_mode",
    "vital_status",
]
