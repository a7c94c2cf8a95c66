# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""VitalsSimulator -- bounded random walk over the operator's biometrics.

Each tick perturbs every vital by a uniform delta and clamps it:

  heart_rate  +/- 4.0   [55, 180]
  spo2        +/- 1.0   [88, 100]
  hrv_stress  +/- 2.5   [10, 100]
  hape_risk   +/- 1.5   [0, 100]

The new heart rate then drives the system-mode hysteresis:

  - HR > 140 enters high-stress (from normal or stealth)
  - HR <= 130 leaves high-stress, back to whatever mode it preempted

The 140/130 gap is the deadband that keeps the mode from flapping when HR
hovers around a single threshold.
"""

from __future__ import annotations

import enum

from .random_source import RandomSource
from .state import (
    HAPE_RISK_RANGE,
    HEART_RATE_RANGE,
    HRV_STRESS_RANGE,
    SPO2_RANGE,
    SystemMode,
    TacticalState,
    Vitals,
    clamp,
)

# Hysteresis thresholds (bpm)
HIGH_STRESS_ENTER_BPM = 140.0
HIGH_STRESS_EXIT_BPM = 130.0

# Full width of the uniform step per tick
_HR_STEP = 8.0
_SPO2_STEP = 2.0
_HRV_STEP = 5.0
_HAPE_STEP = 3.0


class VitalStatus(str, enum.Enum):
    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"


def next_system_mode(
    heart_rate: float,
    mode: SystemMode,
    resume: SystemMode = SystemMode.NORMAL,
) -> SystemMode:
    """Apply the heart-rate hysteresis to *mode*.

    *resume* is the mode to return to when high-stress clears.
    """
    if mode == SystemMode.HIGH_STRESS:
        if heart_rate <= HIGH_STRESS_EXIT_BPM:
            return resume
        return mode
    if heart_rate > HIGH_STRESS_ENTER_BPM:
        return SystemMode.HIGH_STRESS
    return mode


def _walk(rng: RandomSource, value: float, step: float, bounds: tuple[float, float]) -> float:
    return clamp(value + (rng.random() - 0.5) * step, *bounds)


def step_vitals(vitals: Vitals, rng: RandomSource) -> Vitals:
    """One random-walk step.  Draws exactly four values from *rng*."""
    return Vitals(
        heart_rate=_walk(rng, vitals.heart_rate, _HR_STEP, HEART_RATE_RANGE),
        spo2=_walk(rng, vitals.spo2, _SPO2_STEP, SPO2_RANGE),
        hrv_stress=_walk(rng, vitals.hrv_stress, _HRV_STEP, HRV_STRESS_RANGE),
        hape_risk=_walk(rng, vitals.hape_risk, _HAPE_STEP, HAPE_RISK_RANGE),
    )


def _tier(value: float, warning: float, critical: float, low_is_bad: bool = False) -> VitalStatus:
    if low_is_bad:
        if value < critical:
            return VitalStatus.CRITICAL
        if value < warning:
            return VitalStatus.WARNING
        return VitalStatus.NORMAL
    if value > critical:
        return VitalStatus.CRITICAL
    if value > warning:
        return VitalStatus.WARNING
    return VitalStatus.NORMAL


def vital_status(vitals: Vitals) -> dict[str, VitalStatus]:
    """Per-field display tier for the biometrics panel."""
    return {
        "heart_rate": _tier(vitals.heart_rate, 100.0, 140.0),
        "spo2": _tier(vitals.spo2, 94.0, 90.0, low_is_bad=True),
        "hrv_stress": _tier(vitals.hrv_stress, 50.0, 70.0),
        "hape_risk": _tier(vitals.hape_risk, 30.0, 60.0),
    }


class VitalsSimulator:
    """Tick-driven vitals walk plus high-stress mode derivation."""

    def __init__(self, rng: RandomSource) -> None:
        self._rng = rng
        self._resume_mode = SystemMode.NORMAL

    @property
    def resume_mode(self) -> SystemMode:
        """Mode restored when high-stress clears."""
        return self._resume_mode

    def reset_resume(self, mode: SystemMode) -> None:
        """Forget any preempted mode after an explicit mode change."""
        self._resume_mode = SystemMode.NORMAL if mode == SystemMode.HIGH_STRESS else mode

    def apply_heart_rate(self, state: TacticalState, heart_rate: float) -> SystemMode:
        """Run the hysteresis for *heart_rate* and store the resulting mode."""
        current = state.system_mode
        if current != SystemMode.HIGH_STRESS:
            self._resume_mode = current
        new_mode = next_system_mode(heart_rate, current, self._resume_mode)
        state.system_mode = new_mode
        return new_mode

    def tick(self, state: TacticalState) -> SystemMode:
        """Advance vitals by one step; returns the (possibly new) system mode."""
        state.vitals = step_vitals(state.vitals, self._rng)
        return self.apply_heart_rate(state, state.vitals.heart_rate)
