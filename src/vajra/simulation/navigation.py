# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""PositionDrift -- slow random drift of the operator's fix and heading."""

from __future__ import annotations

from .random_source import RandomSource
from .state import Coordinates, TacticalState

# Full width of the per-tick step
_LATLNG_STEP = 0.0001  # degrees
_HEADING_STEP = 5.0  # degrees


def wrap_heading(heading: float) -> float:
    """Normalise an angle into [0, 360)."""
    wrapped = heading % 360.0
    # -1e-15 % 360 rounds to 360.0
    return 0.0 if wrapped >= 360.0 else wrapped


class PositionDrift:
    """Perturbs lat/lng and heading every tick.  Altitude is held."""

    def __init__(self, rng: RandomSource) -> None:
        self._rng = rng

    def step(self, coords: Coordinates) -> Coordinates:
        """Draws three values: lat, lng, heading."""
        return Coordinates(
            lat=coords.lat + (self._rng.random() - 0.5) * _LATLNG_STEP,
            lng=coords.lng + (self._rng.random() - 0.5) * _LATLNG_STEP,
            alt=coords.alt,
            heading=wrap_heading(coords.heading + (self._rng.random() - 0.5) * _HEADING_STEP),
        )

    def tick(self, state: TacticalState) -> None:
        state.coordinates = self.step(state.coordinates)
