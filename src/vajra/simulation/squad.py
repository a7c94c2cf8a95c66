# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Squad roster -- generated once at engine construction, then static."""

from __future__ import annotations

from .random_source import RandomSource
from .state import Coordinates, SquadMember, Vitals

CALLSIGNS = ("ALPHA-1", "BRAVO-2", "CHARLIE-3", "DELTA-4")

# Squad members spawn within +/- half of this around the operator (degrees)
_SPREAD_DEG = 0.01


def generate_squad(rng: RandomSource, origin: Coordinates) -> tuple[SquadMember, ...]:
    """Build the fixed four-member squad around *origin*.

    Each member draws seven values: four vitals, lat, lng, heading.
    """
    members = []
    for i, callsign in enumerate(CALLSIGNS):
        vitals = Vitals(
            heart_rate=70.0 + rng.random() * 20.0,
            spo2=96.0 + rng.random() * 3.0,
            hrv_stress=30.0 + rng.random() * 20.0,
            hape_risk=10.0 + rng.random() * 15.0,
        )
        position = Coordinates(
            lat=origin.lat + (rng.random() - 0.5) * _SPREAD_DEG,
            lng=origin.lng + (rng.random() - 0.5) * _SPREAD_DEG,
            alt=origin.alt,
            heading=rng.random() * 360.0,
        )
        members.append(SquadMember(
            id=f"squad-{i}",
            callsign=callsign,
            vitals=vitals,
            position=position,
        ))
    return tuple(members)
