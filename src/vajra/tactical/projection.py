# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Polar projection — bearing/distance readings to 2D plot coordinates.

Convention:
    - Bearing 0 = north = straight up on screen, clockwise in degrees
    - Screen y grows downward, so north is centre_y - radius
    - Distance is clamped to ``max_distance`` (the plot's outer ring)

Age fade is linear: a reading is fully opaque when fresh and invisible once
it is ``ttl`` seconds old.  Fading never deletes anything from the engine's
buffers; invisible items are simply not returned by the blip helpers.

The half-dial (gunfire direction indicator) only has 180 degrees of arc, so
bearings past 180 are folded back: ``360 - bearing``.  30 and 330 land on the
same dial angle; that ambiguity is inherent to the half-dial.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Sequence

import numpy as np

if TYPE_CHECKING:
    from vajra.simulation.state import GunfireEvent, TacticalSnapshot

# Drones closer than this render in the critical tier (meters)
DRONE_CRITICAL_DISTANCE = 300.0

# Gunfire is always critical
GUNFIRE_CRITICAL_DISTANCE = math.inf

# Fade-out ages (seconds)
RADAR_DRONE_TTL = 30.0
RADAR_GUNFIRE_TTL = 10.0
DIAL_GUNFIRE_TTL = 15.0


class ThreatTier(str, enum.Enum):
    NOMINAL = "nominal"
    CRITICAL = "critical"


@dataclass(frozen=True)
class RadarLayout:
    """Square radar canvas; the outer ring sits ``margin`` in from the edge."""

    size: float = 400.0
    margin: float = 20.0
    max_distance: float = 1000.0

    @property
    def center(self) -> tuple[float, float]:
        return (self.size / 2, self.size / 2)

    @property
    def max_radius(self) -> float:
        return self.size / 2 - self.margin


@dataclass(frozen=True)
class DialLayout:
    """Half-dial canvas; the pivot sits near the bottom edge."""

    width: float = 400.0
    height: float = 180.0
    pivot_inset: float = 20.0
    radius_inset: float = 40.0

    @property
    def center(self) -> tuple[float, float]:
        return (self.width / 2, self.height - self.pivot_inset)

    @property
    def radius(self) -> float:
        return self.height - self.radius_inset


@dataclass(frozen=True)
class PolarPoint:
    x: float
    y: float
    opacity: float
    tier: ThreatTier = ThreatTier.NOMINAL

    @property
    def visible(self) -> bool:
        return self.opacity > 0.0


@dataclass(frozen=True)
class RadarBlip:
    id: str
    kind: str  # "drone" or "gunfire"
    distance: float
    point: PolarPoint


@dataclass(frozen=True)
class DialVector:
    id: str
    bearing: float
    dial_angle: float
    distance: float
    tip: tuple[float, float]
    label: tuple[float, float]
    opacity: float


# ---------------------------------------------------------------------------
# Scalar helpers
# ---------------------------------------------------------------------------

def threat_tier(distance: float, threshold: float = DRONE_CRITICAL_DISTANCE) -> ThreatTier:
    """CRITICAL when *distance* is strictly inside *threshold*."""
    return ThreatTier.CRITICAL if distance < threshold else ThreatTier.NOMINAL


def fade_opacity(age: float, ttl: float) -> float:
    """Linear fade from 1.0 at age 0 to 0.0 at age >= ttl."""
    if ttl <= 0:
        raise ValueError(f"ttl must be positive, got {ttl}")
    return max(0.0, 1.0 - age / ttl)


def bearing_to_screen_angle(bearing: float) -> float:
    """Screen angle in radians, with bearing 0 pointing up."""
    return math.radians(bearing) - math.pi / 2


def project(
    bearing: float,
    distance: float,
    timestamp: float,
    now: float,
    *,
    center: tuple[float, float] = (0.0, 0.0),
    max_distance: float = 1000.0,
    max_radius: float = 100.0,
    ttl: float = RADAR_DRONE_TTL,
    threshold: float = DRONE_CRITICAL_DISTANCE,
) -> PolarPoint:
    """Project one reading onto the radar plot."""
    angle = bearing_to_screen_angle(bearing)
    radius = min(distance, max_distance) / max_distance * max_radius
    return PolarPoint(
        x=center[0] + math.cos(angle) * radius,
        y=center[1] + math.sin(angle) * radius,
        opacity=fade_opacity(now - timestamp, ttl),
        tier=threat_tier(distance, threshold),
    )


def dial_angle(bearing: float) -> float:
    """Fold a full-circle bearing onto the 0-180 half dial."""
    return 360.0 - bearing if bearing > 180.0 else bearing


def project_dial(
    bearing: float,
    center: tuple[float, float] = (0.0, 0.0),
    radius: float = 1.0,
) -> tuple[float, float]:
    """Point on the half dial's arc for *bearing*."""
    rad = math.radians(dial_angle(bearing)) + math.pi
    return (center[0] + math.cos(rad) * radius, center[1] + math.sin(rad) * radius)


# ---------------------------------------------------------------------------
# Batch projection
# ---------------------------------------------------------------------------

def project_batch(
    bearings: Sequence[float] | np.ndarray,
    distances: Sequence[float] | np.ndarray,
    timestamps: Sequence[float] | np.ndarray,
    now: float,
    *,
    center: tuple[float, float] = (0.0, 0.0),
    max_distance: float = 1000.0,
    max_radius: float = 100.0,
    ttl: float = RADAR_DRONE_TTL,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Vectorised ``project``.  Returns (x, y, opacity) arrays."""
    if ttl <= 0:
        raise ValueError(f"ttl must be positive, got {ttl}")
    b = np.asarray(bearings, dtype=float)
    d = np.asarray(distances, dtype=float)
    ts = np.asarray(timestamps, dtype=float)
    angle = np.deg2rad(b) - np.pi / 2
    radius = np.minimum(d, max_distance) / max_distance * max_radius
    x = center[0] + np.cos(angle) * radius
    y = center[1] + np.sin(angle) * radius
    opacity = np.maximum(0.0, 1.0 - (now - ts) / ttl)
    return x, y, opacity


def _blips(
    kind: str,
    items: Sequence,
    now: float,
    layout: RadarLayout,
    ttl: float,
    threshold: float,
) -> list[RadarBlip]:
    if not items:
        return []
    x, y, opacity = project_batch(
        [i.bearing for i in items],
        [i.distance for i in items],
        [i.timestamp for i in items],
        now,
        center=layout.center,
        max_distance=layout.max_distance,
        max_radius=layout.max_radius,
        ttl=ttl,
    )
    blips = []
    for idx, item in enumerate(items):
        if opacity[idx] <= 0.0:
            continue
        blips.append(RadarBlip(
            id=item.id,
            kind=kind,
            distance=item.distance,
            point=PolarPoint(
                x=float(x[idx]),
                y=float(y[idx]),
                opacity=float(opacity[idx]),
                tier=threat_tier(item.distance, threshold),
            ),
        ))
    return blips


def radar_blips(
    snapshot: TacticalSnapshot,
    now: float | None = None,
    layout: RadarLayout = RadarLayout(),
) -> list[RadarBlip]:
    """Visible drone and gunfire blips for the radar, drones first."""
    now = snapshot.taken_at if now is None else now
    return _blips(
        "drone", snapshot.drone_alerts, now, layout,
        RADAR_DRONE_TTL, DRONE_CRITICAL_DISTANCE,
    ) + _blips(
        "gunfire", snapshot.gunfire_events, now, layout,
        RADAR_GUNFIRE_TTL, GUNFIRE_CRITICAL_DISTANCE,
    )


def dial_vectors(
    events: Iterable[GunfireEvent],
    now: float,
    layout: DialLayout = DialLayout(),
    ttl: float = DIAL_GUNFIRE_TTL,
) -> list[DialVector]:
    """Visible gunfire direction vectors for the half dial."""
    vectors = []
    for event in events:
        opacity = fade_opacity(now - event.timestamp, ttl)
        if opacity <= 0.0:
            continue
        vectors.append(DialVector(
            id=event.id,
            bearing=event.bearing,
            dial_angle=dial_angle(event.bearing),
            distance=event.distance,
            tip=project_dial(event.bearing, layout.center, layout.radius),
            label=project_dial(event.bearing, layout.center, layout.radius * 0.6),
            opacity=opacity,
        ))
    return vectors
