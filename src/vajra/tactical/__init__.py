"""Tactical display math — radar and half-dial projection."""
from .projection import (
    DialLayout,
    DialVector,
    PolarPoint,
    RadarBlip,
    RadarLayout,
    ThreatTier,
    dial_angle,
    dial_vectors,
    fade_opacity,
    project,
    project_batch,
    project_dial,
    radar_blips,
    threat_tier,
)

__all__ = [
    "DialLayout",
    "DialVector",
    "PolarPoint",
    "RadarBlip",
    "RadarLayout",
    "ThreatTier",
    "dial_angle",
    "dial_vectors",
    "fade_opacity",
    "project",
    "project_batch",
    "project_dial",
    "radar_blips",
    "threat_tier",
]
