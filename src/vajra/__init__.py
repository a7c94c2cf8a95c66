# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""VAJRA — simulated tactical-awareness state engine.

Usage::

    from vajra import create_engine

    engine = create_engine()
    engine.start()
    engine.scheduler.run(duration=60)      # real time
    # or engine.advance(60)                # logical time, no sleeping
    snap = engine.snapshot()
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from .comms.event_bus import EventBus
    from .config import Settings
    from .simulation.engine import TacticalEngine
    from .simulation.random_source import RandomSource

__all__ = ["configure_logging", "create_engine"]

_sink_id: int | None = None


def configure_logging(level: str = "INFO") -> None:
    """Route loguru to stderr at *level*, replacing any sink we added before."""
    global _sink_id
    if _sink_id is not None:
        logger.remove(_sink_id)
    else:
        logger.remove()
    _sink_id = logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name} - {message}",
    )


def create_engine(
    settings: Settings | None = None,
    event_bus: EventBus | None = None,
    rng: RandomSource | None = None,
) -> TacticalEngine:
    """Build a TacticalEngine wired to an EventBus.

    Args:
        settings: Settings object (from vajra.config) or None for defaults.
        event_bus: Bus for state_changed / deadman_triggered events.
            A fresh one is created when omitted.
        rng: Random source for the simulated sensors.  Defaults to a
            ``random.Random`` seeded from ``settings.seed``.
    """
    from .comms.event_bus import EventBus
    from .config import settings as default_settings
    from .simulation.engine import TacticalEngine

    settings = settings if settings is not None else default_settings
    configure_logging(settings.log_level)
    if event_bus is None:
        event_bus = EventBus()
    return TacticalEngine(settings=settings, rng=rng, event_bus=event_bus)
