# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Root conftest — shared fixtures for engine tests."""

import pytest
from loguru import logger

from vajra.config import Settings
from vajra.simulation.clock import Scheduler
from vajra.simulation.engine import TacticalEngine
from vajra.simulation.random_source import ScriptedRandom


@pytest.fixture
def settings():
    """Default settings, isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def scheduler():
    return Scheduler()


@pytest.fixture
def quiet_rng():
    """Every draw is 0.5: vitals hold steady, nothing is emitted."""
    return ScriptedRandom(fallback=0.5)


@pytest.fixture
def engine(settings, scheduler, quiet_rng):
    e = TacticalEngine(settings=settings, scheduler=scheduler, rng=quiet_rng)
    yield e
    e.stop()


@pytest.fixture
def log_messages():
    """Capture loguru messages emitted during the test."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
