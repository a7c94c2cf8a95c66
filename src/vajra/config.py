# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Runtime settings for the VAJRA tactical engine.

Every value can be overridden from the environment with the ``VAJRA_``
prefix (e.g. ``VAJRA_DRONE_INTERVAL=1.5``) or from a local ``.env`` file.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="VAJRA_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "VAJRA-X"
    log_level: str = "INFO"

    # RNG seed for the simulated sensors (None = OS entropy)
    seed: int | None = None

    # Timer periods (seconds of logical time)
    vitals_interval: float = Field(default=1.0, gt=0)
    drone_interval: float = Field(default=3.0, gt=0)
    gunfire_interval: float = Field(default=5.0, gt=0)
    navigation_interval: float = Field(default=2.0, gt=0)

    # Per-tick emission probabilities
    drone_probability: float = Field(default=0.15, ge=0, le=1)
    gunfire_probability: float = Field(default=0.08, ge=0, le=1)

    # One-shot delays
    jam_clear_delay: float = Field(default=10.0, gt=0)
    deadman_seconds: int = Field(default=30, ge=1)
    deadman_tick: float = Field(default=1.0, gt=0)

    # Display-side ages and thresholds
    drone_alert_ttl: float = Field(default=30.0, gt=0)
    critical_distance: float = Field(default=300.0, gt=0)

    # Starting position
    start_lat: float = 34.0522
    start_lng: float = -118.2437
    start_alt: float = 2847.0
    start_heading: float = Field(default=45.0, ge=0, lt=360)


settings = Settings()
