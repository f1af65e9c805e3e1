"""Calculation settings loaded from the environment."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TripCalcSettings(BaseSettings):
    """Thresholds and factors used by the trip calculation pass.

    Every field can be overridden with an ``RFMS_TRIP_`` prefixed
    environment variable, e.g. ``RFMS_TRIP_CO2_KG_PER_LITER=2.64``.
    """

    model_config = SettingsConfigDict(
        env_prefix="RFMS_TRIP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    co2_kg_per_liter: float = Field(default=2.65, gt=0)

    # Exact-duration work segments must last strictly longer than this
    min_work_segment_seconds: float = Field(default=60.0, ge=0)
    # Seconds a non-driving state needs to own a minute on its own
    min_other_state_seconds: float = Field(default=58.0, ge=0, le=60)
    # Consecutive WORK minutes needed before they count as filtered work
    min_work_run_minutes: int = Field(default=2, ge=1)

    fail_fast: bool = False

    log_level: str = "INFO"
    log_file: Path | None = None

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level {value!r}")
        return level
