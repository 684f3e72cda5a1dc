"""Runtime settings resolved from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from backend.domain.constraints import BookingRules


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _env_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return Path(raw.strip())


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_version: str
    log_level: str
    api_host: str
    api_port: int
    room_catalog_path: Optional[Path]
    booking_slot_granularity_minutes: int
    booking_min_duration_minutes: int
    booking_max_duration_minutes: int
    booking_min_people: int
    booking_advisory_max_people: int

    def booking_rules(self) -> BookingRules:
        return BookingRules(
            slot_granularity_minutes=self.booking_slot_granularity_minutes,
            min_duration_minutes=self.booking_min_duration_minutes,
            max_duration_minutes=self.booking_max_duration_minutes,
            min_people=self.booking_min_people,
            advisory_max_people=self.booking_advisory_max_people,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings once per process; call `cache_clear()` to re-read env."""
    return Settings(
        app_name=os.getenv("APP_NAME", "Meeting Room Allocation Service"),
        app_version=os.getenv("APP_VERSION", "1.0.0"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        api_host=os.getenv("API_HOST", "127.0.0.1"),
        api_port=_env_int("API_PORT", 8000),
        room_catalog_path=_env_path("ROOM_CATALOG_PATH"),
        booking_slot_granularity_minutes=_env_int("BOOKING_SLOT_GRANULARITY_MINUTES", 15),
        booking_min_duration_minutes=_env_int("BOOKING_MIN_DURATION_MINUTES", 30),
        booking_max_duration_minutes=_env_int("BOOKING_MAX_DURATION_MINUTES", 300),
        booking_min_people=_env_int("BOOKING_MIN_PEOPLE", 2),
        booking_advisory_max_people=_env_int("BOOKING_ADVISORY_MAX_PEOPLE", 20),
    )
