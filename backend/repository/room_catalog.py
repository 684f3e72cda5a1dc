"""Room catalog populated once from configuration and shared read-only."""

from __future__ import annotations

import json
from datetime import time
from pathlib import Path
from typing import Iterable, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from backend.domain.errors import CatalogConfigurationError
from backend.domain.models import Room, TimeWindow
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


class MaintenanceWindowConfig(BaseModel):
    start: time
    end: time

    @field_validator("start", "end")
    @classmethod
    def validate_wall_clock_minute(cls, value: time) -> time:
        if value.tzinfo is not None:
            raise ValueError("maintenance window times must not carry a timezone")
        if value.second or value.microsecond:
            raise ValueError("maintenance window times must be whole minutes (HH:mm)")
        return value


class RoomConfig(BaseModel):
    name: str = Field(min_length=1)
    capacity: int = Field(gt=0)
    maintenance_schedule: list[MaintenanceWindowConfig] = Field(default_factory=list)


class RoomCatalogConfig(BaseModel):
    rooms: list[RoomConfig]


def _default_maintenance_schedule() -> list[MaintenanceWindowConfig]:
    return [
        MaintenanceWindowConfig(start=time(9, 0), end=time(9, 15)),
        MaintenanceWindowConfig(start=time(13, 0), end=time(13, 15)),
        MaintenanceWindowConfig(start=time(17, 0), end=time(17, 15)),
    ]


def default_room_configs() -> list[RoomConfig]:
    """Built-in catalog used when no catalog file is configured."""
    return [
        RoomConfig(name="Amaze", capacity=3, maintenance_schedule=_default_maintenance_schedule()),
        RoomConfig(name="Beauty", capacity=7, maintenance_schedule=_default_maintenance_schedule()),
        RoomConfig(name="Inspire", capacity=12, maintenance_schedule=_default_maintenance_schedule()),
        RoomConfig(name="Strive", capacity=20, maintenance_schedule=_default_maintenance_schedule()),
    ]


def load_room_configs(path: Path) -> list[RoomConfig]:
    """Read a `{"rooms": [...]}` JSON catalog file."""
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except OSError as exc:
        raise CatalogConfigurationError(f"Room catalog file could not be read: {path}") from exc
    except json.JSONDecodeError as exc:
        raise CatalogConfigurationError(f"Room catalog file is not valid JSON: {exc}") from exc

    try:
        return RoomCatalogConfig.model_validate(payload).rooms
    except ValidationError as exc:
        raise CatalogConfigurationError(f"Room catalog file is invalid: {exc}") from exc


def _to_room(config: RoomConfig) -> Room:
    windows: list[TimeWindow] = []
    for entry in config.maintenance_schedule:
        if entry.start >= entry.end:
            raise CatalogConfigurationError(
                f"Room {config.name} has a maintenance window ending before it starts: "
                f"{entry.start} - {entry.end}"
            )
        windows.append(TimeWindow(start=entry.start, end=entry.end))
    return Room(name=config.name, capacity=config.capacity, maintenance_windows=tuple(windows))


class RoomCatalog:
    """Immutable, ordered set of bookable rooms."""

    def __init__(self, configs: Iterable[RoomConfig]) -> None:
        rooms: list[Room] = []
        by_name: dict[str, Room] = {}
        for config in configs:
            room = _to_room(config)
            if room.name in by_name:
                raise CatalogConfigurationError(f"Duplicate room name in catalog: {room.name}")
            by_name[room.name] = room
            rooms.append(room)
        self._rooms = tuple(rooms)
        self._by_name = by_name

    def __len__(self) -> int:
        return len(self._rooms)

    def list_all(self) -> tuple[Room, ...]:
        return self._rooms

    def find_by_name(self, name: str) -> Optional[Room]:
        return self._by_name.get(name)


def build_room_catalog(settings: Optional[Settings] = None) -> RoomCatalog:
    """Load the catalog from the configured file, or fall back to the built-in rooms."""
    resolved = settings or get_settings()
    if resolved.room_catalog_path is not None:
        configs = load_room_configs(resolved.room_catalog_path)
        source = str(resolved.room_catalog_path)
    else:
        configs = default_room_configs()
        source = "built-in defaults"
    catalog = RoomCatalog(configs)
    logger.info("Room catalog loaded | source=%s | rooms=%s", source, len(catalog))
    return catalog
