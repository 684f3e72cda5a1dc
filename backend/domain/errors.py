"""Rejection taxonomy for the room allocation engine."""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from backend.domain.models import Room, TimeWindow


ALL_ROOMS_BOOKED_MESSAGE = "All rooms are already booked during the requested time."
NO_SUITABLE_ROOM_MESSAGE = "No suitable room available for the requested time."


class RejectionKind(str, Enum):
    INVALID_TIME_FORMAT = "INVALID_TIME_FORMAT"
    INVALID_TIME_INTERVAL = "INVALID_TIME_INTERVAL"
    INVALID_NUMBER_OF_PEOPLE = "INVALID_NUMBER_OF_PEOPLE"
    MAINTENANCE_CONFLICT = "MAINTENANCE_CONFLICT"
    ALL_ROOMS_BOOKED = "ALL_ROOMS_BOOKED"
    NO_ROOM_AVAILABLE = "NO_ROOM_AVAILABLE"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    SYSTEM_UNAVAILABLE = "SYSTEM_UNAVAILABLE"


class BookingError(Exception):
    """Base class for request-level rejections."""

    kind: RejectionKind

    @property
    def message(self) -> str:
        return str(self)


class InvalidTimeFormatError(BookingError):
    """Raised when a time value is not a valid HH:mm time of day."""

    kind = RejectionKind.INVALID_TIME_FORMAT


class InvalidTimeIntervalError(BookingError):
    """Raised for ordering, granularity, and duration violations."""

    kind = RejectionKind.INVALID_TIME_INTERVAL


class InvalidNumberOfPeopleError(BookingError):
    kind = RejectionKind.INVALID_NUMBER_OF_PEOPLE


class MaintenanceConflictError(BookingError):
    """Raised when the requested interval overlaps a room's maintenance windows."""

    kind = RejectionKind.MAINTENANCE_CONFLICT

    def __init__(self, room: Room, windows: Sequence[TimeWindow]) -> None:
        self.room = room
        self.windows = tuple(windows)
        rendered = " ".join(str(window) for window in self.windows)
        super().__init__(
            "The requested time overlaps with the following maintenance windows "
            f"for room: {room.name}: {rendered}"
        )


class AllRoomsBookedError(BookingError):
    kind = RejectionKind.ALL_ROOMS_BOOKED

    def __init__(self, message: str = ALL_ROOMS_BOOKED_MESSAGE) -> None:
        super().__init__(message)


class NoRoomAvailableError(BookingError):
    """Raised when no room fits; may carry smaller rooms that are free."""

    kind = RejectionKind.NO_ROOM_AVAILABLE

    def __init__(
        self,
        message: str = NO_SUITABLE_ROOM_MESSAGE,
        fallback_rooms: Sequence[Room] = (),
    ) -> None:
        self.fallback_rooms = tuple(fallback_rooms)
        super().__init__(message)

    @classmethod
    def with_fallbacks(cls, number_of_people: int, fallback_rooms: Sequence[Room]) -> NoRoomAvailableError:
        if not fallback_rooms:
            return cls()
        lines = [
            f"All rooms suitable for {number_of_people} people are booked, but the following "
            "rooms with lower capacity are available during the requested time:\n"
        ]
        for room in fallback_rooms:
            lines.append(f"Room '{room.name}' with a capacity of {room.capacity} people.\n")
        return cls("".join(lines).rstrip(), fallback_rooms=fallback_rooms)


class BookingNotFoundError(BookingError):
    kind = RejectionKind.BOOKING_NOT_FOUND

    def __init__(self, booking_id: int) -> None:
        self.booking_id = booking_id
        super().__init__(f"Booking with ID {booking_id} not found.")


class CatalogConfigurationError(Exception):
    """Raised when the configured room catalog cannot be loaded or is inconsistent."""
