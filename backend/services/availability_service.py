"""Conflict detection against existing bookings and maintenance windows."""

from __future__ import annotations

from backend.domain.constraints import TimeInput, parse_time_of_day
from backend.domain.errors import InvalidTimeIntervalError, MaintenanceConflictError
from backend.domain.models import Room, TimeWindow
from backend.repository.booking_ledger import BookingLedger
from backend.repository.room_catalog import RoomCatalog
from backend.utils.logger import get_logger


logger = get_logger(__name__)


def find_maintenance_conflicts(room: Room, window: TimeWindow) -> list[TimeWindow]:
    """Return every maintenance window of `room` overlapping `window`, in catalog order."""
    return [
        maintenance
        for maintenance in room.maintenance_windows
        if window.overlaps(maintenance)
    ]


class AvailabilityChecker:
    """Decides whether a room can take a booking for an interval."""

    def __init__(self, catalog: RoomCatalog, ledger: BookingLedger) -> None:
        self._catalog = catalog
        self._ledger = ledger

    def has_booking_conflict(self, room: Room, window: TimeWindow) -> bool:
        return bool(self._ledger.find_overlapping(room, window))

    def is_available(self, room: Room, window: TimeWindow) -> bool:
        """Return False on a booking conflict; raise on a maintenance-only conflict.

        Booking conflicts win over maintenance: a room that is already booked
        is reported as plain unavailability even if maintenance also overlaps.
        """
        if self.has_booking_conflict(room, window):
            logger.debug(
                "Room unavailable due to existing bookings | room=%s | window=%s",
                room.name,
                window,
            )
            return False

        conflicts = find_maintenance_conflicts(room, window)
        if conflicts:
            logger.warning(
                "Maintenance overlap | room=%s | window=%s | overlapping=%s",
                room.name,
                window,
                len(conflicts),
            )
            raise MaintenanceConflictError(room, conflicts)

        logger.debug("Room available | room=%s | window=%s", room.name, window)
        return True

    def list_available_rooms(self, start: TimeInput, end: TimeInput) -> list[Room]:
        """Rooms free of both bookings and maintenance for the interval.

        Only format and ordering are checked here; maintenance overlap simply
        excludes a room instead of failing the query.
        """
        start_time = parse_time_of_day(start, "start")
        end_time = parse_time_of_day(end, "end")
        if start_time >= end_time:
            raise InvalidTimeIntervalError("Start time must be before end time.")

        window = TimeWindow(start=start_time, end=end_time)
        available = [
            room
            for room in self._catalog.list_all()
            if not self.has_booking_conflict(room, window)
            and not find_maintenance_conflicts(room, window)
        ]
        logger.info(
            "Availability query | window=%s | available=%s/%s",
            window,
            len(available),
            len(self._catalog),
        )
        return available
