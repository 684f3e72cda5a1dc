"""In-memory store of active bookings."""

from __future__ import annotations

from contextlib import contextmanager
from threading import RLock
from typing import Iterator, Optional

from backend.domain.models import Booking, Room, TimeWindow
from backend.utils.logger import get_logger


logger = get_logger(__name__)


class BookingLedger:
    """Owns every active booking plus the id counter.

    All methods take the same re-entrant lock, so callers can wrap a read
    followed by a write in `transaction()` and have both run atomically.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._by_id: dict[int, Booking] = {}
        self._last_booking_id = 0

    @contextmanager
    def transaction(self) -> Iterator[BookingLedger]:
        with self._lock:
            yield self

    def next_booking_id(self) -> int:
        with self._lock:
            self._last_booking_id += 1
            return self._last_booking_id

    def save(self, booking: Booking) -> None:
        with self._lock:
            self._by_id[booking.booking_id] = booking

    def find_by_id(self, booking_id: int) -> Optional[Booking]:
        with self._lock:
            return self._by_id.get(booking_id)

    def find_by_room(self, room: Room) -> list[Booking]:
        with self._lock:
            return [
                booking
                for booking in self._by_id.values()
                if booking.room.name == room.name
            ]

    def find_overlapping(self, room: Room, window: TimeWindow) -> list[Booking]:
        """Return bookings for `room` that strictly overlap `window`."""
        return [
            booking
            for booking in self.find_by_room(room)
            if booking.window.overlaps(window)
        ]

    def list_all(self) -> list[Booking]:
        with self._lock:
            return sorted(self._by_id.values(), key=lambda booking: booking.booking_id)

    def count(self) -> int:
        with self._lock:
            return len(self._by_id)

    def delete_by_id(self, booking_id: int) -> bool:
        with self._lock:
            return self._by_id.pop(booking_id, None) is not None

    def clear(self) -> None:
        """Drop all bookings; ids keep increasing afterwards."""
        with self._lock:
            removed = len(self._by_id)
            self._by_id.clear()
        logger.info("Booking ledger cleared | removed=%s", removed)

    def reset(self) -> None:
        """Drop all bookings and restart the id counter."""
        with self._lock:
            self._by_id.clear()
            self._last_booking_id = 0
