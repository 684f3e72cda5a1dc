"""Best-fit room allocation with lower-capacity fallback suggestions."""

from __future__ import annotations

from typing import Optional, Sequence

from backend.domain.constraints import (
    BookingRules,
    TimeInput,
    validate_interval,
    validate_number_of_people,
)
from backend.domain.errors import (
    AllRoomsBookedError,
    BookingError,
    NoRoomAvailableError,
)
from backend.domain.models import BookingConfirmation, Room
from backend.repository.booking_ledger import BookingLedger
from backend.repository.room_catalog import RoomCatalog
from backend.services.availability_service import AvailabilityChecker
from backend.services.booking_service import BookingService
from backend.utils.logger import get_logger


logger = get_logger(__name__)


def select_best_fit(available_rooms: Sequence[Room], number_of_people: int) -> Optional[Room]:
    """Smallest room that still fits the party; ties keep catalog order."""
    candidates = [room for room in available_rooms if room.capacity >= number_of_people]
    if not candidates:
        return None
    return min(candidates, key=lambda room: room.capacity)


def rank_fallback_rooms(available_rooms: Sequence[Room], number_of_people: int) -> list[Room]:
    """Free rooms that are too small, closest capacity first."""
    smaller = [room for room in available_rooms if room.capacity < number_of_people]
    return sorted(smaller, key=lambda room: room.capacity, reverse=True)


class AllocationService:
    """Validates a request, evaluates every room, and books the best fit."""

    def __init__(
        self,
        catalog: RoomCatalog,
        ledger: BookingLedger,
        availability_checker: Optional[AvailabilityChecker] = None,
        booking_service: Optional[BookingService] = None,
        rules: Optional[BookingRules] = None,
    ) -> None:
        self._catalog = catalog
        self._ledger = ledger
        self._availability_checker = availability_checker or AvailabilityChecker(catalog, ledger)
        self._booking_service = booking_service or BookingService(ledger)
        self._rules = rules or BookingRules()

    def book_room(
        self,
        start: TimeInput,
        end: TimeInput,
        number_of_people: int,
    ) -> BookingConfirmation:
        logger.info(
            "Allocation requested | start=%s | end=%s | people=%s",
            start,
            end,
            number_of_people,
        )
        try:
            confirmation = self._allocate(start, end, number_of_people)
        except BookingError as exc:
            logger.warning("Allocation rejected | kind=%s | reason=%s", exc.kind.value, exc.message)
            raise
        logger.info("Allocation completed | %s", confirmation.message)
        return confirmation

    def _allocate(
        self,
        start: TimeInput,
        end: TimeInput,
        number_of_people: int,
    ) -> BookingConfirmation:
        window = validate_interval(start, end, self._rules)
        validate_number_of_people(number_of_people, self._rules)

        rooms = self._catalog.list_all()
        if not rooms:
            raise NoRoomAvailableError()

        # Evaluation and insertion share one critical section so two requests
        # cannot both see the same slot as free.
        with self._ledger.transaction():
            available_rooms = [
                room
                for room in rooms
                if self._availability_checker.is_available(room, window)
            ]
            if not available_rooms:
                raise AllRoomsBookedError()

            room = select_best_fit(available_rooms, number_of_people)
            if room is None:
                fallback_rooms = rank_fallback_rooms(available_rooms, number_of_people)
                raise NoRoomAvailableError.with_fallbacks(number_of_people, fallback_rooms)

            booking = self._booking_service.create(room, window, number_of_people)

        return BookingConfirmation.from_booking(booking)
