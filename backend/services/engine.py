"""Request boundary for the allocation engine.

Every entry point returns an `Ok` or an `Err` instead of raising, so the
HTTP layer (or any other caller) only has to map rejection kinds to its own
responses. Catalog faults surface as `SYSTEM_UNAVAILABLE`, distinct from
user input errors.
"""

from __future__ import annotations

from typing import Callable, Optional, TypeVar

from backend.domain.constraints import BookingRules, TimeInput
from backend.domain.errors import BookingError, CatalogConfigurationError, RejectionKind
from backend.domain.models import Booking, BookingConfirmation, Room
from backend.domain.results import Err, Ok, Result
from backend.repository.booking_ledger import BookingLedger
from backend.repository.room_catalog import RoomCatalog
from backend.services.allocation_service import AllocationService
from backend.services.availability_service import AvailabilityChecker
from backend.services.booking_service import BookingService
from backend.utils.logger import get_logger


logger = get_logger(__name__)

T = TypeVar("T")

SYSTEM_UNAVAILABLE_MESSAGE = "The booking system is temporarily unavailable."


def _capture(operation: str, action: Callable[[], T]) -> Result[T]:
    try:
        return Ok(action())
    except BookingError as exc:
        return Err.from_exception(exc)
    except CatalogConfigurationError:
        logger.exception("Room catalog fault during %s", operation)
        return Err(kind=RejectionKind.SYSTEM_UNAVAILABLE, message=SYSTEM_UNAVAILABLE_MESSAGE)


class RoomBookingEngine:
    """Wires catalog, ledger, and services behind result-returning operations."""

    def __init__(
        self,
        catalog: RoomCatalog,
        ledger: Optional[BookingLedger] = None,
        allocation_service: Optional[AllocationService] = None,
        booking_service: Optional[BookingService] = None,
        availability_checker: Optional[AvailabilityChecker] = None,
        rules: Optional[BookingRules] = None,
    ) -> None:
        self._catalog = catalog
        self._ledger = ledger or BookingLedger()
        self._availability_checker = availability_checker or AvailabilityChecker(
            catalog,
            self._ledger,
        )
        self._booking_service = booking_service or BookingService(self._ledger)
        self._allocation_service = allocation_service or AllocationService(
            catalog=catalog,
            ledger=self._ledger,
            availability_checker=self._availability_checker,
            booking_service=self._booking_service,
            rules=rules,
        )

    def allocate(
        self,
        start: TimeInput,
        end: TimeInput,
        number_of_people: int,
    ) -> Result[BookingConfirmation]:
        return _capture(
            "allocate",
            lambda: self._allocation_service.book_room(start, end, number_of_people),
        )

    def get_booking_by_id(self, booking_id: int) -> Result[Booking]:
        return _capture(
            "get_booking_by_id",
            lambda: self._booking_service.get_by_id(booking_id),
        )

    def delete_booking(self, booking_id: int) -> Result[None]:
        return _capture(
            "delete_booking",
            lambda: self._booking_service.delete_by_id(booking_id),
        )

    def list_bookings(self, room_name: Optional[str] = None) -> list[Booking]:
        return self._booking_service.list_bookings(room_name)

    def list_available_rooms(self, start: TimeInput, end: TimeInput) -> Result[list[Room]]:
        return _capture(
            "list_available_rooms",
            lambda: self._availability_checker.list_available_rooms(start, end),
        )

    def list_rooms(self) -> list[Room]:
        return list(self._catalog.list_all())
