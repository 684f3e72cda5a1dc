"""Booking lifecycle: creation with id assignment, lookup, and removal."""

from __future__ import annotations

from typing import Optional

from backend.domain.errors import BookingNotFoundError
from backend.domain.models import Booking, Room, TimeWindow
from backend.repository.booking_ledger import BookingLedger
from backend.utils.logger import get_logger


logger = get_logger(__name__)


class BookingService:
    def __init__(self, ledger: BookingLedger) -> None:
        self._ledger = ledger

    def create(self, room: Room, window: TimeWindow, number_of_people: int) -> Booking:
        booking = Booking(
            booking_id=self._ledger.next_booking_id(),
            room=room,
            start_time=window.start,
            end_time=window.end,
            number_of_people=number_of_people,
        )
        self._ledger.save(booking)
        logger.info(
            "Booking created | booking_id=%s | room=%s | window=%s | people=%s",
            booking.booking_id,
            room.name,
            window,
            number_of_people,
        )
        return booking

    def get_by_id(self, booking_id: int) -> Booking:
        booking = self._ledger.find_by_id(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking

    def delete_by_id(self, booking_id: int) -> None:
        if not self._ledger.delete_by_id(booking_id):
            raise BookingNotFoundError(booking_id)
        logger.info("Booking deleted | booking_id=%s", booking_id)

    def list_bookings(self, room_name: Optional[str] = None) -> list[Booking]:
        bookings = self._ledger.list_all()
        if room_name is not None:
            bookings = [booking for booking in bookings if booking.room.name == room_name]
        return sorted(bookings, key=lambda booking: (booking.start_time, booking.booking_id))
