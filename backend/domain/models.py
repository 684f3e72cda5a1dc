"""Domain models for room catalog entries, bookings, and confirmations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time


def format_time_of_day(value: time) -> str:
    return value.strftime("%H:%M")


def minutes_since_midnight(value: time) -> int:
    return value.hour * 60 + value.minute


@dataclass(frozen=True)
class TimeWindow:
    """Same-day interval between two wall-clock times."""

    start: time
    end: time

    @property
    def duration_minutes(self) -> int:
        return minutes_since_midnight(self.end) - minutes_since_midnight(self.start)

    def overlaps(self, other: TimeWindow) -> bool:
        """Strict overlap: windows that only touch at a boundary do not conflict."""
        return self.start < other.end and self.end > other.start

    def __str__(self) -> str:
        return f"[{format_time_of_day(self.start)} to {format_time_of_day(self.end)}]"


@dataclass(frozen=True)
class Room:
    name: str
    capacity: int
    maintenance_windows: tuple[TimeWindow, ...] = ()


@dataclass(frozen=True)
class Booking:
    booking_id: int
    room: Room
    start_time: time
    end_time: time
    number_of_people: int

    @property
    def window(self) -> TimeWindow:
        return TimeWindow(start=self.start_time, end=self.end_time)


@dataclass(frozen=True)
class BookingConfirmation:
    booking_id: int
    room_name: str
    number_of_people: int
    start_time: time
    end_time: time

    @property
    def message(self) -> str:
        return (
            f"Room '{self.room_name}' booked successfully for {self.number_of_people} people "
            f"from {format_time_of_day(self.start_time)} to {format_time_of_day(self.end_time)}."
        )

    @classmethod
    def from_booking(cls, booking: Booking) -> BookingConfirmation:
        return cls(
            booking_id=booking.booking_id,
            room_name=booking.room.name,
            number_of_people=booking.number_of_people,
            start_time=booking.start_time,
            end_time=booking.end_time,
        )
