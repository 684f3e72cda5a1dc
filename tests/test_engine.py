from __future__ import annotations

from backend.domain.errors import CatalogConfigurationError, RejectionKind
from backend.domain.models import BookingConfirmation
from backend.domain.results import Err, Ok
from backend.repository.booking_ledger import BookingLedger
from backend.repository.room_catalog import RoomCatalog, default_room_configs
from backend.services.engine import SYSTEM_UNAVAILABLE_MESSAGE, RoomBookingEngine


def _build_engine() -> RoomBookingEngine:
    return RoomBookingEngine(catalog=RoomCatalog(default_room_configs()), ledger=BookingLedger())


def test_allocate_returns_ok_confirmation() -> None:
    engine = _build_engine()

    result = engine.allocate("09:30", "10:00", 5)

    assert isinstance(result, Ok)
    assert result.ok
    assert isinstance(result.value, BookingConfirmation)
    assert result.value.message == "Room 'Beauty' booked successfully for 5 people from 09:30 to 10:00."


def test_allocate_rejections_become_err() -> None:
    engine = _build_engine()

    cases = {
        ("9:30", "10:00", 5): RejectionKind.INVALID_TIME_FORMAT,
        ("10:00", "09:30", 5): RejectionKind.INVALID_TIME_INTERVAL,
        ("09:30", "10:00", 1): RejectionKind.INVALID_NUMBER_OF_PEOPLE,
        ("12:00", "13:15", 5): RejectionKind.MAINTENANCE_CONFLICT,
        ("10:00", "11:00", 30): RejectionKind.NO_ROOM_AVAILABLE,
    }
    for (start, end, people), kind in cases.items():
        result = engine.allocate(start, end, people)
        assert isinstance(result, Err)
        assert not result.ok
        assert result.kind is kind


def test_all_rooms_booked_err_message() -> None:
    engine = _build_engine()
    for _ in range(4):
        assert engine.allocate("11:00", "12:00", 3).ok

    result = engine.allocate("11:00", "12:00", 20)

    assert result == Err(
        kind=RejectionKind.ALL_ROOMS_BOOKED,
        message="All rooms are already booked during the requested time.",
    )


def test_get_booking_is_stable_until_deleted() -> None:
    engine = _build_engine()
    booking_id = engine.allocate("11:00", "12:00", 3).value.booking_id

    first = engine.get_booking_by_id(booking_id)
    second = engine.get_booking_by_id(booking_id)
    assert first.ok and second.ok
    assert first.value == second.value
    assert first.value.room.name == "Amaze"

    assert engine.delete_booking(booking_id) == Ok(None)
    missing = engine.get_booking_by_id(booking_id)
    assert missing == Err(
        kind=RejectionKind.BOOKING_NOT_FOUND,
        message=f"Booking with ID {booking_id} not found.",
    )


def test_delete_frees_the_slot_for_the_same_room() -> None:
    engine = _build_engine()
    booking_id = engine.allocate("11:00", "12:00", 20).value.booking_id
    assert not engine.allocate("11:00", "12:00", 20).ok

    engine.delete_booking(booking_id)

    retry = engine.allocate("11:00", "12:00", 20)
    assert retry.ok
    assert retry.value.room_name == "Strive"
    assert retry.value.booking_id == booking_id + 1


def test_delete_unknown_booking_returns_err() -> None:
    engine = _build_engine()
    result = engine.delete_booking(999)
    assert result.kind is RejectionKind.BOOKING_NOT_FOUND
    assert result.message == "Booking with ID 999 not found."


def test_list_bookings_filters_by_room_and_orders_by_start() -> None:
    engine = _build_engine()
    engine.allocate("14:00", "15:00", 3)
    engine.allocate("10:00", "11:00", 3)
    engine.allocate("10:00", "11:00", 6)

    amaze = engine.list_bookings("Amaze")

    assert [booking.start_time.hour for booking in amaze] == [10, 14]
    assert len(engine.list_bookings()) == 3


def test_list_available_rooms_result() -> None:
    engine = _build_engine()
    engine.allocate("11:00", "12:00", 3)

    result = engine.list_available_rooms("11:00", "12:30")
    assert [room.name for room in result.value] == ["Beauty", "Inspire", "Strive"]

    rejected = engine.list_available_rooms("11:30", "11:00")
    assert rejected.kind is RejectionKind.INVALID_TIME_INTERVAL


def test_catalog_fault_is_reported_as_system_unavailable(monkeypatch) -> None:
    engine = _build_engine()

    def broken_catalog():
        raise CatalogConfigurationError("catalog vanished")

    monkeypatch.setattr(engine._catalog, "list_all", broken_catalog)

    result = engine.allocate("10:00", "11:00", 4)

    assert result == Err(kind=RejectionKind.SYSTEM_UNAVAILABLE, message=SYSTEM_UNAVAILABLE_MESSAGE)
