from __future__ import annotations

from dataclasses import replace

import pytest
from fastapi.testclient import TestClient

from app import create_app
from backend.utils.config import get_settings


def _build_test_client(**overrides) -> TestClient:
    get_settings.cache_clear()
    fields = {"room_catalog_path": None}
    fields.update(overrides)
    settings = replace(get_settings(), **fields)
    return TestClient(create_app(settings=settings))


def _book(client: TestClient, start: str, end: str, people: int):
    return client.post(
        "/api/bookings/book",
        json={"start_time": start, "end_time": end, "number_of_people": people},
    )


def test_book_room_success() -> None:
    client = _build_test_client()

    response = _book(client, "09:30", "10:00", 5)

    assert response.status_code == 200
    payload = response.json()
    assert payload["message"] == "Room 'Beauty' booked successfully for 5 people from 09:30 to 10:00."
    assert payload["room_name"] == "Beauty"
    assert payload["booking_id"] == 1
    assert (payload["start_time"], payload["end_time"]) == ("09:30", "10:00")


@pytest.mark.parametrize(
    ("start", "end", "people", "detail"),
    [
        ("09:30", "10:00", 1, "Number of people should be greater than 1."),
        ("10:00", "09:30", 5, "End time must be after start time."),
        ("09:154", "09:30", 5, "Invalid start time format. Please use HH:mm format (e.g., 14:30)."),
        (
            "12:00",
            "13:15",
            5,
            "The requested time overlaps with the following maintenance windows for room: "
            "Amaze: [13:00 to 13:15]",
        ),
    ],
)
def test_book_room_rejections_return_400(start: str, end: str, people: int, detail: str) -> None:
    client = _build_test_client()

    response = _book(client, start, end, people)

    assert response.status_code == 400
    assert response.json()["detail"] == detail


def test_book_room_all_rooms_booked() -> None:
    client = _build_test_client()
    for _ in range(4):
        assert _book(client, "11:00", "12:00", 3).status_code == 200

    response = _book(client, "11:00", "12:00", 20)

    assert response.status_code == 400
    assert response.json()["detail"] == "All rooms are already booked during the requested time."


def test_book_room_missing_field_is_422() -> None:
    client = _build_test_client()
    response = client.post("/api/bookings/book", json={"start_time": "09:30", "end_time": "10:00"})
    assert response.status_code == 422


def test_view_and_delete_booking_flow() -> None:
    client = _build_test_client()
    booking_id = _book(client, "11:00", "12:00", 3).json()["booking_id"]

    view = client.get(f"/api/bookings/view/{booking_id}")
    assert view.status_code == 200
    assert view.json() == {
        "booking_id": booking_id,
        "room": {
            "name": "Amaze",
            "capacity": 3,
            "maintenance_windows": [
                {"start": "09:00", "end": "09:15"},
                {"start": "13:00", "end": "13:15"},
                {"start": "17:00", "end": "17:15"},
            ],
        },
        "start_time": "11:00",
        "end_time": "12:00",
        "number_of_people": 3,
    }

    listing = client.get("/api/bookings", params={"room_name": "Amaze"})
    assert [item["booking_id"] for item in listing.json()] == [booking_id]

    delete = client.delete(f"/api/bookings/delete/{booking_id}")
    assert delete.status_code == 200
    assert delete.json() == {"message": "Booking deleted successfully."}

    missing = client.get(f"/api/bookings/view/{booking_id}")
    assert missing.status_code == 404
    assert missing.json()["detail"] == f"Booking with ID {booking_id} not found."


def test_delete_unknown_booking_is_404() -> None:
    client = _build_test_client()
    response = client.delete("/api/bookings/delete/999")
    assert response.status_code == 404
    assert response.json()["detail"] == "Booking with ID 999 not found."


@pytest.mark.parametrize("booking_id", ["abc", "-1", "1.5", "0"])
def test_invalid_booking_ids_rejected(booking_id: str) -> None:
    client = _build_test_client()

    view = client.get(f"/api/bookings/view/{booking_id}")
    delete = client.delete(f"/api/bookings/delete/{booking_id}")

    for response in (view, delete):
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid ID. ID must be a positive integer."


def test_room_listing_and_availability() -> None:
    client = _build_test_client()
    _book(client, "11:00", "12:00", 3)

    rooms = client.get("/api/rooms")
    assert [room["name"] for room in rooms.json()] == ["Amaze", "Beauty", "Inspire", "Strive"]

    available = client.get("/api/rooms/available", params={"start_time": "11:00", "end_time": "12:30"})
    assert available.status_code == 200
    assert [room["name"] for room in available.json()] == ["Beauty", "Inspire", "Strive"]

    maintenance = client.get("/api/rooms/available", params={"start_time": "13:00", "end_time": "14:00"})
    assert maintenance.json() == []

    invalid = client.get("/api/rooms/available", params={"start_time": "11:30", "end_time": "11:00"})
    assert invalid.status_code == 400
    assert invalid.json()["detail"] == "Start time must be before end time."


def test_broken_catalog_makes_service_unavailable(tmp_path) -> None:
    broken = tmp_path / "rooms.json"
    broken.write_text('{"rooms": [{"name": "Focus", "capacity": -2}]}', encoding="utf-8")
    client = _build_test_client(room_catalog_path=broken)

    booking = _book(client, "09:30", "10:00", 2)
    health = client.get("/health")

    assert booking.status_code == 503
    assert health.json() == {"status": "unavailable", "rooms": 0}


def test_timezone_aware_catalog_makes_service_unavailable(tmp_path) -> None:
    catalog_file = tmp_path / "rooms.json"
    catalog_file.write_text(
        '{"rooms": [{"name": "Focus", "capacity": 4, '
        '"maintenance_schedule": [{"start": "09:00Z", "end": "09:15Z"}]}]}',
        encoding="utf-8",
    )
    client = _build_test_client(room_catalog_path=catalog_file)

    booking = _book(client, "10:00", "11:00", 2)
    health = client.get("/health")

    assert booking.status_code == 503
    assert health.json() == {"status": "unavailable", "rooms": 0}


def test_health_reports_room_count() -> None:
    client = _build_test_client()
    assert client.get("/health").json() == {"status": "ok", "rooms": 4}
