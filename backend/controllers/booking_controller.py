"""HTTP controller layer for booking allocation and lifecycle."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from backend.controllers.dependencies import (
    UNEXPECTED_ERROR_MESSAGE,
    get_booking_engine,
    parse_booking_id,
    rejection_to_http,
)
from backend.controllers.room_controller import RoomResponse
from backend.domain.models import Booking, BookingConfirmation, format_time_of_day
from backend.services.engine import RoomBookingEngine
from backend.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


class BookingRequest(BaseModel):
    """Input DTO; time and party-size rules are enforced by the engine."""

    start_time: str = Field(min_length=1, examples=["09:30"])
    end_time: str = Field(min_length=1, examples=["10:00"])
    number_of_people: int = Field(
        description="Party size; at least 2. Rooms seat at most 20 people.",
        examples=[5],
    )


class BookingConfirmationResponse(BaseModel):
    message: str
    booking_id: int = Field(gt=0)
    room_name: str
    number_of_people: int
    start_time: str
    end_time: str

    @classmethod
    def from_confirmation(cls, confirmation: BookingConfirmation) -> BookingConfirmationResponse:
        return cls(
            message=confirmation.message,
            booking_id=confirmation.booking_id,
            room_name=confirmation.room_name,
            number_of_people=confirmation.number_of_people,
            start_time=format_time_of_day(confirmation.start_time),
            end_time=format_time_of_day(confirmation.end_time),
        )


class BookingResponse(BaseModel):
    booking_id: int = Field(gt=0)
    room: RoomResponse
    start_time: str
    end_time: str
    number_of_people: int

    @classmethod
    def from_booking(cls, booking: Booking) -> BookingResponse:
        return cls(
            booking_id=booking.booking_id,
            room=RoomResponse.from_room(booking.room),
            start_time=format_time_of_day(booking.start_time),
            end_time=format_time_of_day(booking.end_time),
            number_of_people=booking.number_of_people,
        )


class DeleteBookingResponse(BaseModel):
    message: str = "Booking deleted successfully."


@router.post(
    "/book",
    response_model=BookingConfirmationResponse,
    status_code=status.HTTP_200_OK,
)
async def book_room(
    payload: BookingRequest,
    engine: RoomBookingEngine = Depends(get_booking_engine),
) -> BookingConfirmationResponse:
    """Allocate the best-fitting free room for the requested interval."""
    logger.info(
        "POST /api/bookings/book | start=%s | end=%s | people=%s",
        payload.start_time,
        payload.end_time,
        payload.number_of_people,
    )
    try:
        result = engine.allocate(
            payload.start_time,
            payload.end_time,
            payload.number_of_people,
        )
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected booking failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=UNEXPECTED_ERROR_MESSAGE,
        ) from exc

    if not result.ok:
        logger.error("Booking failed | kind=%s | reason=%s", result.kind.value, result.message)
        raise rejection_to_http(result)
    return BookingConfirmationResponse.from_confirmation(result.value)


@router.get(
    "",
    response_model=list[BookingResponse],
    status_code=status.HTTP_200_OK,
)
async def list_bookings(
    room_name: Optional[str] = Query(default=None, min_length=1),
    engine: RoomBookingEngine = Depends(get_booking_engine),
) -> list[BookingResponse]:
    bookings = engine.list_bookings(room_name)
    return [BookingResponse.from_booking(booking) for booking in bookings]


@router.get(
    "/view/{booking_id}",
    response_model=BookingResponse,
    status_code=status.HTTP_200_OK,
)
async def view_booking(
    booking_id: str,
    engine: RoomBookingEngine = Depends(get_booking_engine),
) -> BookingResponse:
    resolved_id = parse_booking_id(booking_id)
    logger.info("GET /api/bookings/view/%s", resolved_id)
    try:
        result = engine.get_booking_by_id(resolved_id)
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected failure while fetching booking")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=UNEXPECTED_ERROR_MESSAGE,
        ) from exc

    if not result.ok:
        logger.error("Booking lookup failed | reason=%s", result.message)
        raise rejection_to_http(result)
    return BookingResponse.from_booking(result.value)


@router.delete(
    "/delete/{booking_id}",
    response_model=DeleteBookingResponse,
    status_code=status.HTTP_200_OK,
)
async def delete_booking(
    booking_id: str,
    engine: RoomBookingEngine = Depends(get_booking_engine),
) -> DeleteBookingResponse:
    resolved_id = parse_booking_id(booking_id)
    logger.info("DELETE /api/bookings/delete/%s", resolved_id)
    try:
        result = engine.delete_booking(resolved_id)
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected failure while deleting booking")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=UNEXPECTED_ERROR_MESSAGE,
        ) from exc

    if not result.ok:
        logger.error("Booking deletion failed | reason=%s", result.message)
        raise rejection_to_http(result)
    return DeleteBookingResponse()
