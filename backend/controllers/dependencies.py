"""Shared FastAPI dependency providers and response mapping for controllers."""

from __future__ import annotations

import re

from fastapi import HTTPException, Request, status

from backend.domain.errors import RejectionKind
from backend.domain.results import Err
from backend.services.engine import RoomBookingEngine
from backend.utils.logger import get_logger


logger = get_logger(__name__)

BOOKING_ID_PATTERN = re.compile(r"^[0-9]+$")
INVALID_BOOKING_ID_MESSAGE = "Invalid ID. ID must be a positive integer."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."

_STATUS_BY_KIND = {
    RejectionKind.BOOKING_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    RejectionKind.SYSTEM_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def get_booking_engine(request: Request) -> RoomBookingEngine:
    engine = getattr(request.app.state, "booking_engine", None)
    if engine is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Booking engine is not initialized",
        )
    return engine


def parse_booking_id(raw_booking_id: str) -> int:
    if not BOOKING_ID_PATTERN.match(raw_booking_id) or int(raw_booking_id) <= 0:
        logger.error("Invalid booking id | value=%s", raw_booking_id)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=INVALID_BOOKING_ID_MESSAGE,
        )
    return int(raw_booking_id)


def rejection_to_http(rejection: Err) -> HTTPException:
    """User rejections become 400s; unknown ids 404; catalog faults 503."""
    return HTTPException(
        status_code=_STATUS_BY_KIND.get(rejection.kind, status.HTTP_400_BAD_REQUEST),
        detail=rejection.message,
    )
