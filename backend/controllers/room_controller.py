"""HTTP controller layer for the room catalog and availability queries."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from backend.controllers.dependencies import (
    UNEXPECTED_ERROR_MESSAGE,
    get_booking_engine,
    rejection_to_http,
)
from backend.domain.models import Room, format_time_of_day
from backend.services.engine import RoomBookingEngine
from backend.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(prefix="/api/rooms", tags=["rooms"])


class MaintenanceWindowResponse(BaseModel):
    start: str
    end: str


class RoomResponse(BaseModel):
    name: str = Field(min_length=1)
    capacity: int = Field(gt=0)
    maintenance_windows: list[MaintenanceWindowResponse]

    @classmethod
    def from_room(cls, room: Room) -> RoomResponse:
        return cls(
            name=room.name,
            capacity=room.capacity,
            maintenance_windows=[
                MaintenanceWindowResponse(
                    start=format_time_of_day(window.start),
                    end=format_time_of_day(window.end),
                )
                for window in room.maintenance_windows
            ],
        )


@router.get(
    "",
    response_model=list[RoomResponse],
    status_code=status.HTTP_200_OK,
)
async def list_rooms(
    engine: RoomBookingEngine = Depends(get_booking_engine),
) -> list[RoomResponse]:
    return [RoomResponse.from_room(room) for room in engine.list_rooms()]


@router.get(
    "/available",
    response_model=list[RoomResponse],
    status_code=status.HTTP_200_OK,
)
async def get_available_rooms(
    start_time: str = Query(min_length=1),
    end_time: str = Query(min_length=1),
    engine: RoomBookingEngine = Depends(get_booking_engine),
) -> list[RoomResponse]:
    """Rooms with neither a booking nor maintenance during the interval."""
    logger.info("GET /api/rooms/available | start=%s | end=%s", start_time, end_time)
    try:
        result = engine.list_available_rooms(start_time, end_time)
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected availability failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=UNEXPECTED_ERROR_MESSAGE,
        ) from exc

    if not result.ok:
        logger.error("Availability query failed | reason=%s", result.message)
        raise rejection_to_http(result)
    return [RoomResponse.from_room(room) for room in result.value]
