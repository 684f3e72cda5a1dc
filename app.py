"""
app.py: FastAPI application factory and startup lifecycle.

This is the ASGI application object imported by uvicorn.
It loads the room catalog, wires the booking engine, and registers routers.

Usage (via launcher):
    python main.py

Usage (direct uvicorn):
    uvicorn app:app --reload
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request

from backend.controllers.booking_controller import router as booking_router
from backend.controllers.room_controller import router as room_router
from backend.domain.constraints import validate_booking_rules
from backend.domain.errors import CatalogConfigurationError
from backend.repository.booking_ledger import BookingLedger
from backend.repository.room_catalog import RoomCatalog, build_room_catalog
from backend.services.engine import RoomBookingEngine
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


def _build_engine(settings: Settings, catalog: Optional[RoomCatalog]) -> Optional[RoomBookingEngine]:
    """
    Build the engine, or return None when configuration is unusable.

    A missing engine makes every endpoint answer 503 instead of treating a
    broken catalog as a user input error.
    """
    try:
        rules = settings.booking_rules()
        validate_booking_rules(rules)
        resolved_catalog = catalog if catalog is not None else build_room_catalog(settings)
    except (CatalogConfigurationError, ValueError):
        logger.exception("Booking engine configuration failed; serving 503 until fixed")
        return None
    return RoomBookingEngine(
        catalog=resolved_catalog,
        ledger=BookingLedger(),
        rules=rules,
    )


def create_app(
    settings: Optional[Settings] = None,
    catalog: Optional[RoomCatalog] = None,
) -> FastAPI:
    """
    Build and wire the FastAPI application.

    The catalog is loaded once here and shared read-only; the ledger is owned
    by the engine stored on app.state. Passing `catalog` skips configuration
    loading, which tests use to run against a custom room set.
    """
    resolved_settings = settings or get_settings()
    engine = _build_engine(resolved_settings, catalog)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Log readiness before accepting requests."""
        _startup(app)
        yield

    app = FastAPI(
        title=resolved_settings.app_name,
        version=resolved_settings.app_version,
        lifespan=lifespan,
    )

    # --- Routers ---
    app.include_router(booking_router)
    app.include_router(room_router)

    @app.get("/health", tags=["health"])
    async def health(request: Request) -> dict[str, Any]:
        current: Optional[RoomBookingEngine] = request.app.state.booking_engine
        if current is None:
            return {"status": "unavailable", "rooms": 0}
        return {"status": "ok", "rooms": len(current.list_rooms())}

    app.state.settings = resolved_settings
    app.state.booking_engine = engine

    return app


def _startup(app: FastAPI) -> None:
    engine: Optional[RoomBookingEngine] = app.state.booking_engine
    if engine is None:
        logger.error("Startup: booking engine unavailable, check room catalog configuration")
        return
    for room in engine.list_rooms():
        logger.info(
            "Startup: room ready | name=%s | capacity=%s | maintenance=%s",
            room.name,
            room.capacity,
            " ".join(str(window) for window in room.maintenance_windows) or "none",
        )
    logger.info("Startup complete, system ready")


# Module-level app object for uvicorn
app = create_app()
