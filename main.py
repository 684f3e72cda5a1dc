"""
main.py: Server launcher and entry point.

Run this file to start the room booking API:

    python main.py

This file does NOT contain application logic. See app.py for the FastAPI
application, engine wiring, and startup sequence.

Direct uvicorn usage:
    uvicorn app:app --reload
"""

from __future__ import annotations

import uvicorn

from backend.utils.config import get_settings


def main() -> None:
    """Start the room booking API server."""
    settings = get_settings()
    base_url = f"http://{settings.api_host}:{settings.api_port}"
    print("=" * 60)
    print(f"  {settings.app_name} v{settings.app_version}")
    print("=" * 60)
    print(f"  Server   : {base_url}")
    print(f"  API docs : {base_url}/docs")
    print(f"  Catalog  : {settings.room_catalog_path or 'built-in defaults'}")
    print("=" * 60)
    print("  Press CTRL+C to stop\n")

    # Blocks until CTRL+C
    uvicorn.run(
        "app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
