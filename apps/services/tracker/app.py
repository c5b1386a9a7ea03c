"""
Tracker FastAPI Application - shared gather/claim board

App factory plus the module-level ``app`` used by uvicorn:

    uvicorn apps.services.tracker.app:app --port 3001

Structure:
    - dependencies.py: TrackerContext construction and request accessors
    - lifespan.py: startup/shutdown (logging, context, snapshot scheduler)
    - schemas.py: request bodies
    - routers/: health, auth, items, events, passwords
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from apps.services.tracker.lifespan import lifespan
from apps.services.tracker.routers import (
    auth_router,
    events_router,
    health_router,
    items_router,
    passwords_router,
)
from libs.core.config import TrackerSettings, get_settings
from libs.core.exceptions import TrackerError

logger = logging.getLogger("uvicorn.error")


async def tracker_error_handler(request: Request, exc: TrackerError) -> JSONResponse:
    """Render domain errors as {"error", "code"} with their HTTP status."""
    if exc.status_code >= 500:
        logger.error(f"[Tracker] {request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(exc.to_dict(), status_code=exc.status_code)


def create_app(settings: Optional[TrackerSettings] = None) -> FastAPI:
    """
    Build the tracker application.

    Args:
        settings: Explicit settings (tests); defaults to environment settings

    Returns:
        Configured FastAPI instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Gather Board",
        description="Shared gather/claim tracker with live updates",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # =========================================================================
    # Middleware and error handling
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(TrackerError, tracker_error_handler)

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(items_router)
    app.include_router(events_router)
    app.include_router(passwords_router)

    # =========================================================================
    # Static Files (mounted last so API routes win)
    # =========================================================================

    static_path = settings.static_path
    if static_path.exists():
        app.mount("/", StaticFiles(directory=str(static_path), html=True), name="static")
    else:
        logger.info(f"[Tracker] No static directory at {static_path}, serving API only")

    return app


app = create_app()
