"""
Tracker Application Lifespan Handler

Builds the process-scoped objects at startup and tears them down at
shutdown.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from apps.services.tracker.dependencies import build_context
from libs.core.logging_config import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup:
        - Configures logging
        - Builds the tracker context and attaches it to app.state
        - Starts the snapshot scheduler (first archive runs immediately)

    Shutdown:
        - Stops the scheduler
        - Closes live subscriptions so their streams end
    """
    # ==========================================================================
    # STARTUP
    # ==========================================================================

    settings = app.state.settings
    setup_logging(
        level=settings.log_level,
        log_to_file=settings.log_to_file,
        log_dir=settings.log_dir,
        service_name="tracker",
    )
    tracker_logger = logging.getLogger("tracker")
    tracker_logger.info("Tracker starting...")

    try:
        context = build_context(settings)
    except Exception as e:
        tracker_logger.error(f"Failed to build tracker context: {e}")
        raise
    app.state.tracker = context

    await context.snapshots.start()
    tracker_logger.info(f"Tracker ready on http://{settings.host}:{settings.port}")

    # ==========================================================================
    # YIELD - Application runs here
    # ==========================================================================

    yield

    # ==========================================================================
    # SHUTDOWN
    # ==========================================================================

    tracker_logger.info("Tracker shutting down...")
    await context.snapshots.stop()
    context.broker.close_all()
    tracker_logger.info("Tracker shutdown complete")
