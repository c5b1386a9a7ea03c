"""
Tracker Router Modules

Router Organization:
    - health: liveness and runtime counters
    - auth: login and session check
    - items: item collection reads and gather/claim mutations
    - events: server-sent event stream of collection updates
    - passwords: shared password set management
"""

from apps.services.tracker.routers.health import router as health_router
from apps.services.tracker.routers.auth import router as auth_router
from apps.services.tracker.routers.items import router as items_router
from apps.services.tracker.routers.events import router as events_router
from apps.services.tracker.routers.passwords import router as passwords_router

__all__ = [
    "health_router",
    "auth_router",
    "items_router",
    "events_router",
    "passwords_router",
]
