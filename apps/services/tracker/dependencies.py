"""
Tracker Dependencies Module

Holds the per-process objects (store, broker, scheduler, password set) and
exposes them to routers through FastAPI ``Depends``. Nothing here is a
module-level singleton: the lifespan handler builds one ``TrackerContext``
and parks it on ``app.state``.
"""

import logging
from dataclasses import dataclass

from fastapi import Depends, Request

from libs.core.config import TrackerSettings
from libs.core.exceptions import Unauthorized
from libs.tracker.broker import NotificationBroker
from libs.tracker.item_store import ItemStore
from libs.tracker.password_store import PasswordStore
from libs.tracker.service import TrackerService
from libs.tracker.snapshots import SnapshotScheduler

logger = logging.getLogger(__name__)


@dataclass
class TrackerContext:
    settings: TrackerSettings
    store: ItemStore
    broker: NotificationBroker
    service: TrackerService
    passwords: PasswordStore
    snapshots: SnapshotScheduler


def build_context(settings: TrackerSettings) -> TrackerContext:
    """Construct every process-scoped object from settings."""
    store = ItemStore(settings.items_path)
    broker = NotificationBroker(
        buffer_size=settings.subscriber_buffer,
        keepalive_interval=settings.keepalive_seconds,
    )
    context = TrackerContext(
        settings=settings,
        store=store,
        broker=broker,
        service=TrackerService(store, broker),
        passwords=PasswordStore(settings.config_path, settings.initial_password),
        snapshots=SnapshotScheduler(
            store,
            settings.backups_path,
            interval_seconds=settings.backup_interval_seconds,
            retention=settings.backup_retention,
        ),
    )
    logger.info(f"[Dependencies] Tracker context built (items={settings.items_path})")
    return context


# =============================================================================
# Request-scoped accessors
# =============================================================================


def get_context(request: Request) -> TrackerContext:
    return request.app.state.tracker


def get_service(context: TrackerContext = Depends(get_context)) -> TrackerService:
    return context.service


def get_broker(context: TrackerContext = Depends(get_context)) -> NotificationBroker:
    return context.broker


def get_passwords(context: TrackerContext = Depends(get_context)) -> PasswordStore:
    return context.passwords


def require_auth(request: Request, context: TrackerContext = Depends(get_context)) -> None:
    """Reject callers whose auth cookie is not in the shared password set."""
    token = request.cookies.get(context.settings.cookie_name)
    if not context.passwords.is_authorized(token):
        raise Unauthorized()
