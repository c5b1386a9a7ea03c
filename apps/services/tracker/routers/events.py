"""
Events Router

Provides the server-sent event stream that keeps every viewer in sync.

Endpoints:
    GET /events - SSE stream; each data frame is {"type": "update", "items": [...]}
"""

import logging

from fastapi import APIRouter, Depends, Request
from sse_starlette.sse import EventSourceResponse

from apps.services.tracker.dependencies import get_broker, require_auth
from libs.tracker.broker import NotificationBroker

logger = logging.getLogger(__name__)

router = APIRouter(tags=["events"])

# Keep-alives come from the subscription loop; the library ping stays out of the way.
LIBRARY_PING_SECONDS = 24 * 60 * 60


@router.get("/events", dependencies=[Depends(require_auth)])
async def stream_events(request: Request, broker: NotificationBroker = Depends(get_broker)):
    """
    Stream collection updates via SSE.

    The stream opens with a ``connected`` comment, then carries one data frame
    per publish and a ``keep-alive`` comment on a fixed cadence.
    """

    async def event_generator():
        subscription = broker.subscribe()
        try:
            async for frame in subscription.events(request.is_disconnected):
                yield frame
        finally:
            broker.unsubscribe(subscription.id)

    return EventSourceResponse(
        event_generator(),
        headers={"Cache-Control": "no-cache"},
        ping=LIBRARY_PING_SECONDS,
    )
