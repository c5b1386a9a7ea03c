"""
Health Check Router

Endpoints:
    GET /healthz - liveness plus subscriber, archive and snapshot counters
    GET /health  - Alias for /healthz
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from apps.services.tracker.dependencies import TrackerContext, get_context

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthz(context: TrackerContext = Depends(get_context)) -> Dict[str, Any]:
    """
    Health check endpoint.

    Returns:
        Health status dict with broker and snapshot statistics
    """
    return {
        "status": "healthy",
        "subscribers": context.broker.subscriber_count(),
        "archives": len(context.snapshots.list_archives()),
        "snapshots": context.snapshots.get_stats(),
    }


@router.get("/health")
async def health(context: TrackerContext = Depends(get_context)) -> Dict[str, Any]:
    """Alias for /healthz."""
    return await healthz(context)
