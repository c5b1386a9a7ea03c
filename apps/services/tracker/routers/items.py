"""
Items Router

Endpoints:
    GET  /api/items        - full item collection
    POST /api/items/update - set gathered progress {name, gathered}
    POST /api/items/claim  - reserve/release remaining work {name, claimed, claimer}

Mutations answer with a bare success flag; the new state reaches every
client, the caller included, through the event stream.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from apps.services.tracker.dependencies import get_service, require_auth
from apps.services.tracker.schemas import ClaimItemRequest, UpdateItemRequest
from libs.tracker.models import dump_items
from libs.tracker.service import TrackerService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/items", tags=["items"], dependencies=[Depends(require_auth)])


@router.get("")
async def list_items(service: TrackerService = Depends(get_service)) -> List[Dict[str, Any]]:
    return dump_items(await service.list_items())


@router.post("/update")
async def update_item(
    body: UpdateItemRequest,
    service: TrackerService = Depends(get_service),
) -> Dict[str, bool]:
    await service.update_gathered(body.name, body.gathered)
    return {"success": True}


@router.post("/claim")
async def claim_item(
    body: ClaimItemRequest,
    service: TrackerService = Depends(get_service),
) -> Dict[str, bool]:
    await service.update_claim(body.name, body.claimed, body.claimer)
    return {"success": True}
