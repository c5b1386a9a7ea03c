"""
Passwords Router

Manages the shared password set. Config management, not core logic.

Endpoints:
    GET  /api/config/passwords - list passwords
    POST /api/config/passwords - {password, action: add|remove}
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from apps.services.tracker.dependencies import get_passwords, require_auth
from apps.services.tracker.schemas import PasswordRequest
from libs.core.exceptions import InvalidAction
from libs.tracker.password_store import PasswordStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/config", tags=["config"], dependencies=[Depends(require_auth)])


@router.get("/passwords")
async def list_passwords(passwords: PasswordStore = Depends(get_passwords)) -> List[str]:
    return passwords.list()


@router.post("/passwords")
async def change_passwords(
    body: PasswordRequest,
    passwords: PasswordStore = Depends(get_passwords),
):
    action = body.action.lower()
    if action == "add":
        updated = passwords.add(body.password)
    elif action == "remove":
        updated = passwords.remove(body.password)
    else:
        raise InvalidAction(body.action)
    return {"success": True, "passwords": updated}
