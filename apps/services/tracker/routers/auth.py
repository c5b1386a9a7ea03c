"""
Auth Router

Endpoints:
    POST /api/login      - exchange a shared password for the auth cookie
    GET  /api/check-auth - succeeds only with a valid auth cookie
"""

import logging

from fastapi import APIRouter, Depends, Response

from apps.services.tracker.dependencies import TrackerContext, get_context, require_auth
from apps.services.tracker.schemas import LoginRequest
from libs.core.exceptions import Unauthorized

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/login")
async def login(
    body: LoginRequest,
    response: Response,
    context: TrackerContext = Depends(get_context),
):
    if not context.passwords.is_authorized(body.password):
        logger.info("[Auth] Rejected login attempt")
        raise Unauthorized("Invalid password")

    settings = context.settings
    # Readable by the page script; the cookie is the password itself.
    response.set_cookie(
        key=settings.cookie_name,
        value=body.password,
        path="/",
        max_age=settings.cookie_max_age,
        httponly=False,
    )
    return {"success": True}


@router.get("/check-auth", dependencies=[Depends(require_auth)])
async def check_auth():
    return {"success": True}
