from __future__ import annotations

from pydantic import BaseModel


class LoginRequest(BaseModel):
    password: str = ""


class UpdateItemRequest(BaseModel):
    name: str = ""
    gathered: int = 0


class ClaimItemRequest(BaseModel):
    name: str = ""
    claimed: int = 0
    claimer: str = ""


class PasswordRequest(BaseModel):
    password: str = ""
    action: str = ""
