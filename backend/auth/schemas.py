# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the auth endpoints."""

import re
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from sessions.schemas import SessionRecordRow

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


# -- Requests --------------------------------------------------------------


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(max_length=255)
    password: str = Field(min_length=6)
    role: Literal["admin", "sales"]

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        v = v.strip()
        if not _EMAIL_RE.match(v):
            raise ValueError("The email must be a valid email address.")
        return v


class LoginRequest(BaseModel):
    email: str
    password: str
    device_name: Optional[str] = Field(default=None, max_length=255)
    device_type: Optional[Literal["mobile", "tablet", "desktop"]] = None


# -- Responses -------------------------------------------------------------


class UserPublic(BaseModel):
    """Everything about a user except the password hash."""

    id: str
    name: str
    email: str
    role: str
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class UserBrief(BaseModel):
    """Creator / owner projection embedded in content rows."""

    id: str
    name: str
    email: str

    model_config = {"from_attributes": True}


class TokenResponse(BaseModel):
    access_token: str
    token_type: str  # always "bearer"
    expires_in: int  # seconds
    user: UserPublic
    mata_data: Optional[SessionRecordRow] = None


class RegisterResponse(BaseModel):
    message: str
    user: UserPublic
