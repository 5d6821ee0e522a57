# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic response models for the session-metadata endpoints."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class SessionOwner(BaseModel):
    id: str
    name: str
    email: str
    role: str

    model_config = {"from_attributes": True}


class SessionRecordRow(BaseModel):
    mata_id: str
    user_id: str
    device_name: Optional[str] = None
    device_type: Optional[str] = None
    last_login_time: Optional[datetime] = None
    logout_time: Optional[datetime] = None
    is_logout: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class SessionRecordWithUser(SessionRecordRow):
    user: Optional[SessionOwner] = None


class SessionRecordListResponse(BaseModel):
    success: bool = True
    total: int
    data: List[SessionRecordWithUser]


class SessionRecordResponse(BaseModel):
    success: bool = True
    data: SessionRecordWithUser
