# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic models shared by the three policy-page resources."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from auth.schemas import UserBrief


class ContentPageCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    is_active: bool = True


class ContentPageUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    content: Optional[str] = Field(default=None, min_length=1)
    is_active: Optional[bool] = None


class ContentPageRow(BaseModel):
    id: str
    title: str
    content: str
    is_active: bool
    user_id: str
    user: Optional[UserBrief] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ContentPageListResponse(BaseModel):
    success: bool = True
    total: int
    data: List[ContentPageRow]


class ContentPageResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: ContentPageRow
