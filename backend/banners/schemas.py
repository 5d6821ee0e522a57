# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic response models for the home-banner endpoints."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, computed_field

from auth.schemas import UserBrief
from core.storage import public_url

BANNER_FOLDER = "banners"


class BannerRow(BaseModel):
    id: int
    banner_title: str
    priority: int
    device_type: str
    image: Optional[str] = None
    create_user_id: str
    creator: Optional[UserBrief] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def image_url(self) -> Optional[str]:
        return public_url(BANNER_FOLDER, self.image)


class BannerListResponse(BaseModel):
    success: bool = True
    total: int
    data: List[BannerRow]


class BannerResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: BannerRow
