# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the stone-group endpoints."""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from auth.schemas import UserBrief
from core.pagination import Pagination


def _uuid_text(value: str) -> str:
    try:
        uuid.UUID(str(value))
    except ValueError:
        raise ValueError("The stonegroup guid must be a valid UUID.")
    return str(value).strip()


# -- Requests --------------------------------------------------------------


class StoneGroupCreate(BaseModel):
    stonegroup_guid: str
    stonegroup_name: str = Field(min_length=1, max_length=255)
    stonegroup_shortname: Optional[str] = Field(default=None, max_length=100)
    is_disabled: bool = False

    @field_validator("stonegroup_guid")
    @classmethod
    def check_guid(cls, v: str) -> str:
        return _uuid_text(v)


class StoneGroupUpdate(BaseModel):
    """Every field optional; only the ones sent are applied."""

    stonegroup_guid: Optional[str] = None
    stonegroup_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    stonegroup_shortname: Optional[str] = Field(default=None, max_length=100)
    is_disabled: Optional[bool] = None

    @field_validator("stonegroup_guid")
    @classmethod
    def check_guid(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _uuid_text(v)


# -- Responses -------------------------------------------------------------


class StoneGroupRow(BaseModel):
    stonegroup_id: str
    stonegroup_guid: str
    stonegroup_name: str
    stonegroup_shortname: Optional[str] = None
    is_disabled: bool
    user_id: str
    user: Optional[UserBrief] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class StoneGroupPage(BaseModel):
    data: List[StoneGroupRow]
    pagination: Pagination


class StoneGroupListResponse(BaseModel):
    success: bool = True
    data: StoneGroupPage
    message: str


class SearchFilters(BaseModel):
    is_disabled: Optional[bool] = None
    per_page: int
    page: int


class StoneGroupSearchResponse(StoneGroupListResponse):
    search_keyword: str
    filters: SearchFilters


class StoneGroupResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: StoneGroupRow


class ImportSummary(BaseModel):
    inserted: int
    updated: int
    skipped: int
    total_processed: int


class ImportResponse(BaseModel):
    success: bool = True
    message: str
    summary: ImportSummary
    errors: Optional[List[str]] = None
