# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the user-directory endpoints."""

from typing import List

from pydantic import BaseModel

from auth.schemas import UserPublic
from core.pagination import Pagination


# -- Requests --------------------------------------------------------------


class UpdateStatusRequest(BaseModel):
    is_active: bool


class UpdatePasswordRequest(BaseModel):
    old_password: str
    new_password: str
    reenter_new_password: str


# -- Responses -------------------------------------------------------------


class UserListResponse(BaseModel):
    success: bool = True
    data: List[UserPublic]
    pagination: Pagination


class UserResponse(BaseModel):
    success: bool = True
    data: UserPublic


class UserStatusResponse(BaseModel):
    success: bool = True
    message: str
    user: UserPublic
