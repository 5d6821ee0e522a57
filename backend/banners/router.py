# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Home-banner endpoints.

Reading is public (the mobile and web front pages call it without a
token); create / update / delete are admin-only and accept multipart form
data because they carry the banner image.
"""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session, joinedload

from database import get_db
from core.errors import NotFoundError
from core.logger import logger
from core.security import AuthContext, require_admin
from core.storage import delete_file, read_image, save_file
from models.home_banner import HomeBanner
from banners.schemas import BANNER_FOLDER, BannerListResponse, BannerResponse

router = APIRouter(prefix="/api/home-banner", tags=["home-banner"])
admin_router = APIRouter(prefix="/api/admin/home-banner", tags=["home-banner (admin)"])

BannerDevice = Literal["mobile", "desktop", "tablet", "all"]


def _load(db: Session, banner_id: int) -> HomeBanner:
    banner = (
        db.query(HomeBanner)
        .options(joinedload(HomeBanner.creator))
        .filter(HomeBanner.id == banner_id)
        .first()
    )
    if not banner:
        raise NotFoundError("Banner not found")
    return banner


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------


@router.get("", response_model=BannerListResponse)
def list_banners(
    device_type: Optional[BannerDevice] = Query(None),
    db: Session = Depends(get_db),
):
    """Banners in display order (lowest priority value first)."""
    q = db.query(HomeBanner).options(joinedload(HomeBanner.creator))
    if device_type:
        q = q.filter(HomeBanner.device_type == device_type)
    banners = q.order_by(HomeBanner.priority.asc(), HomeBanner.id.asc()).all()
    return {"success": True, "total": len(banners), "data": banners}


@router.get("/{banner_id}", response_model=BannerResponse)
def get_banner(banner_id: int, db: Session = Depends(get_db)):
    return {"success": True, "data": _load(db, banner_id)}


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


@admin_router.post("", response_model=BannerResponse, status_code=status.HTTP_201_CREATED)
async def create_banner(
    banner_title: str = Form(..., max_length=255),
    priority: int = Form(..., ge=0),
    device_type: BannerDevice = Form(...),
    image: UploadFile = File(...),
    ctx: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    data = await read_image(image, "image")
    image_name = save_file(BANNER_FOLDER, image.filename, data)

    banner = HomeBanner(
        banner_title=banner_title,
        priority=priority,
        device_type=device_type,
        image=image_name,
        create_user_id=ctx.user_id,
    )
    db.add(banner)
    db.commit()

    logger.info("banner created | id=%s by=%s", banner.id, ctx.user_id)
    return {"success": True, "message": "Banner created successfully", "data": _load(db, banner.id)}


@admin_router.put("/{banner_id}", response_model=BannerResponse)
async def update_banner(
    banner_id: int,
    banner_title: Optional[str] = Form(None, max_length=255),
    priority: Optional[int] = Form(None, ge=0),
    device_type: Optional[BannerDevice] = Form(None),
    image: Optional[UploadFile] = File(None),
    ctx: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Partial update.  A new image replaces (and deletes) the old file."""
    banner = _load(db, banner_id)

    old_image = None
    if image is not None and image.filename:
        data = await read_image(image, "image")
        old_image = banner.image
        banner.image = save_file(BANNER_FOLDER, image.filename, data)

    if banner_title is not None:
        banner.banner_title = banner_title
    if priority is not None:
        banner.priority = priority
    if device_type is not None:
        banner.device_type = device_type

    db.commit()
    delete_file(BANNER_FOLDER, old_image)
    return {"success": True, "message": "Banner updated successfully", "data": _load(db, banner_id)}


@admin_router.delete("/{banner_id}")
def delete_banner(
    banner_id: int,
    ctx: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    banner = _load(db, banner_id)
    delete_file(BANNER_FOLDER, banner.image)
    db.delete(banner)
    db.commit()

    logger.info("banner deleted | id=%s by=%s", banner_id, ctx.user_id)
    return {"success": True, "message": "Banner deleted successfully"}
