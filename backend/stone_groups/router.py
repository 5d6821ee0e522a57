# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Stone-group catalog – admin only.

GUID, name and short name are each unique across the table; clashes are
reported as 422 field errors before anything is written.  Bulk upload
accepts an ``.xlsx`` or ``.csv`` sheet and runs the whole import in one
transaction (see ``stone_groups.importer``).
"""

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from database import get_db
from core.errors import ApiError, BadRequestError, NotFoundError, ValidationFailedError
from core.logger import logger
from core.pagination import DEFAULT_PER_PAGE, MAX_PER_PAGE, paginate
from core.security import AuthContext, require_admin
from models.stone_group import StoneGroup
from stone_groups.importer import read_sheet, upsert_rows
from stone_groups.schemas import (
    ImportResponse,
    StoneGroupCreate,
    StoneGroupListResponse,
    StoneGroupResponse,
    StoneGroupSearchResponse,
    StoneGroupUpdate,
)

router = APIRouter(prefix="/api/stone-groups", tags=["stone-groups"])

IMPORT_EXTENSIONS = {"xlsx", "csv"}
MAX_IMPORT_BYTES = 5 * 1024 * 1024

_UNIQUE_FIELDS = ("stonegroup_guid", "stonegroup_name", "stonegroup_shortname")


def _load(db: Session, stonegroup_id: str) -> StoneGroup:
    group = (
        db.query(StoneGroup)
        .options(joinedload(StoneGroup.user))
        .filter(StoneGroup.stonegroup_id == stonegroup_id)
        .first()
    )
    if not group:
        raise NotFoundError("Stone group not found")
    return group


def _check_unique(db: Session, values: dict, exclude_id: Optional[str] = None) -> None:
    errors: Dict[str, List[str]] = {}
    for field in _UNIQUE_FIELDS:
        value = values.get(field)
        if value is None:
            continue
        q = db.query(StoneGroup.stonegroup_id).filter(getattr(StoneGroup, field) == value)
        if exclude_id is not None:
            q = q.filter(StoneGroup.stonegroup_id != exclude_id)
        if q.first():
            label = field.replace("_", " ")
            errors[field] = [f"The {label} has already been taken."]
    if errors:
        raise ValidationFailedError("Validation failed", errors=errors)


def _with_user(db: Session):
    return db.query(StoneGroup).options(joinedload(StoneGroup.user))


# ---------------------------------------------------------------------------
# GET /api/stone-groups
# ---------------------------------------------------------------------------


@router.get("", response_model=StoneGroupListResponse)
def list_stone_groups(
    is_disabled: Optional[bool] = Query(None),
    page: int = Query(1, ge=1),
    per_page: int = Query(DEFAULT_PER_PAGE, ge=1, le=MAX_PER_PAGE),
    ctx: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    q = _with_user(db)
    if is_disabled is not None:
        q = q.filter(StoneGroup.is_disabled.is_(is_disabled))
    groups, pagination = paginate(q.order_by(StoneGroup.stonegroup_name.asc()), page, per_page)
    return {
        "success": True,
        "data": {"data": groups, "pagination": pagination},
        "message": "Stone groups fetched successfully.",
    }


# ---------------------------------------------------------------------------
# POST /api/stone-groups
# ---------------------------------------------------------------------------


@router.post("", response_model=StoneGroupResponse, status_code=status.HTTP_201_CREATED)
def create_stone_group(
    body: StoneGroupCreate,
    ctx: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    values = body.model_dump()
    _check_unique(db, values)

    group = StoneGroup(**values, user_id=ctx.user_id)
    db.add(group)
    db.commit()

    logger.info("stone group created | id=%s guid=%s by=%s", group.stonegroup_id, group.stonegroup_guid, ctx.user_id)
    return {
        "success": True,
        "message": "Stone group created successfully",
        "data": _load(db, group.stonegroup_id),
    }


# ---------------------------------------------------------------------------
# GET /api/stone-groups/search/{keyword}
# ---------------------------------------------------------------------------


@router.get("/search/{keyword}", response_model=StoneGroupSearchResponse)
def search_stone_groups(
    keyword: str,
    is_disabled: Optional[bool] = Query(None),
    page: int = Query(1, ge=1),
    per_page: int = Query(DEFAULT_PER_PAGE, ge=1, le=MAX_PER_PAGE),
    ctx: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Case-insensitive substring match on name, short name or GUID."""
    term = keyword.strip()
    if not term:
        raise BadRequestError("Search keyword is required")

    pattern = f"%{term.lower()}%"
    q = _with_user(db).filter(
        or_(
            func.lower(StoneGroup.stonegroup_name).like(pattern),
            func.lower(StoneGroup.stonegroup_shortname).like(pattern),
            func.lower(StoneGroup.stonegroup_guid).like(pattern),
        )
    )
    if is_disabled is not None:
        q = q.filter(StoneGroup.is_disabled.is_(is_disabled))

    groups, pagination = paginate(q.order_by(StoneGroup.stonegroup_name.asc()), page, per_page)
    return {
        "success": True,
        "data": {"data": groups, "pagination": pagination},
        "message": "Search results fetched successfully.",
        "search_keyword": term,
        "filters": {"is_disabled": is_disabled, "per_page": per_page, "page": page},
    }


# ---------------------------------------------------------------------------
# POST /api/stone-groups/bulk-upload
# ---------------------------------------------------------------------------


@router.post("/bulk-upload", response_model=ImportResponse, response_model_exclude_none=True)
async def bulk_upload(
    file: UploadFile = File(...),
    ctx: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """
    Create-or-update stone groups from a sheet.  Bad rows are skipped and
    listed in ``errors``; the good ones are committed together.
    """
    filename = file.filename or ""
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    raw = await file.read()

    if ext not in IMPORT_EXTENSIONS or len(raw) > MAX_IMPORT_BYTES:
        raise ValidationFailedError(
            "Invalid file format.",
            errors={"file": ["The file must be a file of type: xlsx, csv and not larger than 5 MB."]},
        )

    try:
        rows = read_sheet(filename, raw)
    except (ValueError, UnicodeDecodeError) as exc:
        logger.warning("bulk upload unreadable | file=%s by=%s: %s", filename, ctx.user_id, exc)
        raise ValidationFailedError("Invalid file format.", errors={"file": [str(exc)]})

    if len(rows) < 2:
        raise BadRequestError("The uploaded file is empty or contains only headers.")

    try:
        result = upsert_rows(db, rows, ctx.user_id)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("bulk upload failed | file=%s by=%s", filename, ctx.user_id)
        raise ApiError(
            "An error occurred during bulk upload.",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            extra={"error": str(exc)},
        )

    logger.info(
        "bulk upload | file=%s inserted=%d updated=%d skipped=%d by=%s",
        filename, result.inserted, result.updated, result.skipped, ctx.user_id,
    )
    return {
        "success": True,
        "message": (
            "Bulk upload completed with some errors."
            if result.errors
            else "Bulk upload completed successfully."
        ),
        "summary": {
            "inserted": result.inserted,
            "updated": result.updated,
            "skipped": result.skipped,
            "total_processed": result.total_processed,
        },
        "errors": result.errors or None,
    }


# ---------------------------------------------------------------------------
# GET / PUT / DELETE /api/stone-groups/{stonegroup_id}
# ---------------------------------------------------------------------------


@router.get("/{stonegroup_id}", response_model=StoneGroupResponse)
def get_stone_group(
    stonegroup_id: str,
    ctx: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return {"success": True, "data": _load(db, stonegroup_id)}


@router.put("/{stonegroup_id}", response_model=StoneGroupResponse)
def update_stone_group(
    stonegroup_id: str,
    body: StoneGroupUpdate,
    ctx: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    group = _load(db, stonegroup_id)
    changes = body.model_dump(exclude_unset=True)
    # explicit nulls on the required columns are ignored
    for key in ("stonegroup_guid", "stonegroup_name", "is_disabled"):
        if changes.get(key, ...) is None:
            changes.pop(key)
    _check_unique(db, changes, exclude_id=stonegroup_id)

    for key, value in changes.items():
        setattr(group, key, value)
    db.commit()

    logger.info("stone group updated | id=%s fields=%s by=%s", stonegroup_id, sorted(changes), ctx.user_id)
    return {
        "success": True,
        "message": "Stone group updated successfully",
        "data": _load(db, stonegroup_id),
    }


@router.delete("/{stonegroup_id}")
def delete_stone_group(
    stonegroup_id: str,
    ctx: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    group = _load(db, stonegroup_id)
    db.delete(group)
    db.commit()

    logger.info("stone group deleted | id=%s by=%s", stonegroup_id, ctx.user_id)
    return {"success": True, "message": "Stone group deleted successfully"}
