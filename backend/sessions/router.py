# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Session-metadata ("mata data") endpoints.

Read access is open to both staff roles; deleting a record is admin-only and
lives under the /api/admin prefix.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session, joinedload

from database import get_db
from core.errors import NotFoundError
from core.logger import logger
from core.security import AuthContext, require_admin, require_staff
from models.session_record import SessionRecord
from sessions.schemas import SessionRecordListResponse, SessionRecordResponse

router = APIRouter(prefix="/api/mata-data", tags=["mata-data"])
admin_router = APIRouter(prefix="/api/admin/mata-data", tags=["mata-data"])


def _with_user(db: Session):
    return db.query(SessionRecord).options(joinedload(SessionRecord.user))


def _listing(rows) -> dict:
    return {"success": True, "total": len(rows), "data": rows}


# ---------------------------------------------------------------------------
# GET /api/mata-data  – every record, newest login first
# ---------------------------------------------------------------------------


@router.get("", response_model=SessionRecordListResponse)
def list_records(
    user_id: Optional[str] = Query(None, description="Only records of this user"),
    ctx: AuthContext = Depends(require_staff),
    db: Session = Depends(get_db),
):
    q = _with_user(db)
    if user_id:
        q = q.filter(SessionRecord.user_id == user_id)
    rows = q.order_by(SessionRecord.last_login_time.desc()).all()
    return _listing(rows)


# ---------------------------------------------------------------------------
# GET /api/mata-data/active-sessions  – records not closed by a logout
# ---------------------------------------------------------------------------


@router.get("/active-sessions", response_model=SessionRecordListResponse)
def active_sessions(
    ctx: AuthContext = Depends(require_staff),
    db: Session = Depends(get_db),
):
    rows = (
        _with_user(db)
        .filter(SessionRecord.is_logout.is_(False))
        .order_by(SessionRecord.last_login_time.desc())
        .all()
    )
    return _listing(rows)


# ---------------------------------------------------------------------------
# GET /api/mata-data/user/{user_id}
# ---------------------------------------------------------------------------


@router.get("/user/{user_id}", response_model=SessionRecordListResponse)
def records_for_user(
    user_id: str,
    ctx: AuthContext = Depends(require_staff),
    db: Session = Depends(get_db),
):
    rows = (
        _with_user(db)
        .filter(SessionRecord.user_id == user_id)
        .order_by(SessionRecord.last_login_time.desc())
        .all()
    )
    return _listing(rows)


# ---------------------------------------------------------------------------
# GET /api/mata-data/{mata_id}
# ---------------------------------------------------------------------------


@router.get("/{mata_id}", response_model=SessionRecordResponse)
def get_record(
    mata_id: str,
    ctx: AuthContext = Depends(require_staff),
    db: Session = Depends(get_db),
):
    record = _with_user(db).filter(SessionRecord.mata_id == mata_id).first()
    if not record:
        raise NotFoundError("Mata data not found")
    return {"success": True, "data": record}


# ---------------------------------------------------------------------------
# DELETE /api/admin/mata-data/{mata_id}
# ---------------------------------------------------------------------------


@admin_router.delete("/{mata_id}")
def delete_record(
    mata_id: str,
    ctx: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    record = db.query(SessionRecord).filter(SessionRecord.mata_id == mata_id).first()
    if not record:
        raise NotFoundError("Mata data not found")

    db.delete(record)
    db.commit()
    logger.info("mata data deleted | id=%s by=%s", mata_id, ctx.user_id)
    return {"success": True, "message": "Mata data deleted successfully"}
