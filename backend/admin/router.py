# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
User-directory endpoints – listing, search, status and password changes.

Both staff roles (admin and sales) may use this router; every endpoint is
guarded by ``require_staff``.  Guards on the mutators:

* nobody can change their own active flag (403), so an operator cannot
  lock themselves out;
* a password change needs the current password, a matching confirmation,
  and a new value that differs from the old one.

Also hosts the two role-gated dashboard endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from database import get_db
from core.errors import (
    BadRequestError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationFailedError,
)
from core.logger import logger
from core.pagination import DEFAULT_PER_PAGE, MAX_PER_PAGE, paginate
from core.security import (
    AuthContext,
    Role,
    hash_password,
    require_admin,
    require_staff,
    verify_password,
)
from models.user import User
from admin.schemas import (
    UpdatePasswordRequest,
    UpdateStatusRequest,
    UserListResponse,
    UserResponse,
    UserStatusResponse,
)

router = APIRouter(prefix="/api/admin/sales", tags=["users"])
dashboard_router = APIRouter(prefix="/api", tags=["dashboard"])

_MIN_PASSWORD_LEN = 6


def _filtered(db: Session, role: Optional[Role], is_active: Optional[bool]):
    q = db.query(User)
    if role is not None:
        q = q.filter(User.role == role.value)
    if is_active is not None:
        q = q.filter(User.is_active.is_(is_active))
    return q


def _get_user(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user


# ---------------------------------------------------------------------------
# GET /api/admin/sales  – paginated user list
# ---------------------------------------------------------------------------


@router.get("", response_model=UserListResponse)
def list_users(
    role: Optional[Role] = Query(None),
    is_active: Optional[bool] = Query(None),
    page: int = Query(1, ge=1),
    per_page: int = Query(DEFAULT_PER_PAGE, ge=1, le=MAX_PER_PAGE),
    ctx: AuthContext = Depends(require_staff),
    db: Session = Depends(get_db),
):
    """Newest accounts first.  No password data – handled by the schema."""
    q = _filtered(db, role, is_active).order_by(User.created_at.desc())
    users, pagination = paginate(q, page, per_page)
    return {"success": True, "data": users, "pagination": pagination}


# ---------------------------------------------------------------------------
# GET /api/admin/sales/search?q=  – substring search on name / email
# ---------------------------------------------------------------------------


@router.get("/search", response_model=UserListResponse)
def search_users(
    q: Optional[str] = Query(None, description="Matched against name and email"),
    role: Optional[Role] = Query(None),
    is_active: Optional[bool] = Query(None),
    page: int = Query(1, ge=1),
    per_page: int = Query(DEFAULT_PER_PAGE, ge=1, le=MAX_PER_PAGE),
    ctx: AuthContext = Depends(require_staff),
    db: Session = Depends(get_db),
):
    term = (q or "").strip()
    if not term:
        raise BadRequestError(
            "Search query is required",
            errors={"q": ["The q field is required."]},
        )

    pattern = f"%{term.lower()}%"
    query = (
        _filtered(db, role, is_active)
        .filter(or_(func.lower(User.name).like(pattern), func.lower(User.email).like(pattern)))
        .order_by(User.created_at.desc())
    )
    users, pagination = paginate(query, page, per_page)
    return {"success": True, "data": users, "pagination": pagination}


# ---------------------------------------------------------------------------
# GET /api/admin/sales/{id}
# ---------------------------------------------------------------------------


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    ctx: AuthContext = Depends(require_staff),
    db: Session = Depends(get_db),
):
    return {"success": True, "data": _get_user(db, user_id)}


# ---------------------------------------------------------------------------
# PUT /api/admin/sales/{id}/status  – activate / deactivate
# ---------------------------------------------------------------------------


@router.put("/{user_id}/status", response_model=UserStatusResponse)
def update_status(
    user_id: str,
    body: UpdateStatusRequest,
    ctx: AuthContext = Depends(require_staff),
    db: Session = Depends(get_db),
):
    """
    Set ``is_active``.  A deactivated user can no longer log in, and tokens
    already issued to them are refused by the access gate.
    """
    if user_id == ctx.user_id:
        raise ForbiddenError("You cannot modify your own status")

    target = _get_user(db, user_id)
    target.is_active = body.is_active
    db.commit()
    db.refresh(target)

    logger.info("user status | target=%s active=%s by=%s", user_id, body.is_active, ctx.user_id)
    return {"success": True, "message": "User status updated successfully", "user": target}


# ---------------------------------------------------------------------------
# PUT /api/admin/sales/{id}/password
# ---------------------------------------------------------------------------


@router.put("/{user_id}/password")
def update_password(
    user_id: str,
    body: UpdatePasswordRequest,
    ctx: AuthContext = Depends(require_staff),
    db: Session = Depends(get_db),
):
    target = _get_user(db, user_id)

    errors = {}
    if len(body.new_password) < _MIN_PASSWORD_LEN:
        errors["new_password"] = [f"The new password must be at least {_MIN_PASSWORD_LEN} characters."]
    if body.new_password != body.reenter_new_password:
        errors["reenter_new_password"] = ["New password and re-entered password must match"]
    if errors:
        raise ValidationFailedError("Validation failed", errors=errors)

    if not verify_password(body.old_password, target.password_hash):
        raise UnauthorizedError("Old password is incorrect", headers=None)

    if verify_password(body.new_password, target.password_hash):
        raise ValidationFailedError("New password cannot be the same as old password")

    target.password_hash = hash_password(body.new_password)
    db.commit()

    logger.info("password changed | target=%s by=%s", user_id, ctx.user_id)
    return {"success": True, "message": "Password updated successfully"}


# ---------------------------------------------------------------------------
# Dashboards – role-gated landing endpoints for the two front-ends
# ---------------------------------------------------------------------------


@dashboard_router.get("/admin/dashboard")
def admin_dashboard(ctx: AuthContext = Depends(require_admin)):
    return {"message": "Admin Dashboard"}


@dashboard_router.get("/sales/dashboard")
def sales_dashboard(ctx: AuthContext = Depends(require_staff)):
    return {"message": "Sales Dashboard"}
