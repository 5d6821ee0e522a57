# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Policy pages – privacy policy, about us, terms and conditions.

The three resources behave identically, so ``build_routers`` stamps out a
public router (``/api/<slug>``) and an admin router (``/api/admin/<slug>``)
per model.  ``ROUTERS`` is what main.py mounts.
"""

from typing import List, Optional, Tuple, Type

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session, joinedload

from database import get_db
from core.errors import NotFoundError
from core.logger import logger
from core.security import AuthContext, require_admin
from models.content_page import AboutUs, PrivacyPolicy, TermsAndConditions
from content.schemas import (
    ContentPageCreate,
    ContentPageListResponse,
    ContentPageResponse,
    ContentPageUpdate,
)


def build_routers(model: Type, slug: str, label: str, not_found: str) -> Tuple[APIRouter, APIRouter]:
    """
    *label* is the human name used in messages ("Privacy policy"),
    *not_found* the 404 text for a missing id.
    """
    public = APIRouter(prefix=f"/api/{slug}", tags=[slug])
    admin = APIRouter(prefix=f"/api/admin/{slug}", tags=[f"{slug} (admin)"])

    def _query(db: Session):
        return db.query(model).options(joinedload(model.user))

    def _load(db: Session, page_id: str):
        page = _query(db).filter(model.id == page_id).first()
        if not page:
            raise NotFoundError(not_found)
        return page

    @public.get("", response_model=ContentPageListResponse)
    def list_pages(
        is_active: Optional[bool] = Query(None),
        db: Session = Depends(get_db),
    ):
        q = _query(db)
        if is_active is not None:
            q = q.filter(model.is_active.is_(is_active))
        pages = q.order_by(model.created_at.desc()).all()
        return {"success": True, "total": len(pages), "data": pages}

    @public.get("/latest/active", response_model=ContentPageResponse)
    def latest_active(db: Session = Depends(get_db)):
        page = (
            _query(db)
            .filter(model.is_active.is_(True))
            .order_by(model.created_at.desc())
            .first()
        )
        if not page:
            raise NotFoundError(f"No active {label.lower()} found")
        return {"success": True, "data": page}

    @public.get("/{page_id}", response_model=ContentPageResponse)
    def get_page(page_id: str, db: Session = Depends(get_db)):
        return {"success": True, "data": _load(db, page_id)}

    @admin.post("", response_model=ContentPageResponse, status_code=status.HTTP_201_CREATED)
    def create_page(
        body: ContentPageCreate,
        ctx: AuthContext = Depends(require_admin),
        db: Session = Depends(get_db),
    ):
        page = model(**body.model_dump(), user_id=ctx.user_id)
        db.add(page)
        db.commit()

        logger.info("%s created | id=%s by=%s", slug, page.id, ctx.user_id)
        return {"success": True, "message": f"{label} created successfully", "data": _load(db, page.id)}

    @admin.put("/{page_id}", response_model=ContentPageResponse)
    def update_page(
        page_id: str,
        body: ContentPageUpdate,
        ctx: AuthContext = Depends(require_admin),
        db: Session = Depends(get_db),
    ):
        page = _load(db, page_id)
        for key, value in body.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(page, key, value)
        db.commit()
        return {"success": True, "message": f"{label} updated successfully", "data": _load(db, page_id)}

    @admin.delete("/{page_id}")
    def delete_page(
        page_id: str,
        ctx: AuthContext = Depends(require_admin),
        db: Session = Depends(get_db),
    ):
        page = _load(db, page_id)
        db.delete(page)
        db.commit()

        logger.info("%s deleted | id=%s by=%s", slug, page_id, ctx.user_id)
        return {"success": True, "message": f"{label} deleted successfully"}

    return public, admin


ROUTERS: List[APIRouter] = [
    *build_routers(PrivacyPolicy, "privacy-policy", "Privacy policy", "Privacy policy not found"),
    *build_routers(AboutUs, "about-us", "About us entry", "About us entry not found"),
    *build_routers(
        TermsAndConditions,
        "terms-and-conditions",
        "Terms and conditions",
        "Terms and conditions not found",
    ),
]
