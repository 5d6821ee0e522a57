"""Offset pagination for SQLAlchemy queries."""

import math
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_PER_PAGE = 15
MAX_PER_PAGE = 100


class Pagination(BaseModel):
    current_page: int
    per_page: int
    total: int
    last_page: int
    # "from" is a keyword; FastAPI renders response models by alias
    from_: Optional[int] = Field(default=None, alias="from")
    to: Optional[int] = None

    model_config = {"populate_by_name": True}


def paginate(query, page: int, per_page: int):
    """
    Return ``(items, pagination)`` for *query*.  A page past the end yields
    an empty item list with ``from``/``to`` set to None.
    """
    total = query.order_by(None).count()
    items = query.offset((page - 1) * per_page).limit(per_page).all()
    first = (page - 1) * per_page + 1 if items else None
    last = first + len(items) - 1 if items else None
    return items, {
        "current_page": page,
        "per_page": per_page,
        "total": total,
        "last_page": max(1, math.ceil(total / per_page)),
        "from": first,
        "to": last,
    }
