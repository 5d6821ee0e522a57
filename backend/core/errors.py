# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Error taxonomy and the JSON renderers registered on the app.

Every failure a handler wants to report is raised as one of the
``ApiError`` subclasses below.  They are plain ``HTTPException``s, so
FastAPI's dependency machinery treats them exactly like the ones raised by
the framework itself; the handlers at the bottom only change the body
shape to::

    {"success": false, "message": "...", "errors": {"field": ["..."]}}

The auth flow reports under the ``error`` key instead of ``message``
(``{"success": false, "error": "Password does not match"}``).
"""

from typing import Dict, List, Optional

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class ApiError(HTTPException):
    """Base class.  Subclasses pin ``code``; ``key`` picks the body field."""

    code = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str,
        *,
        errors: Optional[Dict[str, List[str]]] = None,
        key: str = "message",
        status_code: Optional[int] = None,
        headers: Optional[Dict[str, str]] = None,
        extra: Optional[dict] = None,
    ):
        super().__init__(status_code=status_code or self.code, detail=message, headers=headers)
        self.errors = errors
        self.key = key
        self.extra = extra or {}


class BadRequestError(ApiError):
    code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(ApiError):
    code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized", **kwargs):
        kwargs.setdefault("headers", {"WWW-Authenticate": "Bearer"})
        super().__init__(message, **kwargs)


class ForbiddenError(ApiError):
    code = status.HTTP_403_FORBIDDEN


class NotFoundError(ApiError):
    code = status.HTTP_404_NOT_FOUND


class ValidationFailedError(ApiError):
    code = status.HTTP_422_UNPROCESSABLE_ENTITY


# ---------------------------------------------------------------------------
# Exception handlers – registered in main.py
# ---------------------------------------------------------------------------


def _body(key: str, message, errors=None, extra=None) -> dict:
    body = {"success": False, key: message}
    if errors:
        body["errors"] = errors
    if extra:
        body.update(extra)
    return body


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_body(exc.key, exc.detail, exc.errors, exc.extra),
        headers=exc.headers,
    )


async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Framework-raised HTTPExceptions (404 route, 405 method, ...)."""
    return JSONResponse(
        status_code=exc.status_code,
        content=_body("message", exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Collapse pydantic's error list into ``{field: [messages]}``.  The field
    is the last element of ``loc`` ("body", "email" → "email").
    """
    errors: Dict[str, List[str]] = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path", "form")]
        field = loc[-1] if loc else "request"
        errors.setdefault(field, []).append(err.get("msg", "Invalid value"))
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"success": False, "errors": errors},
    )
