# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
FastAPI application.

Responsibilities
----------------
* Instantiate the FastAPI app.
* Register CORS and request-logging middleware.
* Install the JSON error renderers from ``core.errors``.
* Mount the feature routers (auth, users, sessions, banners, events,
  stone groups, policy pages, dashboards).
* Serve uploaded files from ``settings.storage_dir`` under ``/storage``.
* Expose a /health endpoint for container liveness checks.

Run with:
    cd backend && uvicorn main:app
"""

import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from core.config import settings
from core.errors import (
    ApiError,
    api_error_handler,
    http_error_handler,
    validation_error_handler,
)
from core.logger import logger
from core.storage import storage_root
from auth.router import router as auth_router
from admin.router import dashboard_router, router as users_router
from sessions.router import admin_router as sessions_admin_router, router as sessions_router
from banners.router import admin_router as banners_admin_router, router as banners_router
from events.router import router as events_router
from stone_groups.router import router as stone_groups_router
from content.router import ROUTERS as content_routers

app = FastAPI(title="Kuchi Admin API", version="1.0.0")

# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)


# ---------------------------------------------------------------------------
# Request-logging middleware
# ---------------------------------------------------------------------------
# Only the URL and metadata are recorded, never bodies.


class _RequestLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, client IP, response status and latency (ms)."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        client_ip = request.client.host if request.client else "unknown"

        logger.info(
            "%s %s | client=%s status=%d latency=%.1fms",
            request.method,
            request.url.path,
            client_ip,
            response.status_code,
            elapsed_ms,
        )
        return response


app.add_middleware(_RequestLogMiddleware)

# ---------------------------------------------------------------------------
# Error rendering
# ---------------------------------------------------------------------------
app.add_exception_handler(ApiError, api_error_handler)
app.add_exception_handler(StarletteHTTPException, http_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(dashboard_router)
app.include_router(sessions_router)
app.include_router(sessions_admin_router)
app.include_router(banners_router)
app.include_router(banners_admin_router)
app.include_router(events_router)
app.include_router(stone_groups_router)
for _router in content_routers:
    app.include_router(_router)

# ---------------------------------------------------------------------------
# Lifecycle / health
# ---------------------------------------------------------------------------


@app.on_event("startup")
async def _on_startup():
    logger.info("Kuchi admin API starting up")


@app.on_event("shutdown")
async def _on_shutdown():
    logger.info("Kuchi admin API shutting down")


@app.get("/health")
def health():
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# Uploaded files
# ---------------------------------------------------------------------------
app.mount("/storage", StaticFiles(directory=str(storage_root())), name="storage")
