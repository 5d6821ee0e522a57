# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Auth endpoints – register, login, logout, token refresh, current-user info.

Login checks run in a fixed order and each one has its own status code:
unknown email → 404, deactivated account → 403 (whatever the password),
wrong password → 401.  A successful login also opens a session record for
the calling device (see ``sessions.recorder``).
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from database import get_db
from core.errors import ForbiddenError, NotFoundError, UnauthorizedError, ValidationFailedError
from core.logger import logger
from core.security import (
    AuthContext,
    create_access_token,
    get_auth_context,
    get_token_owner,
    hash_password,
    token_ttl_seconds,
    verify_password,
)
from models.user import User
from sessions.recorder import record_login, record_logout
from sessions.schemas import SessionRecordRow
from auth.schemas import (
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UserPublic,
)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _token_response(user: User, mata_data=None) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(user.id, user.role),
        token_type="bearer",
        expires_in=token_ttl_seconds(),
        user=UserPublic.model_validate(user),
        mata_data=SessionRecordRow.model_validate(mata_data) if mata_data is not None else None,
    )


# ---------------------------------------------------------------------------
# POST /api/auth/register
# ---------------------------------------------------------------------------


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account.  The e-mail address must not be taken."""
    if db.query(User).filter(User.email == body.email).first():
        raise ValidationFailedError(
            "Validation failed",
            errors={"email": ["The email has already been taken."]},
        )

    user = User(
        name=body.name,
        email=body.email,
        password_hash=hash_password(body.password),
        role=body.role,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("user registered | id=%s role=%s", user.id, user.role)
    return RegisterResponse(message="User registered successfully", user=UserPublic.model_validate(user))


# ---------------------------------------------------------------------------
# POST /api/auth/login
# ---------------------------------------------------------------------------


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, request: Request, db: Session = Depends(get_db)):
    """Authenticate, open a session record and return a signed JWT."""
    user = db.query(User).filter(User.email == body.email).first()

    if not user:
        logger.warning("login failed | unknown email")
        raise NotFoundError("User not found", key="error")

    if not user.is_active:
        logger.warning("login refused | user=%s inactive", user.id)
        raise ForbiddenError("User account is inactive", key="error")

    if not verify_password(body.password, user.password_hash):
        logger.warning("login failed | user=%s bad password", user.id)
        raise UnauthorizedError("Password does not match", key="error")

    record = record_login(
        db,
        user.id,
        request.headers.get("User-Agent"),
        device_name=body.device_name,
        device_type=body.device_type,
    )
    logger.info("login | user=%s role=%s", user.id, user.role)
    return _token_response(user, record)


# ---------------------------------------------------------------------------
# POST /api/auth/logout
# ---------------------------------------------------------------------------


@router.post("/logout")
def logout(ctx: AuthContext = Depends(get_token_owner), db: Session = Depends(get_db)):
    """
    Close the caller's most recent open session record, even for an account
    deactivated after login.  The token itself is not revoked; it simply
    expires.
    """
    record_logout(db, ctx.user_id)
    logger.info("logout | user=%s", ctx.user_id)
    return {"message": "Successfully logged out"}


# ---------------------------------------------------------------------------
# POST /api/auth/refresh
# ---------------------------------------------------------------------------


@router.post("/refresh", response_model=TokenResponse, response_model_exclude_none=True)
def refresh(ctx: AuthContext = Depends(get_auth_context)):
    """Issue a fresh token for the caller."""
    return _token_response(ctx.user)


# ---------------------------------------------------------------------------
# GET /api/auth/me
# ---------------------------------------------------------------------------


@router.get("/me", response_model=UserPublic)
def me(ctx: AuthContext = Depends(get_auth_context)):
    """Return the authenticated user's public profile (no secrets)."""
    return ctx.user
