# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Central security module.  All cryptographic primitives and auth guards live
here.  No other module should touch raw crypto directly.

Responsibilities
----------------
1. Password hashing / verification          (passlib pbkdf2_sha256)
2. JWT creation / decoding                  (PyJWT)
3. Access gate                              (get_auth_context, require_roles)
"""

import enum
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

import jwt as _jwt        # PyJWT
from passlib.hash import pbkdf2_sha256 as _pbkdf2  # pure Python, no binary deps
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from core.config import settings
from core.errors import ForbiddenError, UnauthorizedError
from database import get_db


class Role(str, enum.Enum):
    ADMIN = "admin"
    SALES = "sales"


# ---------------------------------------------------------------------------
# 1.  pbkdf2_sha256 – password hashing
# ---------------------------------------------------------------------------
# passlib embeds the salt inside the hash string, so a single column holds
# everything verify_password needs.
# ---------------------------------------------------------------------------


def hash_password(plain: str) -> str:
    """Hash a plaintext password with PBKDF2-SHA256."""
    return _pbkdf2.using(rounds=settings.password_hash_rounds).hash(plain)


def verify_password(plain: str, stored_hash: str) -> bool:
    """
    Constant-time verification of a plaintext password against a
    pbkdf2_sha256 hash produced by :func:`hash_password`.
    """
    try:
        return _pbkdf2.verify(plain, stored_hash)
    except ValueError:
        # malformed hash in the row; treat as a mismatch
        return False


# ---------------------------------------------------------------------------
# 2.  JWT – access tokens
# ---------------------------------------------------------------------------


def token_ttl_seconds() -> int:
    return settings.access_token_expire_minutes * 60


def create_access_token(subject: str, role: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign a JWT.  ``sub`` carries the user id; ``role`` is informational only,
    the gate always re-reads the role from the database.
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    claims = {"sub": str(subject), "role": role, "iat": now, "exp": expire}
    return _jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict:
    """
    Decode and verify a JWT.  Raises 401 on any failure (expired, bad
    signature, malformed, missing subject).
    """
    try:
        payload = _jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except _jwt.InvalidTokenError:
        raise UnauthorizedError(key="error")
    return payload


# ---------------------------------------------------------------------------
# 3.  Access gate
# ---------------------------------------------------------------------------

# The tokenUrl here is only used by the auto-generated OpenAPI docs.
# auto_error is off so a missing header goes through the same 401 body as a
# bad token.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """Who is calling.  Handed to every protected handler explicitly."""

    user_id: str
    role: Role
    user: Any  # models.user.User


def _token_context(token: Optional[str], db: Session) -> AuthContext:
    if not token:
        raise UnauthorizedError(key="error")

    payload = decode_access_token(token)

    # Lazy import to avoid circular dependency at module load time
    from models.user import User  # noqa: E402

    user = db.query(User).filter(User.id == payload["sub"]).first()
    if not user:
        raise UnauthorizedError(key="error")
    return AuthContext(user_id=user.id, role=Role(user.role), user=user)


def get_auth_context(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> AuthContext:
    """
    Dependency: decode the bearer token and load the caller's row.

    401 if the token is missing/invalid/expired or the user is gone,
    403 if the account has been deactivated since the token was issued.
    """
    ctx = _token_context(token, db)
    if not ctx.user.is_active:
        raise ForbiddenError("User account is inactive", key="error")
    return ctx


def get_token_owner(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> AuthContext:
    """
    Like :func:`get_auth_context` but lets deactivated accounts through.
    Only logout uses it, so a deactivated user can still close a session.
    """
    return _token_context(token, db)


def require_roles(*allowed: Role) -> Callable[..., AuthContext]:
    """
    Dependency factory.  ``Depends(require_roles(Role.ADMIN, Role.SALES))``
    yields the caller's :class:`AuthContext` when its role is in the
    allow-set and raises 403 otherwise.
    """
    allowed_set = frozenset(allowed)

    def _gate(ctx: AuthContext = Depends(get_auth_context)) -> AuthContext:
        if ctx.role not in allowed_set:
            raise ForbiddenError("Forbidden - Insufficient permissions", key="error")
        return ctx

    return _gate


require_admin = require_roles(Role.ADMIN)
require_staff = require_roles(Role.ADMIN, Role.SALES)
