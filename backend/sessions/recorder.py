# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Session recorder – writes and closes the per-login ``mata_data`` rows.

Login
-----
``record_login`` appends one open row.  Device name and type come from the
request body when the client supplies them, otherwise they are guessed from
the User-Agent header with ordered substring rules (first match wins).

Logout
------
``record_logout`` closes the newest open row of the user (by
``last_login_time``).  Older open rows from other devices are left alone,
and calling it again when nothing is open does nothing.

Both functions commit.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from core.logger import logger
from models.session_record import SessionRecord

# (needle, device name) – order matters: "iPad" UAs also contain "Mac"
_DEVICE_NAME_RULES = (
    ("iphone", "iPhone"),
    ("ipad", "iPad"),
    ("android", "Android Device"),
    ("windows", "Windows PC"),
    ("mac", "Mac"),
    ("linux", "Linux PC"),
)
_UNKNOWN_DEVICE = "Unknown Device"

_MOBILE_NEEDLES = ("mobile", "iphone", "android")
_TABLET_NEEDLES = ("tablet", "ipad")


def device_name_from_user_agent(user_agent: Optional[str]) -> str:
    ua = (user_agent or "").lower()
    for needle, name in _DEVICE_NAME_RULES:
        if needle in ua:
            return name
    return _UNKNOWN_DEVICE


def device_type_from_user_agent(user_agent: Optional[str]) -> str:
    ua = (user_agent or "").lower()
    if any(needle in ua for needle in _MOBILE_NEEDLES):
        return "mobile"
    if any(needle in ua for needle in _TABLET_NEEDLES):
        return "tablet"
    return "desktop"


def record_login(
    db: Session,
    user_id: str,
    user_agent: Optional[str],
    device_name: Optional[str] = None,
    device_type: Optional[str] = None,
) -> SessionRecord:
    """Create an open session row for *user_id* stamped with the current time."""
    record = SessionRecord(
        user_id=user_id,
        device_name=device_name or device_name_from_user_agent(user_agent),
        device_type=device_type or device_type_from_user_agent(user_agent),
        last_login_time=datetime.now(timezone.utc),
        is_logout=False,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info(
        "session opened | user=%s mata_id=%s device=%s (%s)",
        user_id, record.mata_id, record.device_name, record.device_type,
    )
    return record


def record_logout(db: Session, user_id: str) -> Optional[SessionRecord]:
    """Close the most recent open session of *user_id*.  Returns it, or None."""
    latest = (
        db.query(SessionRecord)
        .filter(SessionRecord.user_id == user_id, SessionRecord.is_logout.is_(False))
        .order_by(SessionRecord.last_login_time.desc())
        .first()
    )
    if latest is None:
        return None

    latest.logout_time = datetime.now(timezone.utc)
    latest.is_logout = True
    db.commit()
    db.refresh(latest)
    logger.info("session closed | user=%s mata_id=%s", user_id, latest.mata_id)
    return latest
