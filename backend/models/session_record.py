# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
SessionRecord ORM model – one row per login ("mata data" in the API).

A row is written when a user authenticates and closed exactly once when
that user logs out (``logout_time`` set, ``is_logout`` flipped to True).
"""

from sqlalchemy import Column, String, Boolean, Enum, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from database import Base, new_uuid

DEVICE_TYPES = ("mobile", "tablet", "desktop")


class SessionRecord(Base):
    __tablename__ = "mata_data"

    mata_id = Column(String(36), primary_key=True, default=new_uuid)
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    device_name = Column(String(255), nullable=True)
    device_type = Column(Enum(*DEVICE_TYPES, name="device_type"), nullable=True)
    last_login_time = Column(DateTime(timezone=True), nullable=True, index=True)
    logout_time = Column(DateTime(timezone=True), nullable=True)
    is_logout = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    user = relationship("User", back_populates="sessions")
