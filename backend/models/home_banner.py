# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""HomeBanner ORM model."""

from sqlalchemy import Column, Integer, String, Enum, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from database import Base

BANNER_DEVICE_TYPES = ("mobile", "desktop", "tablet", "all")


class HomeBanner(Base):
    __tablename__ = "home_banner"

    id = Column(Integer, primary_key=True, autoincrement=True)
    banner_title = Column(String(255), nullable=False)
    priority = Column(Integer, nullable=False, default=0)
    device_type = Column(Enum(*BANNER_DEVICE_TYPES, name="banner_device_type"), nullable=False, default="all")
    # Stored file name only; the public URL is derived at response time.
    image = Column(String(255), nullable=True)
    create_user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    creator = relationship("User")
