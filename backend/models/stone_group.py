# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""StoneGroup ORM model."""

from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from database import Base, new_uuid


class StoneGroup(Base):
    __tablename__ = "stone_groups"

    stonegroup_id = Column(String(36), primary_key=True, default=new_uuid)
    # Business key supplied by the client / the import sheet
    stonegroup_guid = Column(String(36), unique=True, nullable=False, index=True)
    stonegroup_name = Column(String(255), nullable=False, index=True)
    stonegroup_shortname = Column(String(100), nullable=True)
    is_disabled = Column(Boolean, nullable=False, default=False)
    user_id = Column(
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

    user = relationship("User")
