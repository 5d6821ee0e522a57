# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""User ORM model."""

from sqlalchemy import Column, String, Boolean, Enum, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from database import Base, new_uuid


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_uuid)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    # passlib format – salt is embedded in the hash string
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum("admin", "sales", name="user_role"), nullable=False, default="sales")
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # Login/logout history; removed together with the user.
    sessions = relationship(
        "SessionRecord",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


# Register SessionRecord with the mapper so the relationship above resolves
# even for callers that only import User (seed script, alembic).
import models.session_record  # noqa: F401, E402
