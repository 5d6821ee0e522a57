# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Policy / static content pages.

Privacy policy, about-us and terms-and-conditions share one shape (title,
content, active flag, author) but live in separate tables.
"""

from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import declared_attr, relationship
from sqlalchemy.sql import func

from database import Base, new_uuid


class ContentPageMixin:
    id = Column(String(36), primary_key=True, default=new_uuid)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    @declared_attr
    def user_id(cls):
        return Column(
            String(36),
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )

    @declared_attr
    def user(cls):
        return relationship("User")


class PrivacyPolicy(ContentPageMixin, Base):
    __tablename__ = "privacy_policies"


class AboutUs(ContentPageMixin, Base):
    __tablename__ = "about_us"


class TermsAndConditions(ContentPageMixin, Base):
    __tablename__ = "terms_and_conditions"
