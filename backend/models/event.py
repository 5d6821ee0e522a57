# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Event and EventVideo ORM models."""

from sqlalchemy import Column, String, Text, Boolean, Enum, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from database import Base, new_uuid

EVENT_STATUSES = ("Active", "Inactive", "Cancelled", "Completed")


class Event(Base):
    __tablename__ = "events"

    event_id = Column(String(36), primary_key=True, default=new_uuid)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    venue = Column(String(255), nullable=False)
    status = Column(Enum(*EVENT_STATUSES, name="event_status"), nullable=False, default="Active")
    start_time = Column(DateTime(timezone=True), nullable=False, index=True)
    end_time = Column(DateTime(timezone=True), nullable=False)
    show_video_details = Column(Boolean, nullable=False, default=False)
    event_location = Column(String(255), nullable=True)
    main_image = Column(String(255), nullable=True)
    # List of stored file names
    event_images = Column(JSON, nullable=True)
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
    videos = relationship(
        "EventVideo",
        back_populates="event",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class EventVideo(Base):
    __tablename__ = "event_videos"

    id = Column(String(36), primary_key=True, default=new_uuid)
    event_id = Column(
        String(36),
        ForeignKey("events.event_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String(255), nullable=False)
    url = Column(String(2048), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    event = relationship("Event", back_populates="videos")
