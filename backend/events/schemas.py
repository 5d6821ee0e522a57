# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""Pydantic models for the event endpoints."""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field, field_serializer

from auth.schemas import UserBrief
from core.storage import public_url

EVENT_FOLDER = "events"


def as_utc(value: datetime) -> datetime:
    """Naive datetimes (SQLite) are stored in UTC; aware ones are converted."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def event_type_for(start_time: datetime, now: Optional[datetime] = None) -> str:
    """``newEvent`` while the event has not started yet, ``oldEvent`` after."""
    now = now or datetime.now(timezone.utc)
    return "newEvent" if as_utc(start_time) > now else "oldEvent"


# -- Requests --------------------------------------------------------------


class VideoIn(BaseModel):
    title: str = ""
    url: str = ""


# -- Responses -------------------------------------------------------------


class VideoRow(BaseModel):
    id: str
    event_id: str
    title: str
    url: str

    model_config = {"from_attributes": True}


class EventRow(BaseModel):
    event_id: str
    title: str
    description: Optional[str] = None
    venue: str
    status: str
    start_time: datetime
    end_time: datetime
    show_video_details: bool
    event_location: Optional[str] = None
    main_image: Optional[str] = None
    event_images: Optional[List[str]] = None
    user_id: str
    user: Optional[UserBrief] = None
    videos: List[VideoRow] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @field_serializer("start_time", "end_time")
    def serialize_utc(self, value: datetime) -> datetime:
        return as_utc(value)

    @computed_field
    @property
    def main_image_url(self) -> Optional[str]:
        return public_url(EVENT_FOLDER, self.main_image)

    @computed_field
    @property
    def event_images_urls(self) -> List[str]:
        return [public_url(EVENT_FOLDER, name) for name in self.event_images or []]

    @computed_field(alias="EventType")
    @property
    def event_type(self) -> str:
        return event_type_for(self.start_time)


class EventFilters(BaseModel):
    status: Optional[str] = None
    EventType: Optional[str] = None


class EventListResponse(BaseModel):
    success: bool = True
    total: int
    filters_applied: EventFilters
    data: List[EventRow]


class EventResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: EventRow
