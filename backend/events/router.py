# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Event endpoints – public listing / detail, admin-only create / update /
delete.

Write endpoints take multipart form data: an optional ``main_image``, any
number of ``event_images`` and a ``videos`` field holding a JSON array of
``{"title": ..., "url": ...}`` objects.  On update, new images replace the
old ones (old files are deleted) and a ``videos`` field replaces the whole
video list.
"""

import json
from datetime import datetime, timezone
from typing import List, Literal, Optional, Tuple

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from pydantic import ValidationError
from sqlalchemy.orm import Session, joinedload, selectinload

from database import get_db
from core.errors import NotFoundError, ValidationFailedError
from core.logger import logger
from core.security import AuthContext, require_admin
from core.storage import delete_file, delete_files, read_image, save_file
from models.event import Event, EventVideo
from events.schemas import (
    EVENT_FOLDER,
    EventListResponse,
    EventResponse,
    VideoIn,
    as_utc,
)

router = APIRouter(prefix="/api/events", tags=["events"])

EventStatus = Literal["Active", "Inactive", "Cancelled", "Completed"]
EventKind = Literal["newEvent", "oldEvent"]

_TRUE_VALUES = {"1", "true"}
_FALSE_VALUES = {"0", "false"}


def _load(db: Session, event_id: str) -> Event:
    event = (
        db.query(Event)
        .options(joinedload(Event.user), selectinload(Event.videos))
        .filter(Event.event_id == event_id)
        .first()
    )
    if not event:
        raise NotFoundError("Event not found")
    return event


def _parse_flag(raw: Optional[str]) -> Optional[bool]:
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValidationFailedError(
        "Validation failed",
        errors={"show_video_details": ["The selected show video details is invalid."]},
    )


def _parse_videos(raw: Optional[str]) -> Optional[List[VideoIn]]:
    if raw is None:
        return None
    try:
        decoded = json.loads(raw)
    except ValueError:
        raise ValidationFailedError(
            "Validation failed",
            errors={"videos": ["The videos field must be a valid JSON string."]},
        )
    if not isinstance(decoded, list):
        return []
    try:
        return [VideoIn.model_validate(v) for v in decoded if isinstance(v, dict)]
    except ValidationError:
        raise ValidationFailedError(
            "Validation failed",
            errors={"videos": ["Each video must have a string title and url."]},
        )


def _check_window(start_time: datetime, end_time: datetime) -> None:
    if as_utc(end_time) <= as_utc(start_time):
        raise ValidationFailedError(
            "Validation failed",
            errors={"end_time": ["The end time must be a date after start time."]},
        )


async def _read_main(upload: Optional[UploadFile]) -> Optional[Tuple[str, bytes]]:
    if upload is None or not upload.filename:
        return None
    return upload.filename, await read_image(upload, "main_image")


async def _read_gallery(uploads: Optional[List[UploadFile]]) -> List[Tuple[str, bytes]]:
    files = []
    for upload in uploads or []:
        if upload is None or not upload.filename:
            continue
        files.append((upload.filename, await read_image(upload, "event_images")))
    return files


def _save_gallery(files: List[Tuple[str, bytes]]) -> List[str]:
    return [save_file(EVENT_FOLDER, name, data) for name, data in files]


def _replace_videos(event: Event, videos: List[VideoIn]) -> None:
    # delete-orphan removes the dropped rows on flush
    event.videos.clear()
    for video in videos:
        event.videos.append(EventVideo(title=video.title, url=video.url))


# ---------------------------------------------------------------------------
# GET /api/events  – public
# ---------------------------------------------------------------------------


@router.get("", response_model=EventListResponse)
def list_events(
    status_filter: Optional[EventStatus] = Query(None, alias="status"),
    event_kind: Optional[EventKind] = Query(None, alias="EventType"),
    db: Session = Depends(get_db),
):
    """
    Newest start first.  ``EventType=newEvent`` keeps events that have not
    started yet, ``oldEvent`` those that already have.
    """
    q = db.query(Event).options(joinedload(Event.user), selectinload(Event.videos))
    if status_filter:
        q = q.filter(Event.status == status_filter)
    if event_kind:
        now = datetime.now(timezone.utc)
        if event_kind == "newEvent":
            q = q.filter(Event.start_time > now)
        else:
            q = q.filter(Event.start_time <= now)

    events = q.order_by(Event.start_time.desc()).all()
    return {
        "success": True,
        "total": len(events),
        "filters_applied": {"status": status_filter, "EventType": event_kind},
        "data": events,
    }


# ---------------------------------------------------------------------------
# GET /api/events/{event_id}  – public
# ---------------------------------------------------------------------------


@router.get("/{event_id}", response_model=EventResponse)
def get_event(event_id: str, db: Session = Depends(get_db)):
    return {"success": True, "data": _load(db, event_id)}


# ---------------------------------------------------------------------------
# POST /api/events  – admin
# ---------------------------------------------------------------------------


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    title: str = Form(..., max_length=255),
    venue: str = Form(..., max_length=255),
    start_time: datetime = Form(...),
    end_time: datetime = Form(...),
    description: Optional[str] = Form(None),
    status_value: EventStatus = Form("Active", alias="status"),
    show_video_details: Optional[str] = Form(None),
    event_location: Optional[str] = Form(None, max_length=255),
    videos: Optional[str] = Form(None),
    main_image: Optional[UploadFile] = File(None),
    event_images: Optional[List[UploadFile]] = File(None),
    ctx: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    _check_window(start_time, end_time)
    show_videos = _parse_flag(show_video_details) or False
    video_rows = _parse_videos(videos) or []

    # every upload is validated before anything touches the disk
    main_file = await _read_main(main_image)
    gallery = await _read_gallery(event_images)

    main_image_name = None
    if main_file:
        main_image_name = save_file(EVENT_FOLDER, *main_file, tag="main")
    image_names = _save_gallery(gallery)

    event = Event(
        title=title,
        description=description,
        venue=venue,
        status=status_value,
        start_time=as_utc(start_time),
        end_time=as_utc(end_time),
        show_video_details=show_videos,
        event_location=event_location,
        main_image=main_image_name,
        event_images=image_names,
        user_id=ctx.user_id,
    )
    _replace_videos(event, video_rows)
    db.add(event)
    db.commit()

    logger.info("event created | id=%s videos=%d by=%s", event.event_id, len(video_rows), ctx.user_id)
    return {"success": True, "message": "Event created successfully", "data": _load(db, event.event_id)}


# ---------------------------------------------------------------------------
# PUT /api/events/{event_id}  – admin, partial
# ---------------------------------------------------------------------------


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: str,
    title: Optional[str] = Form(None, max_length=255),
    venue: Optional[str] = Form(None, max_length=255),
    start_time: Optional[datetime] = Form(None),
    end_time: Optional[datetime] = Form(None),
    description: Optional[str] = Form(None),
    status_value: Optional[EventStatus] = Form(None, alias="status"),
    show_video_details: Optional[str] = Form(None),
    event_location: Optional[str] = Form(None, max_length=255),
    videos: Optional[str] = Form(None),
    main_image: Optional[UploadFile] = File(None),
    event_images: Optional[List[UploadFile]] = File(None),
    ctx: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    event = _load(db, event_id)

    if start_time is not None or end_time is not None:
        _check_window(start_time or event.start_time, end_time or event.end_time)
    show_videos = _parse_flag(show_video_details)
    video_rows = _parse_videos(videos)

    main_file = await _read_main(main_image)
    gallery = await _read_gallery(event_images)

    # replaced files are removed only once the new names are committed
    stale = []
    if main_file:
        stale.append(event.main_image)
        event.main_image = save_file(EVENT_FOLDER, *main_file, tag="main")
    if gallery:
        stale.extend(event.event_images or [])
        event.event_images = _save_gallery(gallery)

    if title is not None:
        event.title = title
    if venue is not None:
        event.venue = venue
    if description is not None:
        event.description = description
    if status_value is not None:
        event.status = status_value
    if start_time is not None:
        event.start_time = as_utc(start_time)
    if end_time is not None:
        event.end_time = as_utc(end_time)
    if show_videos is not None:
        event.show_video_details = show_videos
    if event_location is not None:
        event.event_location = event_location

    if video_rows is not None:
        _replace_videos(event, video_rows)

    db.commit()
    delete_files(EVENT_FOLDER, stale)
    db.expire_all()
    return {"success": True, "message": "Event updated successfully", "data": _load(db, event_id)}


# ---------------------------------------------------------------------------
# DELETE /api/events/{event_id}  – admin
# ---------------------------------------------------------------------------


@router.delete("/{event_id}")
def delete_event(
    event_id: str,
    ctx: AuthContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    event = _load(db, event_id)
    delete_file(EVENT_FOLDER, event.main_image)
    delete_files(EVENT_FOLDER, event.event_images)
    db.delete(event)  # videos go with it (delete-orphan)
    db.commit()

    logger.info("event deleted | id=%s by=%s", event_id, ctx.user_id)
    return {"success": True, "message": "Event deleted successfully"}
