"""Meeting endpoints."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from meetup.api.deps import get_db, get_current_user_id
from meetup.schemas import (
    MeetingCancelResponse,
    MeetingCreate,
    MeetingDetail,
    MeetingResponse,
    MeetingsPage,
    MyMeetingsPage,
)
from meetup.services.meeting import (
    cancel_meeting,
    create_meeting,
    get_meeting,
    list_my_meetings,
    list_upcoming_meetings,
)
from meetup.core.rate_limit import limiter, RATE_LIMITS

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=MeetingResponse, status_code=201)
@limiter.limit(RATE_LIMITS["meeting_write"])
async def create_meeting_endpoint(
    request: Request,
    meeting: MeetingCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Create a meeting hosted by the caller.

    The host takes the first seat, so a new meeting starts with
    ``current_participants == 1``.

    Example:
        Request:
            POST /api/v1/meetings
            Authorization: Bearer eyJhbGc...
            {
                "title": "Sunday hike",
                "description": "Bring water",
                "max_participants": 5,
                "meeting_date": "2026-11-03T09:00:00Z"
            }

        Response (201):
            {
                "id": 42,
                "host_id": 1,
                "title": "Sunday hike",
                "description": "Bring water",
                "max_participants": 5,
                "current_participants": 1,
                "meeting_date": "2026-11-03T09:00:00Z",
                "deleted": false
            }
    """
    return create_meeting(
        db,
        host_id=user_id,
        title=meeting.title,
        description=meeting.description,
        max_participants=meeting.max_participants,
        meeting_date=meeting.meeting_date,
    )


@router.get("", response_model=MeetingsPage)
@limiter.limit(RATE_LIMITS["read"])
async def list_upcoming_meetings_endpoint(
    request: Request,
    page: int = Query(1),
    limit: Optional[int] = Query(None),
    db: Session = Depends(get_db)
):
    """
    Page through meetings that are still open to join requests.

    Cancelled and past meetings are excluded; newest meetings first.
    """
    return list_upcoming_meetings(db, page=page, limit=limit)


@router.get("/mine", response_model=MyMeetingsPage)
@limiter.limit(RATE_LIMITS["read"])
async def list_my_meetings_endpoint(
    request: Request,
    view: str = Query("all"),
    status: str = Query("all"),
    page: int = Query(1),
    limit: Optional[int] = Query(None),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Page through meetings the caller hosts or has asked to join.

    Query:
        view: all | hosted | joined
        status: all | pending | accepted | completed
        page, limit: 1-based page number and page size
    """
    return list_my_meetings(db, user_id, view=view, status=status, page=page, limit=limit)


@router.get("/{meeting_id}", response_model=MeetingDetail)
@limiter.limit(RATE_LIMITS["read"])
async def get_meeting_endpoint(
    request: Request,
    meeting_id: int,
    db: Session = Depends(get_db)
):
    """Get a meeting with its host profile. 410 if it has been cancelled."""
    return get_meeting(db, meeting_id)


@router.delete("/{meeting_id}", response_model=MeetingCancelResponse)
@limiter.limit(RATE_LIMITS["meeting_write"])
async def cancel_meeting_endpoint(
    request: Request,
    meeting_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Cancel (soft-delete) a meeting (host only).

    Every accepted participant is notified. Afterwards all participation
    operations on the meeting answer 410 Gone.
    """
    notified = cancel_meeting(db, meeting_id, user_id)
    logger.info(f"Meeting cancelled (meeting_id={meeting_id}, notified={notified})")
    return MeetingCancelResponse(success=True, notified=notified)
