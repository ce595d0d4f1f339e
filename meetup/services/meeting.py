"""Meeting business logic."""
from datetime import datetime
from math import ceil
from typing import Dict, Optional

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from meetup.core import config
from meetup.core.constants import HOST_SEATS, MIN_MAX_PARTICIPANTS
from meetup.core.errors import ErrorKind, ServiceError
from meetup.core.logging_config import get_logger
from meetup.core.utils import has_passed, to_utc, utcnow
from meetup.db.models import Meeting, NotificationType, Participation, ParticipationStatus
from meetup.services.notification import notify_many
from meetup.services.user import ensure_profile
from meetup.services.utils import lock_meeting, unit_of_work

logger = get_logger(__name__)

MEETING_VIEWS = ("all", "hosted", "joined")
MEETING_STATUS_FILTERS = ("all", "pending", "accepted", "completed")


def _page_limit(page: int, limit: Optional[int]) -> int:
    """Resolve the page size and reject out-of-range paging arguments."""
    if limit is None:
        limit = config.settings.DEFAULT_PAGE_SIZE
    if page < 1 or limit < 1 or limit > config.settings.MAX_PAGE_SIZE:
        raise ServiceError(ErrorKind.BAD_REQUEST, "Invalid page or limit")
    return limit


def _page_meta(total: int, page: int, limit: int) -> Dict:
    total_pages = ceil(total / limit) if total else 0
    return {
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": total_pages,
        "has_next": page < total_pages,
    }


def _serialize(meeting: Meeting) -> Dict:
    return {
        "id": meeting.id,
        "host_id": meeting.host_id,
        "title": meeting.title,
        "description": meeting.description,
        "max_participants": meeting.max_participants,
        "current_participants": meeting.current_participants,
        "meeting_date": to_utc(meeting.meeting_date),
        "deleted": meeting.deleted,
    }


def create_meeting(
    db: Session,
    host_id: int,
    title: str,
    description: str,
    max_participants: int,
    meeting_date: datetime,
    now: Optional[datetime] = None,
) -> Dict:
    """Create a new meeting. The host occupies the first seat."""
    if max_participants < MIN_MAX_PARTICIPANTS:
        raise ServiceError(ErrorKind.BAD_REQUEST, "Maximum participants must be at least 1")

    meeting_date = to_utc(meeting_date)
    if has_passed(meeting_date, now or utcnow()):
        raise ServiceError(ErrorKind.BAD_REQUEST, "Meeting date must be in the future")

    with unit_of_work(db):
        ensure_profile(db, host_id)
        meeting = Meeting(
            host_id=host_id,
            title=title,
            description=description,
            max_participants=max_participants,
            current_participants=HOST_SEATS,
            meeting_date=meeting_date,
            deleted=False,
        )
        db.add(meeting)
        db.flush()
        result = _serialize(meeting)

    logger.info("meeting_created", meeting_id=result["id"], host_id=host_id, max_participants=max_participants)
    return result


def get_meeting(db: Session, meeting_id: int) -> Dict:
    """Get a meeting. Raises NOT_FOUND or GONE."""
    meeting = db.query(Meeting).filter(Meeting.id == meeting_id).first()
    if not meeting:
        raise ServiceError(ErrorKind.NOT_FOUND, "Meeting not found")
    if meeting.deleted:
        raise ServiceError(ErrorKind.GONE, "Meeting has been cancelled")

    result = _serialize(meeting)
    result["host"] = {
        "id": meeting.host_id,
        "nickname": meeting.host.nickname if meeting.host else None,
        "bio": (meeting.host.bio or "") if meeting.host else "",
    }
    return result


def cancel_meeting(db: Session, meeting_id: int, caller_id: int, now: Optional[datetime] = None) -> int:
    """
    Soft-delete a meeting and tell every accepted participant.

    The meeting row and all of its participations are kept; the ``deleted``
    flag makes the meeting terminal for every participation operation.

    Args:
        db: Database session
        meeting_id: Meeting to cancel
        caller_id: Acting user, must be the host
        now: Current time (defaults to the system clock)

    Returns:
        int: Number of cancellation notifications sent

    Raises:
        ServiceError: NOT_FOUND, GONE (already cancelled), FORBIDDEN,
            BAD_REQUEST (meeting already took place)
    """
    with unit_of_work(db):
        meeting = lock_meeting(db, meeting_id)
        if not meeting:
            raise ServiceError(ErrorKind.NOT_FOUND, "Meeting not found")
        if meeting.deleted:
            raise ServiceError(ErrorKind.GONE, "Meeting has already been cancelled")
        if meeting.host_id != caller_id:
            raise ServiceError(ErrorKind.FORBIDDEN, "Only the host can cancel the meeting")
        if has_passed(meeting.meeting_date, now or utcnow()):
            raise ServiceError(ErrorKind.BAD_REQUEST, "A meeting that has already taken place cannot be cancelled")

        accepted_user_ids = [
            user_id
            for (user_id,) in db.query(Participation.user_id).filter(
                Participation.meeting_id == meeting_id,
                Participation.status == ParticipationStatus.ACCEPTED,
            ).all()
        ]

        meeting.deleted = True
        notified = notify_many(
            db, meeting_id, caller_id, accepted_user_ids, NotificationType.MEETING_CANCELLED
        )

    logger.info("meeting_cancelled", meeting_id=meeting_id, notified=notified)
    return notified


def list_my_meetings(
    db: Session,
    user_id: int,
    view: str = "all",
    status: str = "all",
    page: int = 1,
    limit: Optional[int] = None,
    now: Optional[datetime] = None,
) -> Dict:
    """
    Page through the meetings a user hosts or has asked to join.

    Args:
        view: "hosted", "joined" (someone else's meeting) or "all"
        status: "pending", "accepted" (upcoming), "completed" (past) or "all".
            Hosts count as accepted in their own meetings.

    Returns:
        {"data": [...], "meta": {"total", "page", "limit", "total_pages", "has_next"}}
    """
    limit = _page_limit(page, limit)
    if view not in MEETING_VIEWS:
        raise ServiceError(ErrorKind.BAD_REQUEST, f"view must be one of {', '.join(MEETING_VIEWS)}")
    if status not in MEETING_STATUS_FILTERS:
        raise ServiceError(ErrorKind.BAD_REQUEST, f"status must be one of {', '.join(MEETING_STATUS_FILTERS)}")

    now = now or utcnow()

    def has_participation(*criteria):
        return Meeting.participations.any(and_(Participation.user_id == user_id, *criteria))

    is_host = Meeting.host_id == user_id
    conditions = [Meeting.deleted.is_(False)]

    if view == "hosted":
        conditions.append(is_host)
    elif view == "joined":
        conditions.extend([Meeting.host_id != user_id, has_participation()])
    else:
        conditions.append(or_(is_host, has_participation()))

    accepted = or_(is_host, has_participation(Participation.status == ParticipationStatus.ACCEPTED))
    if status == "pending":
        conditions.append(has_participation(Participation.status == ParticipationStatus.PENDING))
    elif status == "accepted":
        conditions.extend([Meeting.meeting_date >= now, accepted])
    elif status == "completed":
        conditions.extend([Meeting.meeting_date < now, accepted])

    query = db.query(Meeting).filter(and_(*conditions))
    total = query.count()
    meetings = (
        query.order_by(Meeting.meeting_date.desc(), Meeting.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    own_status = dict(
        db.query(Participation.meeting_id, Participation.status).filter(
            Participation.user_id == user_id,
            Participation.meeting_id.in_([m.id for m in meetings]),
        ).all()
    ) if meetings else {}

    data = []
    for meeting in meetings:
        hosting = meeting.host_id == user_id
        data.append({
            "meeting_id": meeting.id,
            "title": meeting.title,
            "max_participants": meeting.max_participants,
            "current_participants": meeting.current_participants,
            "meeting_date": to_utc(meeting.meeting_date),
            "status": ParticipationStatus.ACCEPTED if hosting else own_status.get(meeting.id, ParticipationStatus.PENDING),
            "is_host": hosting,
            "is_completed": has_passed(meeting.meeting_date, now),
        })

    return {"data": data, "meta": _page_meta(total, page, limit)}


def list_upcoming_meetings(
    db: Session,
    page: int = 1,
    limit: Optional[int] = None,
    now: Optional[datetime] = None,
) -> Dict:
    """
    Page through meetings anyone can still ask to join.

    Cancelled meetings and meetings whose date has passed are left out.
    Newest meetings come first.

    Returns:
        {"data": [meeting dicts], "meta": {"total", "page", "limit", "total_pages", "has_next"}}
    """
    limit = _page_limit(page, limit)
    now = now or utcnow()

    query = db.query(Meeting).filter(
        Meeting.deleted.is_(False),
        Meeting.meeting_date >= now,
    )
    total = query.count()
    meetings = (
        query.order_by(Meeting.created_at.desc(), Meeting.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    return {"data": [_serialize(m) for m in meetings], "meta": _page_meta(total, page, limit)}
