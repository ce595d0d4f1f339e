"""Participation business logic.

Join requests, host decisions and withdrawals. Every operation that writes
runs as one transaction under the meeting's row lock; see
``meetup.services.capacity`` for how occupancy is kept within bounds.
"""
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session, joinedload

from meetup.core import config
from meetup.core.errors import ErrorKind, ServiceError
from meetup.core.logging_config import get_logger
from meetup.core.utils import has_passed, utcnow
from meetup.db.models import Meeting, NotificationType, Participation, ParticipationStatus
from meetup.services.capacity import CapacityCoordinator
from meetup.services.notification import (
    discard_join_requests,
    mark_join_requests_read,
    notify,
)
from meetup.services.user import ensure_profile
from meetup.services.utils import lock_meeting, unit_of_work

logger = get_logger(__name__)

DECISION_NOTIFICATIONS = {
    ParticipationStatus.ACCEPTED: NotificationType.PARTICIPATION_ACCEPTED,
    ParticipationStatus.REJECTED: NotificationType.PARTICIPATION_REJECTED,
}


def _participation_state(participation: Participation) -> Dict:
    return {
        "participation_id": participation.id,
        "meeting_id": participation.meeting_id,
        "user_id": participation.user_id,
        "status": participation.status,
    }


def _require_active(meeting: Optional[Meeting], deleted_message: str) -> Meeting:
    if not meeting:
        raise ServiceError(ErrorKind.NOT_FOUND, "Meeting not found")
    if meeting.deleted:
        raise ServiceError(ErrorKind.GONE, deleted_message)
    return meeting


def _require_host(meeting: Meeting, caller_id: int, message: str) -> None:
    if meeting.host_id != caller_id:
        raise ServiceError(ErrorKind.FORBIDDEN, message)


def request_join(
    db: Session,
    meeting_id: int,
    user_id: int,
    now: Optional[datetime] = None,
    enforce_intake_capacity: Optional[bool] = None,
) -> Dict:
    """
    Ask to join a meeting.

    Creates a PENDING participation and a join-request notification to the
    host in one transaction, plus a placeholder profile for a caller who
    never set one.

    Args:
        db: Database session
        meeting_id: Meeting to join
        user_id: Requesting user
        now: Current time (defaults to the system clock)
        enforce_intake_capacity: Refuse the request when the meeting is
            already full. Defaults to ``settings.INTAKE_CAPACITY_CHECK``.

    Returns:
        Participation state dict with status PENDING

    Raises:
        ServiceError: NOT_FOUND, GONE, EXPIRED, BAD_REQUEST (host joining own
            meeting), CAPACITY_EXCEEDED (only with the intake check on),
            CONFLICT (already requested)
    """
    if enforce_intake_capacity is None:
        enforce_intake_capacity = config.settings.INTAKE_CAPACITY_CHECK

    with unit_of_work(db):
        meeting = _require_active(lock_meeting(db, meeting_id), "Cannot join a cancelled meeting")

        if has_passed(meeting.meeting_date, now or utcnow()):
            raise ServiceError(ErrorKind.EXPIRED, "Cannot join a meeting that has already taken place")

        if meeting.host_id == user_id:
            raise ServiceError(ErrorKind.BAD_REQUEST, "Host cannot request to join their own meeting")

        if enforce_intake_capacity and meeting.current_participants >= meeting.max_participants:
            raise ServiceError(
                ErrorKind.CAPACITY_EXCEEDED,
                f"Meeting is full (max {meeting.max_participants} participants)",
            )

        existing = db.query(Participation).filter(
            Participation.user_id == user_id,
            Participation.meeting_id == meeting_id,
        ).first()
        if existing:
            raise ServiceError(ErrorKind.CONFLICT, "Participation already requested")

        ensure_profile(db, user_id)
        participation = Participation(
            meeting_id=meeting_id,
            user_id=user_id,
            status=ParticipationStatus.PENDING,
        )
        db.add(participation)
        notify(db, meeting_id, user_id, meeting.host_id, NotificationType.PARTICIPATION_REQUEST)
        db.flush()
        state = _participation_state(participation)

    logger.info(
        "participation_requested",
        meeting_id=meeting_id,
        user_id=user_id,
        participation_id=state["participation_id"],
    )
    return state


def list_applicants(db: Session, meeting_id: int, caller_id: int) -> List[Dict]:
    """
    List every participation of a meeting with the requester's profile (host only).

    Returns:
        List of dicts ordered newest first:
        {participation_id, user_id, nickname, bio, status}
    """
    meeting = _require_active(
        db.query(Meeting).filter(Meeting.id == meeting_id).first(),
        "Meeting has been cancelled",
    )
    _require_host(meeting, caller_id, "Only the host can view applicants")

    participations = (
        db.query(Participation)
        .options(joinedload(Participation.user))
        .filter(Participation.meeting_id == meeting_id)
        .order_by(Participation.created_at.desc(), Participation.id.desc())
        .all()
    )

    return [
        {
            "participation_id": p.id,
            "user_id": p.user_id,
            "nickname": p.user.nickname if p.user else None,
            "bio": (p.user.bio or "") if p.user else "",
            "status": p.status,
        }
        for p in participations
    ]


def apply_decisions(
    db: Session,
    meeting_id: int,
    caller_id: int,
    decisions: Iterable[Tuple[int, ParticipationStatus]],
) -> List[Dict]:
    """
    Apply a host's batch of status decisions as one all-or-nothing transaction.

    Decisions are replayed in order against a running occupancy tally seeded
    from the meeting. Unknown participations and decisions equal to the
    current status are skipped. If any acceptance would exceed capacity the
    whole batch is rolled back, including acceptances applied earlier in the
    same batch.

    Args:
        db: Database session
        meeting_id: Meeting whose participations are decided
        caller_id: Acting user, must be the host
        decisions: Ordered (participation_id, desired_status) pairs

    Returns:
        Participation state dicts for the transitions that were applied

    Raises:
        ServiceError: NOT_FOUND, GONE, FORBIDDEN, CAPACITY_EXCEEDED
    """
    decisions = list(decisions)
    applied: List[Dict] = []

    try:
        with unit_of_work(db):
            meeting = _require_active(lock_meeting(db, meeting_id), "Meeting has been cancelled")
            _require_host(meeting, caller_id, "Only the host can change participation status")

            coordinator = CapacityCoordinator(db, meeting)

            for participation_id, desired in decisions:
                try:
                    desired = ParticipationStatus(desired)
                except ValueError:
                    raise ServiceError(ErrorKind.BAD_REQUEST, f"Unknown participation status: {desired}")

                participation = db.query(Participation).filter(
                    Participation.id == participation_id,
                    Participation.meeting_id == meeting_id,
                ).first()

                if not participation or participation.status == desired:
                    continue

                prior = participation.status
                coordinator.apply(prior, desired)
                participation.status = desired

                mark_join_requests_read(db, meeting_id, participation.user_id, meeting.host_id)
                if desired in DECISION_NOTIFICATIONS:
                    notify(db, meeting_id, meeting.host_id, participation.user_id, DECISION_NOTIFICATIONS[desired])

                db.flush()
                applied.append(_participation_state(participation))
                logger.info(
                    "participation_status_changed",
                    meeting_id=meeting_id,
                    participation_id=participation.id,
                    prior=prior.value,
                    status=desired.value,
                    tally=coordinator.tally,
                )
    except ServiceError as e:
        if e.kind == ErrorKind.CAPACITY_EXCEEDED:
            logger.warning(
                "decision_batch_aborted",
                meeting_id=meeting_id,
                batch_size=len(decisions),
                applied_before_abort=len(applied),
            )
        raise

    return applied


def withdraw_or_remove(db: Session, meeting_id: int, participation_id: int, caller_id: int) -> None:
    """
    Delete a participation, either as its requester (withdraw) or as the host (remove).

    An accepted participation gives its seat back. A withdrawal deletes the
    requester's join-request notification to the host. A removal notifies the
    removed user with a rejection and deletes the join-request notification.

    Raises:
        ServiceError: NOT_FOUND, GONE, BAD_REQUEST (host targeting a row of
            their own), FORBIDDEN (neither host nor requester)
    """
    with unit_of_work(db):
        meeting = lock_meeting(db, meeting_id)
        participation = db.query(Participation).filter(Participation.id == participation_id).first()

        if not meeting or not participation or participation.meeting_id != meeting_id:
            raise ServiceError(ErrorKind.NOT_FOUND, "Participation not found")
        if meeting.deleted:
            raise ServiceError(ErrorKind.GONE, "Participation of a cancelled meeting cannot change")

        is_host = meeting.host_id == caller_id
        is_requester = participation.user_id == caller_id

        if is_host and is_requester:
            raise ServiceError(ErrorKind.BAD_REQUEST, "Host cannot remove themselves from their own meeting")
        if not is_host and not is_requester:
            raise ServiceError(ErrorKind.FORBIDDEN, "Not allowed to change this participation")

        if participation.status == ParticipationStatus.ACCEPTED:
            CapacityCoordinator(db, meeting).release()

        requester_id = participation.user_id
        prior = participation.status
        db.delete(participation)
        discard_join_requests(db, meeting_id, requester_id, meeting.host_id)

        if is_host:
            notify(db, meeting_id, meeting.host_id, requester_id, NotificationType.PARTICIPATION_REJECTED)

    logger.info(
        "participation_removed" if is_host else "participation_withdrawn",
        meeting_id=meeting_id,
        participation_id=participation_id,
        user_id=requester_id,
        prior=prior.value,
    )
