"""Capacity coordination for meetings.

``CapacityCoordinator`` is the only code path that changes
``Meeting.current_participants``. Each change is an atomic conditional
UPDATE, so the counter can never leave ``[1, max_participants]`` even if two
transactions race on the same meeting. A running tally mirrors the counter
within one transaction so a batch can refuse an acceptance before touching
the database.
"""
from sqlalchemy.orm import Session

from meetup.core.constants import HOST_SEATS
from meetup.core.errors import ErrorKind, ServiceError
from meetup.core.logging_config import get_logger
from meetup.db.models import Meeting, ParticipationStatus

logger = get_logger(__name__)


def seat_delta(prior: ParticipationStatus, desired: ParticipationStatus) -> int:
    """Seats a status transition consumes (+1), releases (-1) or leaves alone (0)."""
    if prior == desired:
        return 0
    if desired == ParticipationStatus.ACCEPTED:
        return 1
    if prior == ParticipationStatus.ACCEPTED:
        # ACCEPTED -> PENDING or ACCEPTED -> REJECTED
        return -1
    if desired in (ParticipationStatus.PENDING, ParticipationStatus.REJECTED):
        # PENDING <-> REJECTED
        return 0
    raise ValueError(f"Unknown participation status: {desired!r}")


class CapacityCoordinator:
    """Reserves and releases seats of one meeting inside the caller's transaction."""

    def __init__(self, db: Session, meeting: Meeting):
        self.db = db
        self.meeting = meeting
        self.meeting_id = meeting.id
        self.max_participants = meeting.max_participants
        self.tally = meeting.current_participants

    @property
    def is_full(self) -> bool:
        return self.tally >= self.max_participants

    def _capacity_exceeded(self) -> ServiceError:
        return ServiceError(
            ErrorKind.CAPACITY_EXCEEDED,
            f"Meeting is full (max {self.max_participants} participants)",
        )

    def reserve(self) -> None:
        """Take one seat, or raise CAPACITY_EXCEEDED."""
        if self.is_full:
            raise self._capacity_exceeded()

        updated = (
            self.db.query(Meeting)
            .filter(
                Meeting.id == self.meeting_id,
                Meeting.current_participants < Meeting.max_participants,
            )
            .update(
                {Meeting.current_participants: Meeting.current_participants + 1},
                synchronize_session=False,
            )
        )
        if updated == 0:
            # Another transaction filled the last seat after our snapshot
            logger.warning("capacity_reserve_lost_race", meeting_id=self.meeting_id, tally=self.tally)
            raise self._capacity_exceeded()

        self.tally += 1
        self.db.expire(self.meeting, ["current_participants"])

    def release(self) -> None:
        """Give back one seat. The host's own seat is never released."""
        updated = (
            self.db.query(Meeting)
            .filter(
                Meeting.id == self.meeting_id,
                Meeting.current_participants > HOST_SEATS,
            )
            .update(
                {Meeting.current_participants: Meeting.current_participants - 1},
                synchronize_session=False,
            )
        )
        if updated == 0:
            logger.error("capacity_release_underflow", meeting_id=self.meeting_id, tally=self.tally)
            raise ServiceError(ErrorKind.INTERNAL, "Participant count is already at its minimum")

        self.tally -= 1
        self.db.expire(self.meeting, ["current_participants"])

    def apply(self, prior: ParticipationStatus, desired: ParticipationStatus) -> int:
        """Reserve or release whatever seat a transition needs. Returns the delta."""
        delta = seat_delta(prior, desired)
        if delta > 0:
            self.reserve()
        elif delta < 0:
            self.release()
        return delta
