"""Shared utilities for service layer."""
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from meetup.core.constants import PARTICIPATION_UNIQUE_CONSTRAINT
from meetup.core.errors import ErrorKind, ServiceError
from meetup.core.logging_config import get_logger
from meetup.db.models import Meeting

logger = get_logger(__name__)


def lock_meeting(db: Session, meeting_id: int) -> Optional[Meeting]:
    """
    Load a meeting row with ``SELECT ... FOR UPDATE``.

    Holding the row lock until commit serializes every writer of
    ``current_participants`` for the same meeting. Dialects without row
    locks (SQLite) ignore the clause; there the database-level write lock
    plays the same role.

    Args:
        db: Database session
        meeting_id: Meeting ID to lock

    Returns:
        Meeting if found, None otherwise
    """
    return (
        db.query(Meeting)
        .filter(Meeting.id == meeting_id)
        .with_for_update()
        .populate_existing()
        .first()
    )


def _is_duplicate_participation(error: IntegrityError) -> bool:
    message = str(error.orig) if error.orig is not None else str(error)
    if PARTICIPATION_UNIQUE_CONSTRAINT in message:
        return True
    # SQLite reports the columns rather than the constraint name
    return "unique constraint failed: participations" in message.lower()


@contextmanager
def unit_of_work(db: Session) -> Iterator[Session]:
    """
    Run a block as one transaction: commit on success, roll back on any error.

    ServiceError passes through unchanged. A duplicate participation caught
    by the unique constraint becomes CONFLICT, and any other store failure
    becomes INTERNAL.
    """
    try:
        yield db
        db.commit()
    except ServiceError:
        db.rollback()
        raise
    except IntegrityError as e:
        db.rollback()
        if _is_duplicate_participation(e):
            raise ServiceError(ErrorKind.CONFLICT, "Participation already requested") from e
        logger.error("store_integrity_error", error=str(e.orig))
        raise ServiceError(ErrorKind.INTERNAL, "Database constraint violated") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("store_error", error=str(e), error_type=type(e).__name__)
        raise ServiceError(ErrorKind.INTERNAL, "Database error") from e
    except Exception:
        db.rollback()
        raise
