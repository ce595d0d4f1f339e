"""General utility functions."""
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current time as an aware UTC datetime.

    All "has the meeting passed" comparisons go through this function so that
    tests can patch a single clock.
    """
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """Convert datetime to UTC timezone."""
    if dt.tzinfo is None:
        # Assume UTC if no timezone
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def has_passed(moment: datetime, now: datetime = None) -> bool:
    """True when ``moment`` lies strictly before ``now``."""
    if now is None:
        now = utcnow()
    return to_utc(moment) < to_utc(now)
