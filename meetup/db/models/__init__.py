"""Database models."""
from meetup.db.models.user import User
from meetup.db.models.meeting import Meeting
from meetup.db.models.participation import Participation, ParticipationStatus
from meetup.db.models.notification import Notification, NotificationType

__all__ = [
    "User",
    "Meeting",
    "Participation",
    "ParticipationStatus",
    "Notification",
    "NotificationType",
]
