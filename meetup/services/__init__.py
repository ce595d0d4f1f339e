from .capacity import CapacityCoordinator, seat_delta
from .meeting import (
    cancel_meeting,
    create_meeting,
    get_meeting,
    list_my_meetings,
    list_upcoming_meetings,
)
from .notification import list_notifications, mark_notification_read
from .participation import (
    apply_decisions,
    list_applicants,
    request_join,
    withdraw_or_remove,
)
from .user import ensure_profile, get_profile, upsert_profile

__all__ = [
    # capacity
    "CapacityCoordinator",
    "seat_delta",
    # meetings
    "cancel_meeting",
    "create_meeting",
    "get_meeting",
    "list_my_meetings",
    "list_upcoming_meetings",
    # notifications
    "list_notifications",
    "mark_notification_read",
    # participations
    "apply_decisions",
    "list_applicants",
    "request_join",
    "withdraw_or_remove",
    # users
    "ensure_profile",
    "get_profile",
    "upsert_profile",
]
