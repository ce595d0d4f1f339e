"""Notification schemas."""
from datetime import datetime
from pydantic import BaseModel

from meetup.db.models import NotificationType


class NotificationResponse(BaseModel):
    id: int
    meeting_id: int
    sender_id: int
    receiver_id: int
    type: NotificationType
    is_read: bool
    created_at: datetime
