"""Notification model."""
from datetime import datetime, timezone as tz
from enum import Enum
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import relationship

from meetup.db.base import Base


class NotificationType(str, Enum):
    PARTICIPATION_REQUEST = "PARTICIPATION_REQUEST"
    PARTICIPATION_ACCEPTED = "PARTICIPATION_ACCEPTED"
    PARTICIPATION_REJECTED = "PARTICIPATION_REJECTED"
    MEETING_CANCELLED = "MEETING_CANCELLED"


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    meeting_id = Column(Integer, ForeignKey("meetings.id", ondelete="CASCADE"), nullable=False)
    sender_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    receiver_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    type = Column(
        SAEnum(NotificationType, name="notification_type", native_enum=False, length=32),
        nullable=False,
    )
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    meeting = relationship("Meeting", back_populates="notifications")

    __table_args__ = (
        Index("idx_notifications_receiver", "receiver_id", "is_read"),
        Index("idx_notifications_meeting_sender", "meeting_id", "sender_id"),
    )
