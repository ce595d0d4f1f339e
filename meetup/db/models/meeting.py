"""Meeting model."""
from datetime import datetime, timezone as tz
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from meetup.db.base import Base


class Meeting(Base):
    __tablename__ = "meetings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    host_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    max_participants = Column(Integer, nullable=False)
    # Includes the host's implicit seat; only the capacity coordinator writes it
    current_participants = Column(Integer, nullable=False, default=1)
    meeting_date = Column(DateTime(timezone=True), nullable=False)
    deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(tz.utc),
        onupdate=lambda: datetime.now(tz.utc),
    )

    # Relationships
    host = relationship("User")
    participations = relationship("Participation", back_populates="meeting", cascade="all, delete-orphan")
    notifications = relationship("Notification", back_populates="meeting", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_meetings_host", "host_id"),
        Index("idx_meetings_date", "meeting_date"),
        CheckConstraint("max_participants >= 1", name="ck_meeting_max_positive"),
        CheckConstraint(
            "current_participants >= 1 AND current_participants <= max_participants",
            name="ck_meeting_occupancy",
        ),
    )

    @property
    def seats_left(self) -> int:
        return self.max_participants - self.current_participants
