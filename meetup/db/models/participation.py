"""Participation model (one join request per user and meeting)."""
from datetime import datetime, timezone as tz
from enum import Enum
from sqlalchemy import Column, Integer, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import relationship

from meetup.core.constants import PARTICIPATION_UNIQUE_CONSTRAINT
from meetup.db.base import Base


class ParticipationStatus(str, Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


class Participation(Base):
    __tablename__ = "participations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    meeting_id = Column(Integer, ForeignKey("meetings.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    status = Column(
        SAEnum(ParticipationStatus, name="participation_status", native_enum=False, length=16),
        nullable=False,
        default=ParticipationStatus.PENDING,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(tz.utc),
        onupdate=lambda: datetime.now(tz.utc),
    )

    # Relationships
    meeting = relationship("Meeting", back_populates="participations")
    user = relationship("User")

    __table_args__ = (
        Index("idx_participations_meeting", "meeting_id"),
        Index("idx_participations_user", "user_id"),
        UniqueConstraint("user_id", "meeting_id", name=PARTICIPATION_UNIQUE_CONSTRAINT),
    )
