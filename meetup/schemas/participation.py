"""Participation schemas."""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from meetup.db.models import ParticipationStatus


class ParticipationState(BaseModel):
    participation_id: int
    meeting_id: int
    user_id: int
    status: ParticipationStatus


class ParticipationDecision(BaseModel):
    """One host decision. Accepts ``participationId`` or ``participation_id``."""
    model_config = ConfigDict(populate_by_name=True)

    participation_id: int = Field(..., alias="participationId")
    status: ParticipationStatus


class Applicant(BaseModel):
    participation_id: int
    user_id: int
    nickname: Optional[str] = None
    bio: str = ""
    status: ParticipationStatus
