"""Meeting schemas."""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from meetup.db.models import ParticipationStatus
from meetup.schemas.common import PageMeta


class MeetingCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=5000)
    max_participants: int = Field(..., ge=1)
    meeting_date: datetime

    @field_validator('title')
    @classmethod
    def strip_title(cls, v: str) -> str:
        """Reject titles that are only whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("Title must not be blank")
        return v


class HostProfile(BaseModel):
    id: int
    nickname: Optional[str] = None
    bio: str = ""


class MeetingResponse(BaseModel):
    id: int
    host_id: int
    title: str
    description: str
    max_participants: int
    current_participants: int
    meeting_date: datetime
    deleted: bool


class MeetingDetail(MeetingResponse):
    host: HostProfile


class MyMeetingItem(BaseModel):
    meeting_id: int
    title: str
    max_participants: int
    current_participants: int
    meeting_date: datetime
    status: ParticipationStatus
    is_host: bool
    is_completed: bool


class MeetingsPage(BaseModel):
    data: List[MeetingResponse]
    meta: PageMeta


class MyMeetingsPage(BaseModel):
    data: List[MyMeetingItem]
    meta: PageMeta


class MeetingCancelResponse(BaseModel):
    success: bool = True
    notified: int
