"""Pydantic schemas for request/response validation."""
from meetup.schemas.meeting import (
    MeetingCreate,
    MeetingResponse,
    MeetingDetail,
    MeetingCancelResponse,
    MeetingsPage,
    MyMeetingItem,
    MyMeetingsPage,
)
from meetup.schemas.participation import (
    Applicant,
    ParticipationDecision,
    ParticipationState,
)
from meetup.schemas.notification import NotificationResponse
from meetup.schemas.user import ProfileUpdate, ProfileResponse
from meetup.schemas.common import SuccessResponse, ErrorResponse, ErrorDetail, PageMeta

__all__ = [
    "MeetingCreate",
    "MeetingResponse",
    "MeetingDetail",
    "MeetingCancelResponse",
    "MeetingsPage",
    "MyMeetingItem",
    "MyMeetingsPage",
    "Applicant",
    "ParticipationDecision",
    "ParticipationState",
    "NotificationResponse",
    "ProfileUpdate",
    "ProfileResponse",
    "SuccessResponse",
    "ErrorResponse",
    "ErrorDetail",
    "PageMeta",
]
