"""Notification endpoints."""
from typing import List
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from meetup.api.deps import get_db, get_current_user_id
from meetup.schemas import NotificationResponse
from meetup.services.notification import list_notifications, mark_notification_read
from meetup.core.rate_limit import limiter, RATE_LIMITS

router = APIRouter()


@router.get("", response_model=List[NotificationResponse])
@limiter.limit(RATE_LIMITS["read"])
async def list_notifications_endpoint(
    request: Request,
    unread_only: bool = Query(False),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """List the caller's notifications, newest first."""
    return list_notifications(db, user_id, unread_only=unread_only)


@router.patch("/{notification_id}/read", response_model=NotificationResponse)
@limiter.limit(RATE_LIMITS["read"])
async def mark_notification_read_endpoint(
    request: Request,
    notification_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Mark one of the caller's notifications as read."""
    return mark_notification_read(db, notification_id, user_id)
