"""Notification business logic.

Notifications are written only as side effects of participation and meeting
transitions. The helpers that create or remove them never commit; they run
inside the caller's transaction so the trail always matches the ledger.
"""
from typing import Dict, Iterable, List

from sqlalchemy.orm import Session

from meetup.core.errors import ErrorKind, ServiceError
from meetup.db.models import Notification, NotificationType
from meetup.services.utils import unit_of_work


def notify(
    db: Session,
    meeting_id: int,
    sender_id: int,
    receiver_id: int,
    notification_type: NotificationType,
) -> Notification:
    """Stage a new unread notification in the current transaction."""
    notification = Notification(
        meeting_id=meeting_id,
        sender_id=sender_id,
        receiver_id=receiver_id,
        type=notification_type,
        is_read=False,
    )
    db.add(notification)
    return notification


def notify_many(
    db: Session,
    meeting_id: int,
    sender_id: int,
    receiver_ids: Iterable[int],
    notification_type: NotificationType,
) -> int:
    """Stage the same notification for several receivers. Returns the count."""
    count = 0
    for receiver_id in receiver_ids:
        notify(db, meeting_id, sender_id, receiver_id, notification_type)
        count += 1
    return count


def _join_requests(db: Session, meeting_id: int, requester_id: int, host_id: int):
    return db.query(Notification).filter(
        Notification.meeting_id == meeting_id,
        Notification.sender_id == requester_id,
        Notification.receiver_id == host_id,
        Notification.type == NotificationType.PARTICIPATION_REQUEST,
    )


def mark_join_requests_read(db: Session, meeting_id: int, requester_id: int, host_id: int) -> int:
    """Mark the host's unread join-request notifications from a requester as read."""
    return _join_requests(db, meeting_id, requester_id, host_id).filter(
        Notification.is_read.is_(False)
    ).update({Notification.is_read: True}, synchronize_session=False)


def discard_join_requests(db: Session, meeting_id: int, requester_id: int, host_id: int) -> int:
    """Delete the join-request notifications a requester sent to the host."""
    return _join_requests(db, meeting_id, requester_id, host_id).delete(
        synchronize_session=False
    )


def _serialize(notification: Notification) -> Dict:
    return {
        "id": notification.id,
        "meeting_id": notification.meeting_id,
        "sender_id": notification.sender_id,
        "receiver_id": notification.receiver_id,
        "type": notification.type,
        "is_read": notification.is_read,
        "created_at": notification.created_at,
    }


def list_notifications(db: Session, user_id: int, unread_only: bool = False) -> List[Dict]:
    """List notifications addressed to a user, newest first."""
    query = db.query(Notification).filter(Notification.receiver_id == user_id)
    if unread_only:
        query = query.filter(Notification.is_read.is_(False))
    notifications = query.order_by(Notification.created_at.desc(), Notification.id.desc()).all()
    return [_serialize(n) for n in notifications]


def mark_notification_read(db: Session, notification_id: int, user_id: int) -> Dict:
    """Mark one notification read on behalf of its receiver."""
    with unit_of_work(db):
        notification = db.query(Notification).filter(Notification.id == notification_id).first()
        if not notification:
            raise ServiceError(ErrorKind.NOT_FOUND, "Notification not found")
        if notification.receiver_id != user_id:
            raise ServiceError(ErrorKind.FORBIDDEN, "Notification belongs to another user")
        notification.is_read = True

    return _serialize(notification)
