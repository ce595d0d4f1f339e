"""Unit tests for notification service."""
import pytest

from meetup.core.errors import ErrorKind, ServiceError
from meetup.db.models import Notification, NotificationType
from meetup.services.notification import (
    list_notifications,
    mark_notification_read,
    notify,
    notify_many,
)
from meetup.services.participation import request_join


@pytest.mark.unit
class TestNotifications:
    """Test reading and acknowledging notifications."""

    def test_notify_does_not_commit(self, db_session, host, make_user, make_meeting):
        meeting = make_meeting()
        alice = make_user("alice")

        notify(db_session, meeting.id, alice.id, host.id, NotificationType.PARTICIPATION_REQUEST)
        db_session.rollback()

        assert db_session.query(Notification).count() == 0

    def test_notify_many_counts(self, db_session, host, make_user, make_meeting):
        meeting = make_meeting()
        users = [make_user(f"u{i}") for i in range(3)]

        count = notify_many(db_session, meeting.id, host.id, [u.id for u in users], NotificationType.MEETING_CANCELLED)
        db_session.commit()

        assert count == 3
        assert db_session.query(Notification).count() == 3

    def test_list_notifications_for_receiver(self, db_session, host, make_user, make_meeting):
        meeting = make_meeting()
        alice = make_user("alice")
        bob = make_user("bob")
        request_join(db_session, meeting.id, alice.id)
        request_join(db_session, meeting.id, bob.id)

        host_notes = list_notifications(db_session, host.id)

        assert [n["sender_id"] for n in host_notes] == [bob.id, alice.id]
        assert all(n["type"] == NotificationType.PARTICIPATION_REQUEST for n in host_notes)
        assert list_notifications(db_session, alice.id) == []

    def test_mark_read_and_unread_filter(self, db_session, host, make_user, make_meeting):
        meeting = make_meeting()
        alice = make_user("alice")
        request_join(db_session, meeting.id, alice.id)
        note_id = list_notifications(db_session, host.id)[0]["id"]

        result = mark_notification_read(db_session, note_id, host.id)

        assert result["is_read"] is True
        assert list_notifications(db_session, host.id, unread_only=True) == []
        assert len(list_notifications(db_session, host.id)) == 1

    def test_mark_read_of_someone_else_forbidden(self, db_session, host, make_user, make_meeting):
        meeting = make_meeting()
        alice = make_user("alice")
        request_join(db_session, meeting.id, alice.id)
        note_id = list_notifications(db_session, host.id)[0]["id"]

        with pytest.raises(ServiceError) as exc:
            mark_notification_read(db_session, note_id, alice.id)

        assert exc.value.kind == ErrorKind.FORBIDDEN

    def test_mark_read_missing(self, db_session, host):
        with pytest.raises(ServiceError) as exc:
            mark_notification_read(db_session, 99999, host.id)
        assert exc.value.kind == ErrorKind.NOT_FOUND
