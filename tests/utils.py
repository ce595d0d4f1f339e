"""Test helpers."""
from meetup.db.models import Meeting, Participation, ParticipationStatus


def assert_occupancy_consistent(db, meeting_id):
    """Occupancy equals the host seat plus accepted non-host rows, within bounds."""
    db.expire_all()
    meeting = db.query(Meeting).filter(Meeting.id == meeting_id).one()
    accepted = db.query(Participation).filter(
        Participation.meeting_id == meeting_id,
        Participation.status == ParticipationStatus.ACCEPTED,
        Participation.user_id != meeting.host_id,
    ).count()
    host_rows = db.query(Participation).filter(
        Participation.meeting_id == meeting_id,
        Participation.user_id == meeting.host_id,
    ).count()

    assert host_rows == 0
    assert 0 <= meeting.current_participants <= meeting.max_participants
    assert meeting.current_participants == 1 + accepted
