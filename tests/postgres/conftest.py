"""Fixtures running the service against a real PostgreSQL container."""
import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

from meetup.db.base import Base
from meetup.db.models import Meeting, User


@pytest.fixture(scope="session")  # start a real Postgres container once
def pg_container():
    """
    Spin up a throwaway Postgres container for the test session.
    """
    from testcontainers.postgres import PostgresContainer

    container = PostgresContainer("postgres:15-alpine")
    try:
        container.start()
    except Exception as e:
        pytest.skip(f"Docker is not available: {e}")
    try:
        yield container
    finally:
        container.stop()


@pytest.fixture(scope="session")
def pg_engine(pg_container):
    """
    Create all tables before tests and drop them when session ends.
    """
    engine = create_engine(pg_container.get_connection_url(), pool_size=20, max_overflow=0)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def pg_sessions(pg_engine):
    """Session factory; every table is emptied after the test."""
    factory = sessionmaker(autocommit=False, autoflush=False, bind=pg_engine)
    yield factory
    with pg_engine.begin() as conn:
        conn.execute(text("TRUNCATE notifications, participations, meetings, users RESTART IDENTITY CASCADE"))


@pytest.fixture
def seed(pg_sessions):
    """Insert a host, a meeting and a set of applicants; returns their ids."""
    from datetime import datetime, timedelta, timezone

    def _seed(max_participants, applicants):
        db = pg_sessions()
        try:
            host = User(nickname="host")
            users = [User(nickname=f"applicant{i}") for i in range(applicants)]
            db.add_all([host] + users)
            db.flush()
            meeting = Meeting(
                host_id=host.id,
                title="Concurrency night",
                description="",
                max_participants=max_participants,
                current_participants=1,
                meeting_date=datetime.now(timezone.utc) + timedelta(days=1),
            )
            db.add(meeting)
            db.commit()
            return meeting.id, host.id, [u.id for u in users]
        finally:
            db.close()
    return _seed
