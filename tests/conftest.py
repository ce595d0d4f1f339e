"""Shared test fixtures and configuration."""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from meetup.main import app
from meetup.db.base import Base
from meetup.db.models import Meeting, Participation, ParticipationStatus, User
from meetup.api.deps import get_db
from meetup.core.security import create_user_token


# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(autouse=True)
def disable_rate_limiting_for_tests(request):
    """Disable rate limiting for all tests except rate limiting tests."""
    from meetup.core.rate_limit import limiter

    if "rate_limit" in request.keywords:
        limiter.reset()
        yield
        limiter.reset()
    else:
        limiter.enabled = False
        try:
            yield
        finally:
            limiter.enabled = True


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh database for each test."""
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Enforce foreign keys the way PostgreSQL does
    @event.listens_for(engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a new database session for a test."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with a test database."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    """Factory creating user profiles."""
    def _make_user(nickname="user", bio=None):
        user = User(nickname=nickname, bio=bio)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make_user


@pytest.fixture
def host(make_user):
    return make_user("host", "I organise things")


@pytest.fixture
def make_meeting(db_session, host):
    """Factory inserting meetings directly, bypassing service validation."""
    def _make_meeting(
        max_participants=5,
        current_participants=1,
        meeting_date=None,
        deleted=False,
        host_id=None,
    ):
        if meeting_date is None:
            meeting_date = datetime.now(timezone.utc) + timedelta(days=7)
        meeting = Meeting(
            host_id=host_id if host_id is not None else host.id,
            title="Board games night",
            description="Bring snacks",
            max_participants=max_participants,
            current_participants=current_participants,
            meeting_date=meeting_date,
            deleted=deleted,
        )
        db_session.add(meeting)
        db_session.commit()
        db_session.refresh(meeting)
        return meeting
    return _make_meeting


@pytest.fixture
def make_participation(db_session):
    """Factory inserting ledger rows directly."""
    def _make_participation(meeting, user, status=ParticipationStatus.PENDING):
        participation = Participation(meeting_id=meeting.id, user_id=user.id, status=status)
        db_session.add(participation)
        db_session.commit()
        db_session.refresh(participation)
        return participation
    return _make_participation


@pytest.fixture
def auth_headers():
    """Build bearer headers for a user."""
    def _auth_headers(user):
        user_id = user if isinstance(user, int) else user.id
        return {"Authorization": f"Bearer {create_user_token(user_id)}"}
    return _auth_headers
