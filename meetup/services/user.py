"""User profile business logic."""
from typing import Dict, Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from meetup.core.constants import PLACEHOLDER_NICKNAME
from meetup.db.models import User
from meetup.services.utils import unit_of_work

# Dialects with INSERT ... ON CONFLICT DO NOTHING
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def ensure_profile(db: Session, user_id: int) -> None:
    """
    Make sure a profile row exists for an authenticated caller.

    Identity comes from the token, so a caller may act before ever setting a
    profile. A placeholder nickname is inserted in that case; an existing
    profile is left untouched. Runs inside the caller's transaction and never
    commits. Concurrent first actions of the same user do not collide.
    """
    insert = _UPSERT_INSERTS.get(db.get_bind().dialect.name)
    if insert is None:
        if db.query(User.id).filter(User.id == user_id).first() is None:
            db.add(User(id=user_id, nickname=PLACEHOLDER_NICKNAME.format(user_id=user_id)))
            db.flush()
        return

    db.execute(
        insert(User)
        .values(id=user_id, nickname=PLACEHOLDER_NICKNAME.format(user_id=user_id))
        .on_conflict_do_nothing(index_elements=[User.id])
    )


def upsert_profile(db: Session, user_id: int, nickname: str, bio: Optional[str] = None) -> Dict:
    """Create or update the public profile of an authenticated user."""
    with unit_of_work(db):
        user = db.query(User).filter(User.id == user_id).first()
        if user is None:
            user = User(id=user_id, nickname=nickname, bio=bio)
            db.add(user)
        else:
            user.nickname = nickname
            user.bio = bio

    return {"id": user_id, "nickname": nickname, "bio": bio or ""}


def get_profile(db: Session, user_id: int) -> Optional[Dict]:
    """Get a user's public profile, or None if they never acted or set one."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        return None
    return {"id": user.id, "nickname": user.nickname, "bio": user.bio or ""}
