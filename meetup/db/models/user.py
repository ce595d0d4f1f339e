"""User profile model.

Identity and credentials live with the external identity provider; this
table only holds the public profile shown to hosts reviewing applicants.
"""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Integer, String, Text, DateTime

from meetup.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nickname = Column(String(50), nullable=False)
    bio = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))
