"""Database package."""
from meetup.db.session import engine, SessionLocal, get_db, get_db_context
from meetup.db.base import Base

__all__ = ["engine", "SessionLocal", "get_db", "get_db_context", "Base"]
