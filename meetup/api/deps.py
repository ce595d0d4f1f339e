"""Shared API dependencies."""
from meetup.db import get_db, get_db_context
from meetup.core.security import get_current_user_id

__all__ = ["get_db", "get_db_context", "get_current_user_id"]
