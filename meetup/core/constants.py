"""Application constants.

This module contains magic strings and numbers used throughout the application.
Centralizing these values makes them easier to maintain and modify.
"""

# Meeting Capacity
# The host implicitly occupies one seat of every meeting they create
HOST_SEATS = 1
MIN_MAX_PARTICIPANTS = 1

# Pagination
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50

# JWT Token Configuration
# Token expiration time in minutes (8 hours)
ACCESS_TOKEN_EXPIRE_MINUTES = 480

# Unique constraint guarding one participation per (user, meeting)
PARTICIPATION_UNIQUE_CONSTRAINT = "uq_participation_user_meeting"

# Profile created for callers who act before setting their own
PLACEHOLDER_NICKNAME = "user-{user_id}"
