"""HTTP middleware."""
from meetup.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
