"""Rate limiting configuration."""
import os
from slowapi import Limiter
from slowapi.util import get_remote_address


def get_client_ip(request):
    """Get client IP for rate limiting, considering proxies."""
    # Check X-Forwarded-For header (from reverse proxies)
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # X-Forwarded-For can contain multiple IPs, take the first one
        return forwarded.split(",")[0].strip()

    # Fall back to direct connection IP
    return get_remote_address(request)


# Create rate limiter instance
# Uses Redis if REDIS_URL is set, falls back to memory for local dev
limiter = Limiter(
    key_func=get_client_ip,
    default_limits=["100/minute"],  # Global default
    storage_uri=os.getenv("REDIS_URL", "memory://"),
    strategy="fixed-window"
)

# Rate limit definitions for different endpoint categories
RATE_LIMITS = {
    # Participation writes, per client
    "join_request": "30/minute",  # Counted whatever the outcome, duplicates included
    "decision": "60/minute",  # One call may carry a whole batch of decisions
    "withdraw": "30/minute",

    # Meeting and profile writes
    "meeting_write": "20/minute",

    # Listings, detail pages and notification reads
    "read": "200/minute",
}
