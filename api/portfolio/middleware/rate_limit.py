"""Rate limiting for the unauthenticated auth endpoints using slowapi."""

from slowapi import Limiter
from slowapi.util import get_remote_address

# Keyed by client IP: register and login run before any identity exists
limiter = Limiter(key_func=get_remote_address)


def reset_limiter() -> None:
    """Clear all recorded hits. Used in tests to isolate rate limit state."""
    limiter.reset()
