"""Request admission control."""

from sealbin.security.ratelimit import (
    FixedWindowRateLimiter,
    InMemoryWindowBackend,
    RateLimitWindow,
    WindowBackend,
    client_identifier,
)

__all__ = [
    "FixedWindowRateLimiter",
    "InMemoryWindowBackend",
    "RateLimitWindow",
    "WindowBackend",
    "client_identifier",
]
