"""Fixed-window request rate limiting.

Each client identifier owns a window with a count and a reset time.  A
request opens a fresh window when none exists or the old one has elapsed;
otherwise it is admitted while the count is below the limit.

Elapsed windows are swept probabilistically (a small fixed chance per
call) instead of by a background task.  Window state lives in an injected
:class:`WindowBackend`; the in-memory backend is process-local, so
horizontally scaled deployments see independent limits per instance.
"""

from __future__ import annotations

import logging
import random
import threading
import time
from dataclasses import dataclass
from typing import Callable, Mapping, Protocol

logger = logging.getLogger(__name__)


@dataclass
class RateLimitWindow:
    count: int
    reset_at: float  # clock seconds


class WindowBackend(Protocol):
    def hit(self, identifier: str, limit: int, window: float, now: float) -> bool:
        """Atomically apply one admission check and return the decision."""
        ...

    def sweep(self, now: float) -> int:
        """Drop every elapsed window; return how many were removed."""
        ...


class InMemoryWindowBackend:
    """Dict of windows guarded by a single lock."""

    def __init__(self) -> None:
        self._windows: dict[str, RateLimitWindow] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._windows)

    def get(self, identifier: str) -> RateLimitWindow | None:
        return self._windows.get(identifier)

    def hit(self, identifier: str, limit: int, window: float, now: float) -> bool:
        with self._lock:
            current = self._windows.get(identifier)
            if current is None or now > current.reset_at:
                self._windows[identifier] = RateLimitWindow(count=1, reset_at=now + window)
                return True
            if current.count >= limit:
                return False
            current.count += 1
            return True

    def sweep(self, now: float) -> int:
        with self._lock:
            stale = [k for k, w in self._windows.items() if now > w.reset_at]
            for k in stale:
                del self._windows[k]
            return len(stale)


class FixedWindowRateLimiter:
    """Admission control over a :class:`WindowBackend`.

    Args:
        backend: Window storage; defaults to a fresh in-memory backend.
        cleanup_probability: Chance per call of sweeping elapsed windows.
        clock: Monotonic seconds source.
        rng: Returns a float in [0, 1); drives the sweep decision.
    """

    def __init__(
        self,
        backend: WindowBackend | None = None,
        cleanup_probability: float = 0.01,
        clock: Callable[[], float] = time.monotonic,
        rng: Callable[[], float] = random.random,
    ) -> None:
        self.backend: WindowBackend = backend if backend is not None else InMemoryWindowBackend()
        self.cleanup_probability = cleanup_probability
        self._clock = clock
        self._rng = rng

    def allow(self, identifier: str, limit: int = 10, window_ms: int = 60_000) -> bool:
        """Return True if the request identified by *identifier* is admitted."""
        now = self._clock()
        if self._rng() < self.cleanup_probability:
            removed = self.backend.sweep(now)
            if removed:
                logger.debug("Swept %d elapsed rate-limit windows", removed)

        allowed = self.backend.hit(identifier, limit, window_ms / 1000.0, now)
        if not allowed:
            logger.info("Rate limit exceeded for client=%s limit=%d", identifier, limit)
        return allowed


# ---------------------------------------------------------------------------
# Client identification
# ---------------------------------------------------------------------------

_IDENTIFIER_HEADERS = ("x-real-ip", "cf-connecting-ip")


def client_identifier(headers: Mapping[str, str]) -> str:
    """Derive a client key from proxy headers.

    Priority: first ``x-forwarded-for`` entry, then ``x-real-ip``, then
    ``cf-connecting-ip``, else ``"unknown"``.  *headers* must be a
    case-insensitive mapping (e.g. Starlette ``Headers``) or use lowercase
    keys.
    """
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    for name in _IDENTIFIER_HEADERS:
        value = headers.get(name)
        if value:
            return value.strip()
    return "unknown"
