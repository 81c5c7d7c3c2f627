"""Request-logging and rate-limiting middleware for FastAPI."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Iterable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from sealbin.config.settings import settings
from sealbin.errors import RateLimited
from sealbin.security.ratelimit import FixedWindowRateLimiter, client_identifier

logger = logging.getLogger("sealbin.api")

# ---------------------------------------------------------------------------
# Request logging
# ---------------------------------------------------------------------------


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Attach a unique request ID and log method/path/status/duration."""

    async def dispatch(self, request: Request, call_next):  # noqa: ANN001
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start = time.perf_counter()
        response: Response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000

        logger.info(
            "method=%s path=%s status_code=%s duration_ms=%.1f request_id=%s",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            request_id,
        )

        response.headers["X-Request-ID"] = request_id
        return response


# ---------------------------------------------------------------------------
# Rate limiting
# ---------------------------------------------------------------------------

_DEFAULT_LIMITED = (("POST", "/api/pastes"),)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Fixed-window admission control on selected method/path pairs.

    The limiter is injected so several app instances can share a backend
    deliberately.  Clients are keyed by :func:`client_identifier`.
    """

    def __init__(
        self,
        app: ASGIApp,
        limiter: Optional[FixedWindowRateLimiter] = None,
        limit: Optional[int] = None,
        window_ms: Optional[int] = None,
        limited: Iterable[tuple[str, str]] = _DEFAULT_LIMITED,
    ) -> None:
        super().__init__(app)
        self.limiter = limiter or FixedWindowRateLimiter(
            cleanup_probability=settings.RATE_LIMIT_CLEANUP_PROBABILITY,
        )
        self.limit = limit if limit is not None else settings.RATE_LIMIT_REQUESTS
        self.window_ms = window_ms if window_ms is not None else settings.RATE_LIMIT_WINDOW_MS
        self.limited = {(m.upper(), p.rstrip("/")) for m, p in limited}

    async def dispatch(self, request: Request, call_next):  # noqa: ANN001
        key = (request.method.upper(), request.url.path.rstrip("/"))
        if key not in self.limited:
            return await call_next(request)

        identifier = client_identifier(request.headers)
        if not self.limiter.allow(identifier, self.limit, self.window_ms):
            exc = RateLimited(identifier, self.limit, self.window_ms)
            retry_after = max(1, self.window_ms // 1000)
            return JSONResponse(
                {"detail": str(exc), "error": exc.code},
                status_code=429,
                headers={"Retry-After": str(retry_after)},
            )
        return await call_next(request)
