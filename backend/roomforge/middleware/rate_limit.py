"""
RoomForge Backend — Rate Limiting Middleware
=============================================

What:  Per-IP sliding window rate limiter.
How:   Keeps the timestamps of each client's recent requests in memory. A
       request is rejected with 429 when the client already made
       RATE_LIMIT_REQUESTS requests within the last RATE_LIMIT_WINDOW seconds.

Algorithm: Sliding Window Log
    1. Drop the client's timestamps older than now - window
    2. If the remaining count >= limit, reject; Retry-After is the time until
       the oldest remaining timestamp leaves the window
    3. Otherwise record now and pass the request on

    State is per process. Running several workers multiplies the effective
    limit by the worker count.
"""

import logging
import time
from collections import defaultdict, deque
from typing import Deque, Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from roomforge.config import settings
from roomforge.exceptions import RateLimitExceededError
from roomforge.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    In-memory sliding window rate limiter.

    Excluded paths: the banner, /health and the API docs.
    """

    EXCLUDED_PATHS = {"/", "/health", "/docs", "/openapi.json", "/redoc"}

    # Purge idle clients every this many requests
    CLEANUP_EVERY = 1000

    def __init__(
        self,
        app,
        max_requests: Optional[int] = None,
        window_seconds: Optional[int] = None,
        **kwargs,
    ):
        super().__init__(app, **kwargs)
        self.max_requests = max_requests or settings.rate_limit_requests
        self.window_seconds = window_seconds or settings.rate_limit_window
        self._requests: Dict[str, Deque[float]] = defaultdict(deque)
        self._seen = 0

    def check(self, client_ip: str, now: float) -> None:
        """
        Record a request from client_ip at time now.

        Raises:
            RateLimitExceededError: the client is over its limit
        """
        window_start = now - self.window_seconds
        timestamps = self._requests[client_ip]
        while timestamps and timestamps[0] <= window_start:
            timestamps.popleft()

        if len(timestamps) >= self.max_requests:
            retry_after = int(timestamps[0] + self.window_seconds - now) + 1
            raise RateLimitExceededError(
                retry_after=retry_after,
                context={"client_ip": client_ip, "limit": self.max_requests},
            )

        timestamps.append(now)

        self._seen += 1
        if self._seen % self.CLEANUP_EVERY == 0:
            self._cleanup_inactive_ips(window_start)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"

        try:
            self.check(client_ip, time.time())
        except RateLimitExceededError as exc:
            logger.warning(
                "Rate limit exceeded for IP %s: %d requests in %ds window",
                client_ip,
                self.max_requests,
                self.window_seconds,
            )
            body = ErrorResponse(error=exc.error_code, message=exc.message, details=exc.context)
            return JSONResponse(
                status_code=exc.status_code,
                content=body.model_dump(exclude_none=True),
                headers={"Retry-After": str(exc.retry_after)},
            )

        return await call_next(request)

    def _cleanup_inactive_ips(self, window_start: float) -> None:
        """Forget clients with no request inside the current window."""
        inactive_ips = [
            ip for ip, timestamps in self._requests.items()
            if not timestamps or timestamps[-1] <= window_start
        ]
        for ip in inactive_ips:
            del self._requests[ip]

        if inactive_ips:
            logger.debug("Cleaned up %d inactive IP entries", len(inactive_ips))
