"""
Fixed-window rate limiting per client IP.

Two limiters share one middleware:
- global: every request (default 100 per 15 minutes)
- login:  POST to the login route (default 5 per 15 minutes)

A request over either limit is answered with 429 and the usual error
envelope. Counters live in process memory, so each worker limits on its own.
"""
import logging
import math
import time
from typing import Callable, Dict, Tuple

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from backoffice.core.errors import error_body

logger = logging.getLogger(__name__)

GLOBAL_LIMIT_MESSAGE = "Too many requests from this IP, please try again after 15 minutes."
LOGIN_LIMIT_MESSAGE = "Too many login attempts, please try again later."


class FixedWindowCounter:
    """
    Counts hits per key inside consecutive windows of `window_sec` seconds.

    The window for a key starts at its first hit; once it elapses the count
    resets.
    """

    def __init__(self, limit: int, window_sec: float, clock: Callable[[], float] = time.monotonic):
        self.limit = limit
        self.window_sec = window_sec
        self._clock = clock
        # {key: (window_start, hits)}
        self._windows: Dict[str, Tuple[float, int]] = {}

    def hit(self, key: str) -> Tuple[bool, int, float]:
        """
        Record one hit for `key`.

        Returns:
            (allowed, remaining, seconds until the window resets)
        """
        now = self._clock()
        start, hits = self._windows.get(key, (now, 0))
        if now - start >= self.window_sec:
            start, hits = now, 0
        hits += 1
        self._windows[key] = (start, hits)
        self._prune(now)

        reset_in = max(0.0, self.window_sec - (now - start))
        return hits <= self.limit, max(0, self.limit - hits), reset_in

    def _prune(self, now: float) -> None:
        expired = [k for k, (start, _) in self._windows.items() if now - start >= self.window_sec]
        for k in expired:
            del self._windows[k]


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Example:
        app.add_middleware(
            RateLimitMiddleware,
            window_sec=900,
            global_limit=100,
            login_limit=5,
            login_path="/api/v1/auth/login",
        )

    Clients are keyed by peer address. With trust_proxy=True the first
    X-Forwarded-For entry is used instead.
    """

    def __init__(
        self,
        app,
        enabled: bool = True,
        window_sec: int = 900,
        global_limit: int = 100,
        login_limit: int = 5,
        login_path: str = "/api/v1/auth/login",
        trust_proxy: bool = False,
    ):
        super().__init__(app)
        self.enabled = enabled
        self.login_path = login_path
        self.trust_proxy = trust_proxy
        self.global_counter = FixedWindowCounter(global_limit, window_sec)
        self.login_counter = FixedWindowCounter(login_limit, window_sec)

        logger.info(
            "Rate limiting %s (window=%ss global=%s login=%s)",
            "enabled" if enabled else "disabled", window_sec, global_limit, login_limit,
        )

    def _get_client_ip(self, request: Request) -> str:
        # X-Forwarded-For is client controlled; only honour it behind a known proxy
        forwarded = request.headers.get("X-Forwarded-For") if self.trust_proxy else None
        if forwarded:
            return forwarded.split(",")[0].strip()
        if request.client:
            return request.client.host
        return "unknown"

    def _too_many(self, message: str, counter: FixedWindowCounter, reset_in: float) -> JSONResponse:
        retry_after = str(max(1, math.ceil(reset_in)))
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content=error_body(message),
            headers={
                "Retry-After": retry_after,
                "RateLimit-Limit": str(counter.limit),
                "RateLimit-Remaining": "0",
                "RateLimit-Reset": retry_after,
            },
        )

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if not self.enabled:
            return await call_next(request)

        client_ip = self._get_client_ip(request)
        path = request.url.path

        allowed, remaining, reset_in = self.global_counter.hit(client_ip)
        if not allowed:
            logger.warning("Global rate limit exceeded for %s on %s", client_ip, path)
            return self._too_many(GLOBAL_LIMIT_MESSAGE, self.global_counter, reset_in)

        if request.method == "POST" and path.rstrip("/") == self.login_path:
            login_allowed, _, login_reset_in = self.login_counter.hit(client_ip)
            if not login_allowed:
                logger.warning("Login rate limit exceeded for %s", client_ip)
                return self._too_many(LOGIN_LIMIT_MESSAGE, self.login_counter, login_reset_in)

        response = await call_next(request)
        response.headers["RateLimit-Limit"] = str(self.global_counter.limit)
        response.headers["RateLimit-Remaining"] = str(remaining)
        response.headers["RateLimit-Reset"] = str(math.ceil(reset_in))
        return response
