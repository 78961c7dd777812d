"""
IP-based fixed-window rate limiting for the /api/ routes.
Counters live in Redis when REDIS_URL is configured, otherwise in process.
"""
import logging
import math
import threading
import time
from typing import Callable, Dict, Optional, Sequence, Tuple

import redis
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette import status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from config import Settings
from responses import error_body

logger = logging.getLogger(__name__)

AUTH_PATH_PREFIXES = ("/api/v1/auth",)
EXEMPT_PATHS = ("/health",)

TOO_MANY_REQUESTS = "Too many requests from this IP, please try again later."
TOO_MANY_AUTH_REQUESTS = "Too many authentication attempts, please try again later."


def get_client_ip(request) -> str:
    """Extract client IP address from request"""
    # Check for forwarded IP (behind proxy/load balancer)
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        # Take the first IP in the chain
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    # Fallback to direct client IP
    if request.client:
        return request.client.host

    return "unknown"


class MemoryRateLimitStore:
    """Per-process counters, used when no Redis is configured."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._lock = threading.Lock()
        self._windows: Dict[str, Tuple[float, int]] = {}
        self._last_prune = clock()

    @property
    def size(self) -> int:
        """Number of windows currently tracked."""
        with self._lock:
            return len(self._windows)

    def _prune(self, now: float, window_seconds: int) -> None:
        # At most one sweep per window; caller holds the lock
        if now - self._last_prune < window_seconds:
            return
        expired = [key for key, (started, _) in self._windows.items() if now - started >= window_seconds]
        for key in expired:
            del self._windows[key]
        self._last_prune = now

    def hit(self, key: str, window_seconds: int) -> int:
        now = self._clock()
        with self._lock:
            self._prune(now, window_seconds)
            started, count = self._windows.get(key, (now, 0))
            if now - started >= window_seconds:
                started, count = now, 0
            count += 1
            self._windows[key] = (started, count)
            return count


class RedisRateLimitStore:
    def __init__(self, client: redis.Redis):
        self._client = client

    def hit(self, key: str, window_seconds: int) -> int:
        count = self._client.incr(key)
        if count == 1:
            # First hit opens the window
            self._client.expire(key, window_seconds)
        return int(count)


def build_rate_limit_store(settings: Settings):
    if not settings.REDIS_URL:
        logger.info("REDIS_URL not set; rate limit counters are kept in process memory")
        return MemoryRateLimitStore()

    client = redis.Redis.from_url(
        settings.REDIS_URL,
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
        retry_on_timeout=True,
        health_check_interval=30,
    )
    logger.info("Rate limit counters stored in Redis")
    return RedisRateLimitStore(client)


class FixedWindowRateLimiter:
    def __init__(
        self,
        store,
        window_seconds: int,
        max_requests: int,
        auth_max_requests: int,
        auth_prefixes: Sequence[str] = AUTH_PATH_PREFIXES,
    ):
        self.store = store
        self.window_seconds = window_seconds
        self.max_requests = max_requests
        self.auth_max_requests = auth_max_requests
        self.auth_prefixes = tuple(auth_prefixes)

    @property
    def retry_after(self) -> int:
        return int(math.ceil(self.window_seconds))

    def _bucket(self, path: str) -> Tuple[str, int]:
        if path.startswith(self.auth_prefixes):
            return "auth", self.auth_max_requests
        return "api", self.max_requests

    def check(self, ip: str, path: str) -> Tuple[bool, int, int, str]:
        """
        Count one request for this IP.
        Returns (is_allowed, limit, remaining, bucket).
        """
        bucket, limit = self._bucket(path)
        if not ip or ip == "unknown":
            return True, limit, limit, bucket

        key = f"rate_limit:{bucket}:{ip}"
        try:
            count = self.store.hit(key, self.window_seconds)
        except redis.RedisError as e:
            # Counter store unavailable: admit the request rather than block all traffic
            logger.error(f"Redis error checking IP rate limit: {e}")
            return True, limit, limit, bucket

        remaining = max(0, limit - count)
        return count <= limit, limit, remaining, bucket


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Applies the limiter to /api/ requests; /health is never limited."""

    def __init__(self, app, limiter: FixedWindowRateLimiter, path_prefix: str = "/api/"):
        super().__init__(app)
        self.limiter = limiter
        self.path_prefix = path_prefix

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if path in EXEMPT_PATHS or not path.startswith(self.path_prefix) or request.method == "OPTIONS":
            return await call_next(request)

        client_ip = get_client_ip(request)
        allowed, limit, remaining, bucket = self.limiter.check(client_ip, path)

        headers = {
            "X-RateLimit-Limit": str(limit),
            "X-RateLimit-Remaining": str(remaining),
        }

        if not allowed:
            logger.warning(f"Rate limit exceeded | bucket: {bucket} | IP: {client_ip} | {request.method} {path}")
            message = TOO_MANY_AUTH_REQUESTS if bucket == "auth" else TOO_MANY_REQUESTS
            headers["Retry-After"] = str(self.limiter.retry_after)
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content=error_body(message, retry_after=self.limiter.retry_after),
                headers=headers,
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response


def build_rate_limiter(settings: Settings, store: Optional[object] = None) -> FixedWindowRateLimiter:
    return FixedWindowRateLimiter(
        store=store if store is not None else build_rate_limit_store(settings),
        window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
        max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
        auth_max_requests=settings.RATE_LIMIT_AUTH_MAX_REQUESTS,
    )
