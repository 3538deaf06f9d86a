"""
Cross-cutting request handling: rate limiting, request logging, and the
JSON error envelope shared by every failure response.
"""

import logging
import threading
import time
from collections import deque
from collections.abc import Callable
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

_ERROR_SLUGS = {
    400: "bad_request",
    404: "not_found",
    429: "rate_limit_exceeded",
    500: "server_error",
}


def error_slug(status_code: int) -> str:
    if status_code in _ERROR_SLUGS:
        return _ERROR_SLUGS[status_code]
    try:
        return HTTPStatus(status_code).phrase.lower().replace(" ", "_")
    except ValueError:
        return "error"


def error_response(
    status_code: int, message: str, error: str | None = None
) -> JSONResponse:
    """Build the JSON body returned for every failed request."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error or error_slug(status_code),
            "message": message,
            "code": status_code,
            "timestamp": int(time.time()),
        },
    )


class RateLimiter:
    """
    Per-client sliding window rate limiter.

    Keeps the timestamps of each client's requests within the last
    ``window_seconds``. State is guarded by a lock, and clients whose
    window has emptied are evicted by a periodic sweep.
    """

    def __init__(
        self,
        max_requests: int = 100,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._requests: dict[str, deque[float]] = {}
        self._last_sweep = clock()

    def _prune(self, timestamps: deque[float], now: float) -> None:
        while timestamps and now - timestamps[0] >= self.window_seconds:
            timestamps.popleft()

    def hit(self, client: str) -> bool:
        """
        Record a request from ``client`` if it is within its allowance.

        Returns:
            True if the request may proceed, False if it is rate limited.
            Rejected requests are not recorded.
        """
        with self._lock:
            now = self._clock()
            if now - self._last_sweep >= self.window_seconds:
                self._sweep_locked(now)

            timestamps = self._requests.setdefault(client, deque())
            self._prune(timestamps, now)
            if len(timestamps) >= self.max_requests:
                return False
            timestamps.append(now)
            return True

    def _sweep_locked(self, now: float) -> int:
        idle = []
        for client, timestamps in self._requests.items():
            self._prune(timestamps, now)
            if not timestamps:
                idle.append(client)
        for client in idle:
            del self._requests[client]
        self._last_sweep = now
        if idle:
            logger.debug("Evicted %d idle rate limit entries", len(idle))
        return len(idle)

    def sweep(self) -> int:
        """Drop clients with no requests in the current window; returns how many."""
        with self._lock:
            return self._sweep_locked(self._clock())

    def tracked_clients(self) -> int:
        with self._lock:
            return len(self._requests)

    def reset(self) -> None:
        with self._lock:
            self._requests.clear()
            self._last_sweep = self._clock()


def client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rejects requests with 429 once a client exceeds its allowance."""

    def __init__(self, app, limiter: RateLimiter):
        super().__init__(app)
        self.limiter = limiter

    async def dispatch(self, request: Request, call_next):
        ip = client_ip(request)
        if not self.limiter.hit(ip):
            logger.warning("Rate limit exceeded for %s", ip)
            return error_response(
                429,
                "Too many requests, please try again later",
            )
        return await call_next(request)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, client, status and duration of every request."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "[%s] %s %s - %d (%.2fms)",
            request.method,
            request.url.path,
            client_ip(request),
            response.status_code,
            duration_ms,
        )
        return response


def configure_middleware(
    app: FastAPI, limiter: RateLimiter, cors_origins: list[str]
) -> None:
    """
    Install the middleware stack.

    Starlette runs the last added middleware first, so the resulting order
    is CORS, then request logging, then rate limiting.
    """
    app.add_middleware(RateLimitMiddleware, limiter=limiter)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )


# =============================================================================
# Exception Handlers
# =============================================================================


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies, missing fields and bad enum values are a 400."""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'] if part != 'body')}: {err['msg']}"
        for err in exc.errors()
    )
    return error_response(400, f"Invalid request body: {problems}")


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, "Internal Server Error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
