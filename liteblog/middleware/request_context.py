"""Request context middleware: request ids, timing, access log and rate limiting.

Everything happens in one pass of a single middleware. The rate limiter is
the pure function ``check_rate_limit`` operating on a caller-owned bucket
dict, so it can be tested without HTTP.
"""

import logging
import threading
import time
import uuid
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from ..core.config import settings
from ..core.logging_config import request_id_var

logger = logging.getLogger(__name__)

# {client_key: (tokens_left, last_seen)}
_rate_buckets: dict[str, tuple[float, float]] = {}
_rate_lock = threading.Lock()
_calls_since_sweep = 0

SWEEP_INTERVAL = 100
STALE_AFTER_SECONDS = 120.0

# Probes and API docs are never throttled.
_EXEMPT_PATHS = frozenset({"/", "/ping", "/health", "/docs", "/redoc", "/openapi.json"})


def _sweep(bucket: dict[str, tuple[float, float]], now: float) -> None:
    cutoff = now - STALE_AFTER_SECONDS
    for key in [k for k, (_, seen) in bucket.items() if seen < cutoff]:
        del bucket[key]


def check_rate_limit(
    bucket: dict[str, tuple[float, float]],
    key: str,
    max_per_minute: int,
    now: Optional[float] = None,
) -> tuple[bool, float]:
    """Token bucket: *max_per_minute* burst, refilled continuously.

    Args:
        bucket: Per-key state, modified in place.
        key: Client identifier.
        max_per_minute: Sustained rate cap; ``<= 0`` disables limiting.
        now: Monotonic timestamp, injectable for tests.

    Returns:
        ``(allowed, retry_after_seconds)``; retry_after is 0.0 when allowed.
    """
    global _calls_since_sweep

    if max_per_minute <= 0:
        return True, 0.0
    if now is None:
        now = time.monotonic()

    _calls_since_sweep += 1
    if _calls_since_sweep >= SWEEP_INTERVAL:
        _calls_since_sweep = 0
        _sweep(bucket, now)

    per_second = max_per_minute / 60.0
    tokens, seen = bucket.get(key, (float(max_per_minute), now))
    tokens = min(float(max_per_minute), tokens + (now - seen) * per_second)

    if tokens < 1.0:
        bucket[key] = (tokens, now)
        return False, (1.0 - tokens) / per_second

    bucket[key] = (tokens - 1.0, now)
    return True, 0.0


def _client_key(request: Request) -> str:
    """First ``X-Forwarded-For`` hop when proxied, else the peer address."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def _too_many_requests(rid: str, retry_after: float) -> JSONResponse:
    wait = round(retry_after, 1)
    return JSONResponse(
        status_code=429,
        content={
            "error": "RATE_LIMITED",
            "message": "Too many requests",
            "details": {"retry_after": wait},
        },
        headers={"Retry-After": str(int(retry_after) + 1), "X-Request-ID": rid},
    )


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        rid = request.headers.get("x-request-id") or uuid.uuid4().hex[:16]
        token = request_id_var.set(rid)
        try:
            path = request.url.path
            if path not in _EXEMPT_PATHS:
                client = _client_key(request)
                with _rate_lock:
                    allowed, retry_after = check_rate_limit(
                        _rate_buckets, client, settings.rate_limit_per_minute
                    )
                if not allowed:
                    logger.warning(
                        "Rate limit exceeded",
                        extra={"client": client, "path": path, "retry_after": round(retry_after, 1)},
                    )
                    return _too_many_requests(rid, retry_after)

            started = time.monotonic()
            response = await call_next(request)
            elapsed_ms = round((time.monotonic() - started) * 1000, 1)

            response.headers["X-Request-ID"] = rid
            response.headers["X-Response-Time"] = f"{elapsed_ms}ms"
            logger.info(
                "%s %s %s", request.method, path, response.status_code,
                extra={
                    "method": request.method,
                    "path": path,
                    "status_code": response.status_code,
                    "duration_ms": elapsed_ms,
                },
            )
            return response
        finally:
            request_id_var.reset(token)
