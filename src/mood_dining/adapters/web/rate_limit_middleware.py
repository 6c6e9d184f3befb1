"""Per-client rate limiting of the search API using throttled-py."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from throttled import RateLimiterType, Throttled, rate_limiter, store

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER_SECONDS = 60.0

# Liveness probes must never be throttled
EXEMPT_PATHS = frozenset({"/api/health"})


def extract_client_ip(request: Request) -> str:
    """Identify the caller by the first ``X-Forwarded-For`` hop or the peer address."""
    hops = [hop.strip() for hop in request.headers.get("X-Forwarded-For", "").split(",")]
    if hops and hops[0]:
        return hops[0]

    if request.client and request.client.host:
        return request.client.host

    logger.warning("Could not determine client IP, using 'unknown'")
    return "unknown"


def retry_after_of(result: Any) -> float:
    """Seconds until the client may retry, read from a throttled-py result."""
    for holder in (getattr(result, "state", None), result):
        value = getattr(holder, "retry_after", None)
        if value is not None:
            return float(value)
    return DEFAULT_RETRY_AFTER_SECONDS


def rate_limited_response(retry_after: float) -> JSONResponse:
    return JSONResponse(
        {
            "status": "error",
            "error": "Too many searches. Please wait a moment and try again.",
            "code": "RATE_LIMITED",
            "retryable": True,
        },
        status_code=429,
        headers={"Retry-After": str(max(1, int(retry_after)))},
    )


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Token bucket per client IP over every API route except the health check.

    Each search can fan out into a dozen Google requests, so the bucket
    protects the API quota as much as the server.
    """

    def __init__(
        self,
        app: Callable,
        requests_per_minute: int = 100,
        exempt_paths: frozenset[str] = EXEMPT_PATHS,
    ) -> None:
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.exempt_paths = exempt_paths
        self.quota = rate_limiter.per_min(requests_per_minute, burst=requests_per_minute)
        self.bucket_store = store.MemoryStore()
        logger.info(f"API rate limit: {requests_per_minute} requests per minute per client")

    def _throttle_for(self, client_ip: str) -> Throttled:
        # Buckets live in the shared store, keyed by client
        return Throttled(
            key=f"mood-dining:{client_ip}",
            using=RateLimiterType.TOKEN_BUCKET.value,
            quota=self.quota,
            store=self.bucket_store,
        )

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        client_ip = extract_client_ip(request)
        result = self._throttle_for(client_ip).limit()
        if result.limited:
            retry_after = retry_after_of(result)
            logger.warning(
                f"Rate limit exceeded for {client_ip} on {request.url.path}, "
                f"retry after {retry_after:.0f}s"
            )
            return rate_limited_response(retry_after)

        response: Response = await call_next(request)
        return response
