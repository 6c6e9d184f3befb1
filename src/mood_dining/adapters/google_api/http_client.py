"""HTTP client for Google Maps Platform web service requests."""

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from mood_dining.adapters.api_request_logger import log_api_request
from mood_dining.adapters.google_api.constants import (
    DENIED_STATUSES,
    OK_STATUSES,
    TRANSIENT_STATUSES,
)
from mood_dining.domain.errors import (
    PermanentUpstreamError,
    TransientUpstreamError,
    UpstreamCallError,
)

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession

    from mood_dining.adapters.api_rate_limiter import ApiRateLimiter


def http_status_error(
    status: int,
    body: str,
    denied_error: type[PermanentUpstreamError] = PermanentUpstreamError,
) -> UpstreamCallError:
    """Map a non-200 HTTP status to a transient or permanent error."""
    message = f"Google API returned HTTP {status}: {body[:200]}"
    if status == 429 or status >= 500:
        return TransientUpstreamError(message, status_code=status)
    if status in (401, 403):
        return denied_error(message, status_code=status)
    return PermanentUpstreamError(message, status_code=status)


def api_status_error(
    data: dict[str, Any],
    accepted_statuses: frozenset[str] = OK_STATUSES,
    denied_error: type[PermanentUpstreamError] = PermanentUpstreamError,
) -> UpstreamCallError | None:
    """Map the ``status`` field of a Google response to an error, if any."""
    status = str(data.get("status", "UNKNOWN_ERROR"))
    if status in accepted_statuses:
        return None

    detail = data.get("error_message", "")
    message = f"Google API status {status}" + (f": {detail}" if detail else "")
    if status in TRANSIENT_STATUSES:
        return TransientUpstreamError(message)
    if status in DENIED_STATUSES:
        return denied_error(message)
    return PermanentUpstreamError(message)


class GoogleMapsHttpClient:
    """Performs authenticated GET requests against Google Maps web services."""

    def __init__(
        self,
        api_key: str,
        session: "ClientSession | None" = None,
        rate_limiter: "ApiRateLimiter | None" = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Google Maps Platform API key.
            session: aiohttp session used for all requests.
            rate_limiter: Optional limiter shared by all clients of the same API.
            timeout_seconds: Total timeout per request.
        """
        self._api_key = api_key
        self._session = session
        self._rate_limiter = rate_limiter
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def get_json(
        self,
        url: str,
        params: dict[str, str | int],
        accepted_statuses: frozenset[str] = OK_STATUSES,
        denied_error: type[PermanentUpstreamError] = PermanentUpstreamError,
    ) -> dict[str, Any]:
        """GET ``url`` and return the decoded body.

        Raises:
            TransientUpstreamError: Network error, timeout, rate limit or server error.
            PermanentUpstreamError: Rejected request or key (``denied_error`` for auth).
        """
        if self._session is None:
            raise PermanentUpstreamError("Google Maps client requires an aiohttp session")

        request_params = {**params, "key": self._api_key}
        log_api_request("GET", url, params=request_params)

        if self._rate_limiter is not None:
            await self._rate_limiter.acquire()

        try:
            async with self._session.get(
                url, params=request_params, timeout=self._timeout
            ) as response:
                if response.status != 200:
                    body = await response.text()
                    raise http_status_error(response.status, body, denied_error)
                try:
                    data = await response.json()
                except ValueError as e:
                    raise PermanentUpstreamError("Google API response body is not JSON") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Request to {url} failed: {e!r}")
            raise TransientUpstreamError(f"Google API request failed: {e!r}") from e

        if not isinstance(data, dict):
            raise PermanentUpstreamError(f"Unexpected Google API response: {type(data).__name__}")

        error = api_status_error(data, accepted_statuses, denied_error)
        if error is not None:
            raise error
        return data
