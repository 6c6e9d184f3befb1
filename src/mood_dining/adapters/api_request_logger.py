"""Debug logging of outgoing Google and Gemini requests.

Enabled with ``MDS_LOG_REQUESTS=true``. API keys travel as the ``key`` query
parameter, so they are masked before anything is written.
"""

import json
import logging
import os
from typing import Any
from urllib.parse import urlencode

logger = logging.getLogger(__name__)

LOG_REQUESTS_ENV = "MDS_LOG_REQUESTS"
SECRET_PARAMS = frozenset({"key", "api_key", "token"})
SECRET_HEADERS = frozenset({"authorization", "cookie", "x-api-key", "x-goog-api-key"})
MASK = "***REDACTED***"

# Gemini prompts are long; the tail adds nothing to a debug line
MAX_PAYLOAD_CHARS = 2000


def should_log_requests() -> bool:
    return os.getenv(LOG_REQUESTS_ENV, "").strip().lower() in ("1", "true", "yes")


def _mask(values: dict[str, Any], secrets: frozenset[str]) -> dict[str, Any]:
    return {name: MASK if name.lower() in secrets else value for name, value in values.items()}


def redacted_url(url: str, params: dict[str, Any] | None = None) -> str:
    """Return ``url`` with its query parameters sorted and secrets masked."""
    if not params:
        return url
    query = urlencode(sorted(_mask(params, SECRET_PARAMS).items()), safe=",*")
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"


def describe_payload(payload: Any) -> str:
    if isinstance(payload, (dict, list)):
        try:
            text = json.dumps(payload, ensure_ascii=False)
        except (TypeError, ValueError):
            text = str(payload)
    else:
        text = str(payload)

    if len(text) > MAX_PAYLOAD_CHARS:
        return f"{text[:MAX_PAYLOAD_CHARS]}... ({len(text)} chars)"
    return text


def log_api_request(
    method: str,
    url: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    payload: Any = None,
) -> None:
    """Log one outgoing request at INFO level if request logging is enabled."""
    if not should_log_requests():
        return

    lines = [f"{method} {redacted_url(url, params)}"]
    if headers:
        lines.append(f"Headers: {json.dumps(_mask(headers, SECRET_HEADERS), ensure_ascii=False)}")
    if payload is not None:
        lines.append(f"Payload: {describe_payload(payload)}")

    logger.info("Outgoing request: " + " | ".join(lines))
