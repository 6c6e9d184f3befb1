"""Error details domain model."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class ErrorDetails(BaseModel):
    """Details about a search error, suitable for an error response body."""

    model_config = ConfigDict(frozen=True)

    code: str
    reason: str
    retryable: bool = False
    context: dict[str, Any] = {}
