"""Error taxonomy for the search pipeline and its collaborators."""

from typing import Any

from mood_dining.domain.models.error_details import ErrorDetails


class SearchError(Exception):
    """Base class for errors surfaced to callers of the search pipeline."""

    code = "UNKNOWN_ERROR"
    retryable = False

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def to_details(self) -> ErrorDetails:
        """Build an error payload for responses."""
        return ErrorDetails(
            code=self.code,
            reason=self.message,
            retryable=self.retryable,
            context=self.context,
        )


class InvalidRequest(SearchError):
    """A precondition on the search request was violated."""

    code = "INVALID_REQUEST"


class NoStationFound(SearchError):
    """No transit station exists near the origin.

    Expected for rural origins; callers should suggest the radius mode.
    """

    code = "NO_STATION_FOUND"


class UpstreamUnavailable(SearchError):
    """Every attempt against a required collaborator failed."""

    code = "UPSTREAM_UNAVAILABLE"
    retryable = True


class PartialStationFailure(SearchError):
    """Some probes or per-station searches failed.

    Only used for logging inside a stage; it is never raised to callers.
    """

    code = "PARTIAL_STATION_FAILURE"


class UpstreamCallError(Exception):
    """A single call to an external collaborator failed."""

    transient = False

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransientUpstreamError(UpstreamCallError):
    """Network error, timeout, rate limit or server error. Worth retrying."""

    transient = True


class PermanentUpstreamError(UpstreamCallError):
    """Bad request or authorization failure. Retrying will not help."""


class RoutingUnavailable(PermanentUpstreamError):
    """The routing collaborator is not configured or not authorized."""


class NoRouteFound(PermanentUpstreamError):
    """The routing collaborator found no transit route between two points."""
