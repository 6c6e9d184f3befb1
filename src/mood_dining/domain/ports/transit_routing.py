"""Transit routing port."""

from typing import Protocol

from mood_dining.domain.models.coordinate import Coordinate
from mood_dining.domain.models.transit_leg import TransitLeg


class TransitRouting(Protocol):
    """Port for planning transit routes.

    Raises ``RoutingUnavailable`` when the routing API is not configured or
    authorized, and ``NoRouteFound`` when no transit route exists.
    """

    async def route(self, origin: Coordinate, destination: Coordinate) -> list[TransitLeg]:
        """Return the transit legs of the best route from origin to destination."""
        ...
