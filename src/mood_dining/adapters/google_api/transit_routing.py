"""Google Directions implementation of the TransitRouting port."""

import logging
from typing import TYPE_CHECKING, Any

from mood_dining.adapters.google_api.constants import DIRECTIONS_URL, OK_STATUSES
from mood_dining.domain.errors import NoRouteFound, RoutingUnavailable
from mood_dining.domain.models import Coordinate, TransitLeg, TransitStop

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from mood_dining.adapters.google_api.http_client import GoogleMapsHttpClient

_NO_ROUTE_STATUSES = frozenset({"ZERO_RESULTS", "NOT_FOUND"})


def _parse_stop(stop: dict[str, Any]) -> TransitStop | None:
    location = stop.get("location", {})
    if "lat" not in location or "lng" not in location:
        return None
    return TransitStop(
        name=stop.get("name", ""),
        coordinate=Coordinate(latitude=float(location["lat"]), longitude=float(location["lng"])),
        id=stop.get("place_id", ""),
    )


def parse_transit_legs(data: dict[str, Any]) -> list[TransitLeg]:
    """Extract the transit legs of the first route in a Directions response."""
    routes = data.get("routes") or []
    if not routes:
        return []

    legs: list[TransitLeg] = []
    for leg in routes[0].get("legs", []):
        for step in leg.get("steps", []):
            if step.get("travel_mode") != "TRANSIT":
                continue
            details = step.get("transit_details") or {}
            departure = _parse_stop(details.get("departure_stop") or {})
            arrival = _parse_stop(details.get("arrival_stop") or {})
            if departure is None or arrival is None:
                continue
            line = details.get("line") or {}
            legs.append(
                TransitLeg(
                    departure_stop=departure,
                    arrival_stop=arrival,
                    line_name=line.get("short_name") or line.get("name", ""),
                )
            )
    return legs


class GoogleTransitRouting:
    """TransitRouting backed by the Directions API in transit mode."""

    def __init__(self, client: "GoogleMapsHttpClient", api_key: str = "") -> None:
        self._client = client
        self._api_key = api_key

    async def route(self, origin: Coordinate, destination: Coordinate) -> list[TransitLeg]:
        if not self._api_key:
            raise RoutingUnavailable("Google Directions API key is not configured")

        data = await self._client.get_json(
            DIRECTIONS_URL,
            {
                "origin": f"{origin.latitude},{origin.longitude}",
                "destination": f"{destination.latitude},{destination.longitude}",
                "mode": "transit",
            },
            accepted_statuses=OK_STATUSES | _NO_ROUTE_STATUSES,
            denied_error=RoutingUnavailable,
        )
        if data.get("status") in _NO_ROUTE_STATUSES:
            raise NoRouteFound(
                f"No transit route to {destination.latitude},{destination.longitude}"
            )
        return parse_transit_legs(data)
