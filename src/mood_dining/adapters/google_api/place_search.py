"""Google Places implementations of the place-search ports."""

import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from mood_dining.adapters.google_api.constants import (
    GOOGLE_MAPS_SEARCH_URL,
    MAX_PHOTOS_PER_PLACE,
    MAX_RESULTS_PER_SEARCH,
    PHOTO_MAX_WIDTH,
    PLACES_NEARBY_SEARCH_URL,
    PLACES_PHOTO_URL,
    PLACES_TEXT_SEARCH_URL,
    RESTAURANT_TYPE,
)
from mood_dining.domain.geo import haversine_distance
from mood_dining.domain.models import Coordinate, PlaceResult, RestaurantHit

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from mood_dining.adapters.google_api.http_client import GoogleMapsHttpClient


def _format_location(coordinate: Coordinate) -> str:
    return f"{coordinate.latitude},{coordinate.longitude}"


def parse_place(item: dict[str, Any]) -> PlaceResult | None:
    """Convert one Places API result into a PlaceResult.

    Results without an id or a location are dropped.
    """
    place_id = item.get("place_id")
    location = item.get("geometry", {}).get("location", {})
    if not place_id or "lat" not in location or "lng" not in location:
        logger.debug(f"Skipping place without id or location: {item.get('name')!r}")
        return None

    photos = item.get("photos") or []
    return PlaceResult(
        id=place_id,
        name=item.get("name", ""),
        coordinate=Coordinate(latitude=float(location["lat"]), longitude=float(location["lng"])),
        rating=item.get("rating"),
        price_tier=item.get("price_level"),
        categories=frozenset(item.get("types") or ()),
        address_text=item.get("vicinity") or item.get("formatted_address") or "",
        photo_refs=tuple(
            photo["photo_reference"]
            for photo in photos[:MAX_PHOTOS_PER_PLACE]
            if photo.get("photo_reference")
        ),
    )


def build_maps_link(name: str, place_id: str) -> str:
    """Build a Google Maps search link for a place."""
    query = urlencode({"api": 1, "query": name, "query_place_id": place_id})
    return f"{GOOGLE_MAPS_SEARCH_URL}?{query}"


class GooglePlaceSearch:
    """NearbyPlaceSearch backed by the Places Nearby Search endpoint."""

    def __init__(self, client: "GoogleMapsHttpClient") -> None:
        self._client = client

    async def search(
        self, center: Coordinate, radius_meters: int, category: str
    ) -> list[PlaceResult]:
        data = await self._client.get_json(
            PLACES_NEARBY_SEARCH_URL,
            {
                "location": _format_location(center),
                "radius": radius_meters,
                "type": category,
            },
        )
        places = [parse_place(item) for item in data.get("results", [])]
        return [place for place in places if place is not None]


class GoogleRestaurantSearch:
    """RestaurantSearch backed by the Places Text Search endpoint.

    Hits carry up to three photo URLs, a Google Maps link and the distance
    from ``user_location`` (or from the search center when no user location
    is given). Results come back sorted by that distance.
    """

    def __init__(self, client: "GoogleMapsHttpClient", api_key: str) -> None:
        self._client = client
        self._api_key = api_key

    def photo_url(self, photo_reference: str) -> str:
        query = urlencode(
            {"maxwidth": PHOTO_MAX_WIDTH, "photoreference": photo_reference, "key": self._api_key}
        )
        return f"{PLACES_PHOTO_URL}?{query}"

    def to_hit(self, place: PlaceResult, user_location: Coordinate) -> RestaurantHit:
        return RestaurantHit(
            id=place.id,
            name=place.name,
            rating=place.rating if place.rating is not None else 0.0,
            price_tier=place.price_tier if place.price_tier is not None else 0,
            categories=place.categories,
            address_text=place.address_text,
            photo_refs=tuple(self.photo_url(ref) for ref in place.photo_refs),
            distance_from_user=haversine_distance(user_location, place.coordinate),
            external_map_link=build_maps_link(place.name, place.id),
        )

    async def search_restaurants(
        self,
        center: Coordinate,
        radius_meters: int,
        query: str,
        user_location: Coordinate | None = None,
    ) -> list[RestaurantHit]:
        text_query = f"{query} {RESTAURANT_TYPE}".strip()
        data = await self._client.get_json(
            PLACES_TEXT_SEARCH_URL,
            {
                "query": text_query,
                "location": _format_location(center),
                "radius": radius_meters,
                "type": RESTAURANT_TYPE,
            },
        )

        reference = user_location or center
        hits = []
        for item in data.get("results", [])[:MAX_RESULTS_PER_SEARCH]:
            place = parse_place(item)
            if place is not None:
                hits.append(self.to_hit(place, reference))

        hits.sort(key=lambda hit: hit.distance_from_user or 0)
        logger.debug(f"Text search '{text_query}' returned {len(hits)} restaurants")
        return hits
