"""Request models and JSON serializers of the HTTP API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from mood_dining.domain.geo import format_distance
from mood_dining.domain.models import (
    Coordinate,
    MoodTags,
    RestaurantHit,
    SearchMode,
    Station,
)
from mood_dining.domain.models.search_request import (
    DEFAULT_RADIUS_METERS,
    DEFAULT_STATION_COUNT,
)


class LocationBody(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)

    def to_coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.lat, longitude=self.lng)


class MoodBody(BaseModel):
    mood: str


class PlacesBody(BaseModel):
    """Body of ``POST /api/places``.

    Either ``tags`` or ``query`` (or both) describe what to look for. Range
    checks on ``radius`` and ``stationCount`` are left to the search pipeline
    so that every caller gets the same error.
    """

    model_config = ConfigDict(populate_by_name=True)

    mode: SearchMode = SearchMode.RADIUS
    location: LocationBody
    query: str = ""
    tags: list[str] = Field(default_factory=list)
    radius: int | None = None
    station_count: int | None = Field(default=None, alias="stationCount")

    def search_radius(self) -> int | None:
        if self.mode is SearchMode.RADIUS:
            return self.radius if self.radius is not None else DEFAULT_RADIUS_METERS
        return self.radius

    def search_station_count(self) -> int | None:
        if self.mode is SearchMode.STATION_RANGE:
            return self.station_count if self.station_count is not None else DEFAULT_STATION_COUNT
        return self.station_count


class StationsBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    location: LocationBody
    station_count: int = Field(default=DEFAULT_STATION_COUNT, alias="stationCount")


def coordinate_json(coordinate: Coordinate) -> dict[str, float]:
    return {"lat": coordinate.latitude, "lng": coordinate.longitude}


def station_json(station: Station) -> dict[str, Any]:
    return {
        "placeId": station.id,
        "name": station.name,
        "location": coordinate_json(station.coordinate),
        "distance": station.distance_from_origin,
    }


def restaurant_json(hit: RestaurantHit) -> dict[str, Any]:
    return {
        "placeId": hit.id,
        "name": hit.name,
        "rating": hit.rating,
        "priceLevel": hit.price_tier,
        "types": sorted(hit.categories),
        "vicinity": hit.address_text,
        "photos": list(hit.photo_refs),
        "distance": hit.distance_from_user,
        "distanceText": (
            format_distance(hit.distance_from_user) if hit.distance_from_user is not None else None
        ),
        "googleMapsUrl": hit.external_map_link,
        "nearestStation": hit.origin_station_name,
    }


def mood_json(mood: MoodTags) -> dict[str, Any]:
    return {
        "originalMood": mood.original_mood,
        "searchTags": list(mood.tags),
        "searchQuery": mood.query_string,
    }
