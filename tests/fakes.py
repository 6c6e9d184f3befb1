"""In-memory collaborators implementing the domain ports for tests."""

import asyncio
from collections.abc import Callable

from mood_dining.application.retry import RetryPolicy
from mood_dining.domain.models import (
    Coordinate,
    MoodTags,
    PlaceResult,
    RestaurantHit,
    Station,
    TransitLeg,
    TransitStop,
)

SHIBUYA = Coordinate(latitude=35.658, longitude=139.7016)


async def no_sleep(_delay: float) -> None:
    """Sleep replacement so retries do not slow tests down."""


def fast_retry(max_attempts: int = 3) -> RetryPolicy:
    return RetryPolicy(max_attempts=max_attempts, base_delay_seconds=0.0, sleep=no_sleep)


def station(
    station_id: str,
    name: str | None = None,
    lat_offset: float = 0.0,
    lng_offset: float = 0.0,
    distance: int = 0,
) -> Station:
    return Station(
        id=station_id,
        name=name or station_id,
        coordinate=Coordinate(
            latitude=SHIBUYA.latitude + lat_offset, longitude=SHIBUYA.longitude + lng_offset
        ),
        distance_from_origin=distance,
    )


def place(place_id: str, name: str | None = None, coordinate: Coordinate = SHIBUYA) -> PlaceResult:
    return PlaceResult(id=place_id, name=name or place_id, coordinate=coordinate)


def hit(
    hit_id: str,
    name: str | None = None,
    rating: float = 4.0,
    distance: int | None = 100,
    station_name: str | None = None,
) -> RestaurantHit:
    return RestaurantHit(
        id=hit_id,
        name=name or hit_id,
        rating=rating,
        distance_from_user=distance,
        origin_station_name=station_name,
    )


def leg(departure: Station, arrival: Station) -> TransitLeg:
    return TransitLeg(
        departure_stop=TransitStop(
            name=departure.name, coordinate=departure.coordinate, id=departure.id
        ),
        arrival_stop=TransitStop(name=arrival.name, coordinate=arrival.coordinate, id=arrival.id),
    )


class FakePlaceSearch:
    """Returns scripted results; an Exception in the script is raised instead."""

    def __init__(self, *responses: list[PlaceResult] | Exception) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[Coordinate, int, str]] = []

    async def search(
        self, center: Coordinate, radius_meters: int, category: str
    ) -> list[PlaceResult]:
        self.calls.append((center, radius_meters, category))
        response = self.responses[min(len(self.calls), len(self.responses)) - 1]
        if isinstance(response, Exception):
            raise response
        return response


class FakeRouting:
    """Answers each probe via a function of the destination."""

    def __init__(
        self, answer: Callable[[Coordinate, Coordinate], list[TransitLeg]], delay: float = 0.0
    ) -> None:
        self.answer = answer
        self.delay = delay
        self.calls: list[tuple[Coordinate, Coordinate]] = []

    async def route(self, origin: Coordinate, destination: Coordinate) -> list[TransitLeg]:
        self.calls.append((origin, destination))
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.answer(origin, destination)


class FakeRestaurantSearch:
    """Returns hits keyed by search center; an Exception value is raised."""

    def __init__(
        self,
        by_center: dict[Coordinate, list[RestaurantHit] | Exception] | None = None,
        default: list[RestaurantHit] | Exception | None = None,
        delays: dict[Coordinate, float] | None = None,
    ) -> None:
        self.by_center = by_center or {}
        self.default = default if default is not None else []
        self.delays = delays or {}
        self.calls: list[tuple[Coordinate, int, str, Coordinate | None]] = []

    async def search_restaurants(
        self,
        center: Coordinate,
        radius_meters: int,
        query: str,
        user_location: Coordinate | None = None,
    ) -> list[RestaurantHit]:
        self.calls.append((center, radius_meters, query, user_location))
        if center in self.delays:
            await asyncio.sleep(self.delays[center])
        response = self.by_center.get(center, self.default)
        if isinstance(response, Exception):
            raise response
        return response


class FakeMoodConverter:
    def __init__(self, result: MoodTags | Exception) -> None:
        self.result = result
        self.calls: list[str] = []

    async def convert(self, mood_text: str) -> MoodTags:
        self.calls.append(mood_text)
        if isinstance(self.result, Exception):
            raise self.result
        return self.result
