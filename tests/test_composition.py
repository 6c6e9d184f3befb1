"""Tests for collaborator and service wiring."""

import pytest
from fakes import SHIBUYA

from mood_dining.adapters.config import AppConfig
from mood_dining.adapters.demo import DemoPlaceSearch, DemoRestaurantSearch, DemoTransitRouting
from mood_dining.adapters.gemini_api import GeminiMoodConverter, KeywordMoodConverter
from mood_dining.adapters.google_api import (
    GooglePlaceSearch,
    GoogleRestaurantSearch,
    GoogleTransitRouting,
)
from mood_dining.composition import Services, build_collaborators, build_services
from mood_dining.domain.models import SearchMode, SearchRequest, SearchStage


def config(**values: object) -> AppConfig:
    defaults: dict[str, object] = {
        "google_places_api_key": None,
        "google_directions_api_key": None,
        "gemini_api_key": None,
        "use_demo_data": False,
    }
    return AppConfig(_env_file=None, **{**defaults, **values})  # type: ignore[arg-type]


class TestBuildCollaborators:
    def test_missing_places_key_uses_demo_collaborators(self) -> None:
        collaborators = build_collaborators(config(), session=None)  # type: ignore[arg-type]

        assert isinstance(collaborators.place_search, DemoPlaceSearch)
        assert isinstance(collaborators.routing, DemoTransitRouting)
        assert isinstance(collaborators.restaurant_search, DemoRestaurantSearch)
        assert isinstance(collaborators.mood_converter, KeywordMoodConverter)

    def test_demo_flag_wins_over_keys(self) -> None:
        collaborators = build_collaborators(
            config(google_places_api_key="k", use_demo_data=True),
            session=None,  # type: ignore[arg-type]
        )

        assert isinstance(collaborators.place_search, DemoPlaceSearch)

    def test_places_key_only(self) -> None:
        collaborators = build_collaborators(
            config(google_places_api_key="k"), session=None  # type: ignore[arg-type]
        )

        assert isinstance(collaborators.place_search, GooglePlaceSearch)
        assert isinstance(collaborators.restaurant_search, GoogleRestaurantSearch)
        assert collaborators.routing is None
        assert isinstance(collaborators.mood_converter, KeywordMoodConverter)

    def test_all_keys(self) -> None:
        collaborators = build_collaborators(
            config(
                google_places_api_key="k",
                google_directions_api_key="d",
                gemini_api_key="g",
            ),
            session=None,  # type: ignore[arg-type]
        )

        assert isinstance(collaborators.routing, GoogleTransitRouting)
        assert isinstance(collaborators.mood_converter, GeminiMoodConverter)


class TestDemoPipeline:
    @pytest.fixture
    def services(self) -> Services:
        demo_config = config(use_demo_data=True)
        collaborators = build_collaborators(demo_config, session=None)  # type: ignore[arg-type]
        return build_services(demo_config, collaborators)

    @pytest.mark.asyncio
    async def test_station_range_search(self, services: Services) -> None:
        stages: list[SearchStage] = []
        request = SearchRequest(
            mode=SearchMode.STATION_RANGE,
            origin=SHIBUYA,
            query_tags=("ラーメン", "うどん"),
            station_count=2,
        )

        hits = await services.orchestrator.run(request, on_stage=stages.append)

        assert hits
        assert len(hits) <= 20
        assert all(hit.origin_station_name for hit in hits)
        assert "渋谷駅" in {hit.origin_station_name for hit in hits}
        assert stages == [
            SearchStage.LOCATING,
            SearchStage.EXPANDING,
            SearchStage.FANNING_OUT,
            SearchStage.AGGREGATING,
            SearchStage.DONE,
        ]

    @pytest.mark.asyncio
    async def test_mood_search_in_radius_mode(self, services: Services) -> None:
        result = await services.mood_search.search(
            "疲れたので温かいものが食べたい",
            SearchMode.RADIUS,
            SHIBUYA,
            radius_meters=1000,
        )

        assert result.mood.tags[0] == "ラーメン"
        assert result.hits
        assert all(hit.origin_station_name is None for hit in result.hits)

    @pytest.mark.asyncio
    async def test_stations_in_range(self, services: Services) -> None:
        start = await services.locator.locate_nearest(SHIBUYA)

        stations = await services.expander.expand(start, 2)

        assert stations[0] == start
        assert len(stations) == 3
        assert len({station.identity for station in stations}) == 3
