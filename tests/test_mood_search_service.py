"""Tests for the mood search use case."""

from collections.abc import Callable

import pytest
from fakes import SHIBUYA, FakeMoodConverter, fast_retry, hit

from mood_dining.application.services import MoodSearchService
from mood_dining.domain.errors import (
    InvalidRequest,
    PermanentUpstreamError,
    TransientUpstreamError,
)
from mood_dining.domain.models import (
    MoodTags,
    RestaurantHit,
    SearchMode,
    SearchRequest,
    SearchStage,
)

RAMEN_MOOD = MoodTags(
    original_mood="疲れた",
    tags=("ラーメン", "うどん"),
    query_string="ラーメン OR うどん",
)


class RecordingOrchestrator:
    """Stands in for SearchModeOrchestrator and remembers the requests it ran."""

    def __init__(self, hits: list[RestaurantHit] | None = None) -> None:
        self.hits = hits or []
        self.requests: list[SearchRequest] = []

    async def run(
        self,
        request: SearchRequest,
        on_stage: Callable[[SearchStage], None] | None = None,
    ) -> list[RestaurantHit]:
        self.requests.append(request)
        if on_stage is not None:
            on_stage(SearchStage.DONE)
        return self.hits


def make_service(
    converter: FakeMoodConverter, orchestrator: RecordingOrchestrator | None = None
) -> MoodSearchService:
    return MoodSearchService(
        converter,
        orchestrator or RecordingOrchestrator(),  # type: ignore[arg-type]
        retry_policy=fast_retry(),
    )


class TestValidateMood:
    @pytest.mark.parametrize("mood", ["", "   ", "あ" * 101])
    def test_rejects_empty_and_too_long(self, mood: str) -> None:
        with pytest.raises(InvalidRequest):
            MoodSearchService.validate_mood(mood)

    def test_strips_whitespace(self) -> None:
        mood = MoodSearchService.validate_mood("  さっぱりしたい \n")

        assert mood == "さっぱりしたい"

    def test_accepts_exactly_one_hundred_characters(self) -> None:
        assert len(MoodSearchService.validate_mood("a" * 100)) == 100


class TestConvertMood:
    @pytest.mark.asyncio
    async def test_uses_converter_result(self) -> None:
        converter = FakeMoodConverter(RAMEN_MOOD)

        mood = await make_service(converter).convert_mood(" 疲れた ")

        assert mood == RAMEN_MOOD
        assert converter.calls == ["疲れた"]

    @pytest.mark.asyncio
    async def test_transient_failure_is_retried_then_falls_back_to_raw_text(self) -> None:
        """Given a converter that keeps timing out, when converting, then the raw mood is used."""
        converter = FakeMoodConverter(TransientUpstreamError("timeout"))

        mood = await make_service(converter).convert_mood("spicy")

        assert mood == MoodTags(original_mood="spicy", tags=(), query_string="spicy")
        assert len(converter.calls) == 3

    @pytest.mark.asyncio
    async def test_permanent_failure_falls_back_without_retry(self) -> None:
        converter = FakeMoodConverter(PermanentUpstreamError("API key invalid"))

        mood = await make_service(converter).convert_mood("spicy")

        assert mood.tags == ()
        assert len(converter.calls) == 1

    @pytest.mark.asyncio
    async def test_invalid_mood_does_not_reach_converter(self) -> None:
        converter = FakeMoodConverter(RAMEN_MOOD)

        with pytest.raises(InvalidRequest):
            await make_service(converter).convert_mood("")

        assert converter.calls == []


class TestSearch:
    @pytest.mark.asyncio
    async def test_builds_request_from_converted_mood(self) -> None:
        orchestrator = RecordingOrchestrator([hit("r1")])
        stages: list[SearchStage] = []

        result = await make_service(FakeMoodConverter(RAMEN_MOOD), orchestrator).search(
            "疲れた",
            SearchMode.STATION_RANGE,
            SHIBUYA,
            station_count=3,
            on_stage=stages.append,
        )

        assert result.mood == RAMEN_MOOD
        assert [h.id for h in result.hits] == ["r1"]
        assert orchestrator.requests == [
            SearchRequest(
                mode=SearchMode.STATION_RANGE,
                origin=SHIBUYA,
                query_tags=("ラーメン", "うどん"),
                radius_meters=None,
                station_count=3,
                query_text="ラーメン OR うどん",
            )
        ]
        assert stages == [SearchStage.DONE]

    @pytest.mark.asyncio
    async def test_search_proceeds_when_conversion_fails(self) -> None:
        orchestrator = RecordingOrchestrator()

        await make_service(FakeMoodConverter(ValueError("boom")), orchestrator).search(
            "なんでもいい", SearchMode.RADIUS, SHIBUYA, radius_meters=800
        )

        request = orchestrator.requests[0]
        assert request.query_tags == ()
        assert request.query_text == "なんでもいい"
        assert request.radius_meters == 800
