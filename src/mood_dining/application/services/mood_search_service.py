"""Use case: search restaurants from a free-text mood."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from mood_dining.application.retry import RetryPolicy
from mood_dining.domain.errors import InvalidRequest
from mood_dining.domain.models import (
    Coordinate,
    MoodTags,
    RestaurantHit,
    SearchMode,
    SearchRequest,
)

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from mood_dining.application.services.search_mode_orchestrator import (
        SearchModeOrchestrator,
        StageListener,
    )
    from mood_dining.domain.ports import MoodToTags

MAX_MOOD_LENGTH = 100


@dataclass(frozen=True)
class MoodSearchResult:
    """Outcome of a mood search: the interpreted mood and the ranked hits."""

    mood: MoodTags
    hits: list[RestaurantHit]


class MoodSearchService:
    """Converts a mood into tags and runs the matching restaurant search."""

    def __init__(
        self,
        mood_converter: "MoodToTags",
        orchestrator: "SearchModeOrchestrator",
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        self._mood_converter = mood_converter
        self._orchestrator = orchestrator
        self._retry_policy = retry_policy or RetryPolicy()

    @staticmethod
    def validate_mood(mood_text: str) -> str:
        """Return the stripped mood text, or raise InvalidRequest."""
        mood = mood_text.strip()
        if not mood or len(mood) > MAX_MOOD_LENGTH:
            raise InvalidRequest(
                f"mood must be between 1 and {MAX_MOOD_LENGTH} characters",
                length=len(mood),
            )
        return mood

    async def convert_mood(self, mood_text: str) -> MoodTags:
        """Convert a mood to tags.

        A failing converter does not fail the search: the mood text itself
        becomes the query and the tag list stays empty.
        """
        mood = self.validate_mood(mood_text)
        try:
            return await self._retry_policy.call(
                lambda: self._mood_converter.convert(mood), "mood conversion"
            )
        except Exception as e:
            logger.warning(f"Mood conversion failed, searching with the raw mood text: {e}")
            return MoodTags(original_mood=mood, tags=(), query_string=mood)

    async def search(
        self,
        mood_text: str,
        mode: SearchMode,
        origin: Coordinate,
        radius_meters: int | None = None,
        station_count: int | None = None,
        on_stage: "StageListener | None" = None,
    ) -> MoodSearchResult:
        """Convert the mood and run the search in the requested mode."""
        mood = await self.convert_mood(mood_text)
        request = SearchRequest(
            mode=mode,
            origin=origin,
            query_tags=mood.tags,
            radius_meters=radius_meters,
            station_count=station_count,
            query_text=mood.query_string,
        )
        hits = await self._orchestrator.run(request, on_stage=on_stage)
        logger.info(f"Mood '{mood.original_mood}' -> {list(mood.tags)}: {len(hits)} result(s)")
        return MoodSearchResult(mood=mood, hits=hits)
