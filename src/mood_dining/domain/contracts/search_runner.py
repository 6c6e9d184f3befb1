"""Search pipeline contract."""

from collections.abc import Callable
from typing import Protocol

from mood_dining.domain.models.restaurant_hit import RestaurantHit
from mood_dining.domain.models.search_request import SearchRequest
from mood_dining.domain.models.search_stage import SearchStage


class SearchRunner(Protocol):
    """Runs a restaurant search in radius or station-range mode."""

    async def run(
        self,
        request: SearchRequest,
        on_stage: Callable[[SearchStage], None] | None = None,
    ) -> list[RestaurantHit]:
        ...
