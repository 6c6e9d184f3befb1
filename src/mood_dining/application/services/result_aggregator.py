"""Service that merges, deduplicates and ranks restaurant hits."""

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

from mood_dining.domain.models import RestaurantHit

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_RESULTS = 20
RATING_TIE_TOLERANCE = 0.1
DISTANCE_TIE_TOLERANCE_METERS = 100


def _tie_groups(
    items: Sequence[tuple[int, T]], key: Callable[[T], float], tolerance: float
) -> list[list[tuple[int, T]]]:
    """Split indexed items into groups whose keys lie within ``tolerance``.

    Items are walked in ascending key order; each group is anchored at its
    smallest key and takes every following item closer than ``tolerance`` to
    that anchor. Groups come back in key order, each in input order.
    """
    groups: list[list[tuple[int, T]]] = []
    anchor = 0.0
    for index, item in sorted(items, key=lambda pair: key(pair[1])):
        value = key(item)
        if not groups or value - anchor >= tolerance:
            groups.append([])
            anchor = value
        groups[-1].append((index, item))
    for group in groups:
        group.sort(key=lambda pair: pair[0])
    return groups


def _distance(hit: RestaurantHit) -> float:
    return float(hit.distance_from_user or 0)


def _negative_rating(hit: RestaurantHit) -> float:
    return -hit.rating


class ResultAggregator:
    """Merges restaurant hits from several searches into one ordered list."""

    def __init__(self, max_results: int = MAX_RESULTS) -> None:
        self.max_results = max_results

    @staticmethod
    def deduplicate(hits: Iterable[RestaurantHit]) -> list[RestaurantHit]:
        """Remove repeated venues; the first occurrence wins."""
        seen: set[str] = set()
        unique: list[RestaurantHit] = []
        for hit in hits:
            if hit.identity in seen:
                continue
            seen.add(hit.identity)
            unique.append(hit)
        return unique

    @staticmethod
    def rank(
        hits: Sequence[RestaurantHit], query_tags: Sequence[str] = ()
    ) -> list[RestaurantHit]:
        """Order hits by rating, then distance, then name match, then input order.

        Ratings closer than 0.1 and distances closer than 100 m count as ties.
        A hit whose name contains one of ``query_tags`` (case-insensitive)
        wins a remaining tie.
        """
        tags = [tag.lower() for tag in query_tags if tag.strip()]

        def name_matches(hit: RestaurantHit) -> bool:
            name = hit.name.lower()
            return any(tag in name for tag in tags)

        ranked: list[RestaurantHit] = []
        indexed = list(enumerate(hits))
        for rating_group in _tie_groups(indexed, _negative_rating, RATING_TIE_TOLERANCE):
            for distance_group in _tie_groups(
                rating_group, _distance, DISTANCE_TIE_TOLERANCE_METERS
            ):
                # stable: keeps input order among equal matches
                distance_group.sort(key=lambda pair: not name_matches(pair[1]))
                ranked.extend(hit for _, hit in distance_group)
        return ranked

    def collapse(self, hits: Iterable[RestaurantHit]) -> list[RestaurantHit]:
        """Deduplicate and cap, keeping the collaborator's own order."""
        return self.deduplicate(hits)[: self.max_results]

    def aggregate(
        self, hits: Iterable[RestaurantHit], query_tags: Sequence[str] = ()
    ) -> list[RestaurantHit]:
        """Deduplicate, rank and cap the merged hits of several searches."""
        unique = self.deduplicate(hits)
        ranked = self.rank(unique, query_tags)
        logger.debug(f"Aggregated {len(unique)} unique hit(s), returning {self.max_results} max")
        return ranked[: self.max_results]
