"""Mood conversion port."""

from typing import Protocol

from mood_dining.domain.models.mood_tags import MoodTags


class MoodToTags(Protocol):
    """Port for turning a free-text mood into search tags."""

    async def convert(self, mood_text: str) -> MoodTags:
        """Convert a mood into tags and a query string."""
        ...
