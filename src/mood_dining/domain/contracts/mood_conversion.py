"""Mood conversion contract used by the outer layers."""

from typing import Protocol

from mood_dining.domain.models.mood_tags import MoodTags


class MoodConversion(Protocol):
    """Validates a mood text and turns it into search tags."""

    async def convert_mood(self, mood_text: str) -> MoodTags:
        """Convert a 1-100 character mood into tags."""
        ...
