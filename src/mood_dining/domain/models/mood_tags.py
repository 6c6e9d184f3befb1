"""Mood conversion result domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MoodTags:
    """Search tags derived from a free-text mood."""

    original_mood: str
    tags: tuple[str, ...]
    query_string: str
