"""Gemini mood conversion adapters."""

from mood_dining.adapters.gemini_api.gemini_mood_converter import GeminiMoodConverter
from mood_dining.adapters.gemini_api.keyword_mood_converter import KeywordMoodConverter

__all__ = ["GeminiMoodConverter", "KeywordMoodConverter"]
