"""Keyword-table mood conversion, used offline and as the Gemini fallback."""

import logging

from mood_dining.domain.models import MoodTags

logger = logging.getLogger(__name__)

# Number of leading tags joined into the query string
QUERY_TAG_COUNT = 2

MOOD_KEYWORD_TABLE: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
    (
        ("疲れ", "温か", "tired", "warm", "cold day", "comfort"),
        ("ラーメン", "うどん", "鍋料理", "スープ"),
    ),
    (
        ("さっぱり", "軽い", "light", "fresh", "refreshing"),
        ("サラダ", "寿司", "そば", "和食"),
    ),
    (
        ("がっつり", "肉", "hearty", "meat", "starving", "hungry"),
        ("焼肉", "ステーキ", "とんかつ", "ハンバーガー"),
    ),
    (
        ("甘い", "デザート", "sweet", "dessert", "cake"),
        ("カフェ", "スイーツ", "ケーキ", "アイス"),
    ),
    (
        ("辛い", "スパイス", "spicy", "hot and spicy", "curry"),
        ("カレー", "韓国料理", "中華料理", "麻婆豆腐"),
    ),
)

DEFAULT_TAGS = ("レストラン", "定食", "和食", "洋食")


def tags_for_mood(mood_text: str) -> tuple[str, ...]:
    """Return the tags of the first keyword group the mood mentions."""
    lowered = mood_text.lower()
    for keywords, tags in MOOD_KEYWORD_TABLE:
        if any(keyword in lowered for keyword in keywords):
            return tags
    return DEFAULT_TAGS


class KeywordMoodConverter:
    """MoodToTags implementation using a fixed keyword table."""

    async def convert(self, mood_text: str) -> MoodTags:
        return self.convert_sync(mood_text)

    def convert_sync(self, mood_text: str) -> MoodTags:
        tags = tags_for_mood(mood_text)
        logger.debug(f"Keyword conversion of '{mood_text}' -> {list(tags)}")
        return MoodTags(
            original_mood=mood_text,
            tags=tags,
            query_string=" OR ".join(tags[:QUERY_TAG_COUNT]),
        )
