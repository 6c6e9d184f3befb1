"""Gemini-backed mood conversion."""

import asyncio
import json
import logging
import re
from typing import TYPE_CHECKING, Any

import aiohttp

from mood_dining.adapters.api_request_logger import log_api_request
from mood_dining.adapters.gemini_api.keyword_mood_converter import KeywordMoodConverter
from mood_dining.domain.errors import PermanentUpstreamError, TransientUpstreamError
from mood_dining.domain.models import MoodTags

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession

    from mood_dining.adapters.api_rate_limiter import ApiRateLimiter

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

GENERATION_CONFIG = {
    "temperature": 0.3,
    "topK": 40,
    "topP": 0.95,
    "maxOutputTokens": 1024,
}

SAFETY_SETTINGS = [
    {"category": category, "threshold": "BLOCK_MEDIUM_AND_ABOVE"}
    for category in (
        "HARM_CATEGORY_HARASSMENT",
        "HARM_CATEGORY_HATE_SPEECH",
        "HARM_CATEGORY_SEXUALLY_EXPLICIT",
        "HARM_CATEGORY_DANGEROUS_CONTENT",
    )
]

PROMPT_TEMPLATE = """\
You are an expert at finding restaurants. Convert the user's mood or craving
into search tags for restaurants.

User mood: "{mood}"

Reply with JSON in exactly this shape:
{{
  "searchTags": ["tag1", "tag2", "tag3"],
  "searchQuery": "search query"
}}

Rules:
1. searchTags holds 3-5 concrete dish or cuisine names.
2. Prefer dishes served at ordinary restaurants in Japan, written in Japanese.
3. searchQuery is the text query to send to Google Places.
4. Put the dishes that fit the mood best first.
5. Turn vague wording into concrete dish names.

Examples:
- "疲れた時に食べたい温かいもの" -> ["ラーメン", "うどん", "鍋料理", "スープ"]
- "さっぱりしたい" -> ["サラダ", "寿司", "そば", "冷やし中華"]
- "がっつり食べたい" -> ["焼肉", "ステーキ", "とんかつ", "ハンバーガー"]

Return only the JSON, without any explanation."""

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def build_prompt(mood_text: str) -> str:
    return PROMPT_TEMPLATE.format(mood=mood_text)


def parse_gemini_response(data: dict[str, Any]) -> tuple[tuple[str, ...], str]:
    """Extract ``(searchTags, searchQuery)`` from a generateContent response.

    The model may wrap the JSON in a markdown code block, so the outermost
    ``{...}`` span of the text is parsed.

    Raises:
        ValueError: If the response carries no valid tags/query JSON.
    """
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise ValueError("Gemini response has no text content") from e

    match = _JSON_OBJECT.search(text or "")
    if match is None:
        raise ValueError("No JSON object in Gemini response")

    parsed = json.loads(match.group(0))
    tags = parsed.get("searchTags") if isinstance(parsed, dict) else None
    query = parsed.get("searchQuery") if isinstance(parsed, dict) else None
    if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
        raise ValueError("searchTags is missing or not a list of strings")
    if not isinstance(query, str) or not query:
        raise ValueError("searchQuery is missing or empty")
    return tuple(tags), query


class GeminiMoodConverter:
    """MoodToTags implementation calling Gemini ``generateContent``.

    Transport failures raise upstream errors; an unusable model reply falls
    back to the keyword table.
    """

    def __init__(
        self,
        api_key: str,
        session: "ClientSession | None" = None,
        model: str = "gemini-pro",
        rate_limiter: "ApiRateLimiter | None" = None,
        timeout_seconds: float = 10.0,
        fallback: KeywordMoodConverter | None = None,
    ) -> None:
        self._api_key = api_key
        self._session = session
        self._url = f"{GEMINI_BASE_URL}/{model}:generateContent"
        self._rate_limiter = rate_limiter
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._fallback = fallback or KeywordMoodConverter()

    async def convert(self, mood_text: str) -> MoodTags:
        data = await self._generate(build_prompt(mood_text))
        try:
            tags, query = parse_gemini_response(data)
        except ValueError as e:
            logger.warning(f"Could not parse Gemini reply, using keyword fallback: {e}")
            return self._fallback.convert_sync(mood_text)
        return MoodTags(original_mood=mood_text, tags=tags, query_string=query)

    async def _generate(self, prompt: str) -> dict[str, Any]:
        if self._session is None:
            raise PermanentUpstreamError("Gemini client requires an aiohttp session")

        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": GENERATION_CONFIG,
            "safetySettings": SAFETY_SETTINGS,
        }
        params = {"key": self._api_key}
        log_api_request("POST", self._url, params=params, payload=payload)

        if self._rate_limiter is not None:
            await self._rate_limiter.acquire()

        try:
            async with self._session.post(
                self._url, params=params, json=payload, timeout=self._timeout
            ) as response:
                if response.status == 429 or response.status >= 500:
                    raise TransientUpstreamError(
                        f"Gemini API returned HTTP {response.status}", status_code=response.status
                    )
                if response.status != 200:
                    body = await response.text()
                    raise PermanentUpstreamError(
                        f"Gemini API returned HTTP {response.status}: {body[:200]}",
                        status_code=response.status,
                    )
                try:
                    data = await response.json()
                except ValueError as e:
                    raise PermanentUpstreamError("Gemini response body is not JSON") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransientUpstreamError(f"Gemini request failed: {e!r}") from e

        if not isinstance(data, dict):
            raise PermanentUpstreamError("Unexpected Gemini response body")
        return data
