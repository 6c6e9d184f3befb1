"""Tests for the Gemini and keyword mood converters."""

import json
from typing import Any

import aiohttp
import pytest

from mood_dining.adapters.gemini_api import GeminiMoodConverter, KeywordMoodConverter
from mood_dining.adapters.gemini_api.gemini_mood_converter import (
    GEMINI_BASE_URL,
    build_prompt,
    parse_gemini_response,
)
from mood_dining.adapters.gemini_api.keyword_mood_converter import DEFAULT_TAGS, tags_for_mood
from mood_dining.domain.errors import PermanentUpstreamError, TransientUpstreamError


def gemini_reply(text: str) -> dict[str, Any]:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class FakeResponse:
    def __init__(self, status: int = 200, body: Any = None) -> None:
        self.status = status
        self._body = body

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *_args: object) -> None:
        return None

    async def json(self) -> Any:
        return self._body

    async def text(self) -> str:
        return "error body"


class HtmlErrorPageResponse(FakeResponse):
    async def json(self) -> Any:
        raise json.JSONDecodeError("Expecting value", "<html>Bad gateway</html>", 0)


class FakeSession:
    def __init__(self, response: FakeResponse | BaseException) -> None:
        self.response = response
        self.posts: list[dict[str, Any]] = []

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.posts.append({"url": url, **kwargs})
        if isinstance(self.response, BaseException):
            raise self.response
        return self.response


class TestKeywordMoodConverter:
    @pytest.mark.parametrize(
        ("mood", "first_tag"),
        [
            ("疲れた時に温かいもの", "ラーメン"),
            ("さっぱりしたい", "サラダ"),
            ("がっつり肉が食べたい", "焼肉"),
            ("甘いものが欲しい", "カフェ"),
            ("辛いものが食べたい", "カレー"),
            ("I'm TIRED and cold", "ラーメン"),
            ("something light", "サラダ"),
            ("Hearty dinner", "焼肉"),
            ("dessert please", "カフェ"),
            ("spicy!", "カレー"),
        ],
    )
    def test_keyword_groups(self, mood: str, first_tag: str) -> None:
        assert tags_for_mood(mood)[0] == first_tag

    def test_unknown_mood_uses_default_tags(self) -> None:
        assert tags_for_mood("なんでもいい") == DEFAULT_TAGS

    @pytest.mark.asyncio
    async def test_convert_joins_first_two_tags(self) -> None:
        result = await KeywordMoodConverter().convert("さっぱりしたい")

        assert result.original_mood == "さっぱりしたい"
        assert result.tags == ("サラダ", "寿司", "そば", "和食")
        assert result.query_string == "サラダ OR 寿司"


class TestParseGeminiResponse:
    def test_plain_json(self) -> None:
        tags = ["ラーメン", "うどん"]
        text = json.dumps({"searchTags": tags, "searchQuery": "ラーメン"})

        assert parse_gemini_response(gemini_reply(text)) == (tuple(tags), "ラーメン")

    def test_json_inside_markdown_block(self) -> None:
        text = '```json\n{"searchTags": ["寿司"], "searchQuery": "寿司 和食"}\n```'

        assert parse_gemini_response(gemini_reply(text)) == (("寿司",), "寿司 和食")

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"candidates": []},
            gemini_reply("no json here"),
            gemini_reply("{not valid json}"),
            gemini_reply('{"searchTags": "ラーメン", "searchQuery": "x"}'),
            gemini_reply('{"searchTags": ["ラーメン"], "searchQuery": ""}'),
        ],
    )
    def test_unusable_replies_raise_value_error(self, data: dict[str, Any]) -> None:
        with pytest.raises(ValueError):
            parse_gemini_response(data)

    def test_prompt_contains_mood(self) -> None:
        assert '"雨の日に食べたい"' in build_prompt("雨の日に食べたい")


class TestGeminiMoodConverter:
    @pytest.mark.asyncio
    async def test_converts_model_reply(self) -> None:
        reply = gemini_reply('{"searchTags": ["焼肉", "ステーキ"], "searchQuery": "焼肉"}')
        session = FakeSession(FakeResponse(body=reply))
        converter = GeminiMoodConverter(
            "g-key", session=session, model="gemini-pro"  # type: ignore[arg-type]
        )

        result = await converter.convert("がっつり")

        assert result.tags == ("焼肉", "ステーキ")
        assert result.query_string == "焼肉"
        assert result.original_mood == "がっつり"
        request = session.posts[0]
        assert request["url"] == f"{GEMINI_BASE_URL}/gemini-pro:generateContent"
        assert request["params"] == {"key": "g-key"}
        assert "がっつり" in request["json"]["contents"][0]["parts"][0]["text"]

    @pytest.mark.asyncio
    async def test_unparseable_reply_falls_back_to_keywords(self) -> None:
        session = FakeSession(FakeResponse(body=gemini_reply("I cannot help with that")))
        converter = GeminiMoodConverter("g-key", session=session)  # type: ignore[arg-type]

        result = await converter.convert("辛いものが食べたい")

        assert result.tags[0] == "カレー"
        assert result.query_string == "カレー OR 韓国料理"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("response", "error_type"),
        [
            (FakeResponse(status=429), TransientUpstreamError),
            (FakeResponse(status=503), TransientUpstreamError),
            (FakeResponse(status=400), PermanentUpstreamError),
            (FakeResponse(status=200, body=["not", "a", "dict"]), PermanentUpstreamError),
            (HtmlErrorPageResponse(), PermanentUpstreamError),
            (aiohttp.ServerDisconnectedError(), TransientUpstreamError),
        ],
    )
    async def test_transport_failures_raise(
        self, response: FakeResponse | BaseException, error_type: type
    ) -> None:
        session: Any = FakeSession(response)
        converter = GeminiMoodConverter("g-key", session=session)

        with pytest.raises(error_type):
            await converter.convert("なんでも")

    @pytest.mark.asyncio
    async def test_missing_session_is_permanent(self) -> None:
        with pytest.raises(PermanentUpstreamError):
            await GeminiMoodConverter("g-key").convert("なんでも")
