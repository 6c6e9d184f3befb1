"""Deterministic demo data laid out around the query point.

Demo mode lets the API and CLI run without Google or Gemini keys. Every
result is derived from the request coordinates, so the same request always
produces the same answer.
"""

import re
import zlib

from mood_dining.domain.models import Coordinate

# (id, name, latitude offset, longitude offset) relative to the query point
DEMO_STATIONS: tuple[tuple[str, str, float, float], ...] = (
    ("demo_station_shibuya", "渋谷駅", 0.001, 0.001),
    ("demo_station_harajuku", "原宿駅", -0.005, 0.008),
    ("demo_station_shinjuku", "新宿駅", 0.01, -0.005),
    ("demo_station_ebisu", "恵比寿駅", -0.018, -0.006),
    ("demo_station_yoyogi", "代々木駅", 0.02, 0.01),
)

# Stops reached when riding out in each direction: (near stop, far stop)
DEMO_LINES: dict[str, tuple[tuple[str, str], tuple[str, str]]] = {
    "north": (("demo_stop_shinjuku", "新宿駅"), ("demo_stop_ikebukuro", "池袋駅")),
    "east": (("demo_stop_omotesando", "表参道駅"), ("demo_stop_aoyama", "青山一丁目駅")),
    "south": (("demo_stop_ebisu", "恵比寿駅"), ("demo_stop_meguro", "目黒駅")),
    "west": (
        ("demo_stop_yoyogi_uehara", "代々木上原駅"),
        ("demo_stop_shimokitazawa", "下北沢駅"),
    ),
}

DEMO_LINE_NAMES = {
    "north": "山手線",
    "east": "銀座線",
    "south": "日比谷線",
    "west": "小田急線",
}

# (name suffix, categories) of the restaurants generated for each dish
DEMO_RESTAURANT_TEMPLATES: tuple[tuple[str, frozenset[str]], ...] = (
    ("本舗", frozenset({"restaurant", "food"})),
    ("食堂", frozenset({"restaurant", "food", "point_of_interest"})),
)

DEFAULT_DISHES = ("レストラン",)
MAX_DISHES = 3

_QUERY_SEPARATOR = re.compile(r"\s+(?:OR\s+)?|\s*,\s*")


def stable_hash(*parts: object) -> int:
    """Process-independent hash of the given parts."""
    return zlib.crc32("|".join(str(part) for part in parts).encode("utf-8"))


def shift(origin: Coordinate, lat_offset: float, lng_offset: float) -> Coordinate:
    return Coordinate(
        latitude=origin.latitude + lat_offset, longitude=origin.longitude + lng_offset
    )


def direction_of(origin: Coordinate, destination: Coordinate) -> str:
    """Compass direction (north/east/south/west) of ``destination`` seen from ``origin``."""
    dlat = destination.latitude - origin.latitude
    dlng = destination.longitude - origin.longitude
    if abs(dlat) >= abs(dlng):
        return "north" if dlat >= 0 else "south"
    return "east" if dlng > 0 else "west"


def dishes_from_query(query: str) -> tuple[str, ...]:
    terms = [
        term
        for term in _QUERY_SEPARATOR.split(query.strip())
        if term and term.upper() != "OR" and term.lower() != "restaurant"
    ]
    return tuple(dict.fromkeys(terms))[:MAX_DISHES] or DEFAULT_DISHES
