"""Command-line helper for trying the mood search from a terminal."""

import argparse
import asyncio
import json
import sys
from dataclasses import asdict
from typing import Any

import aiohttp

from mood_dining.adapters.config import AppConfig
from mood_dining.composition import Services, build_collaborators, build_services
from mood_dining.domain.errors import NoStationFound, SearchError
from mood_dining.domain.geo import format_distance
from mood_dining.domain.models import Coordinate, RestaurantHit, SearchMode, SearchStage, Station
from mood_dining.domain.models.search_request import (
    DEFAULT_RADIUS_METERS,
    DEFAULT_STATION_COUNT,
)


def _json_default(value: Any) -> Any:
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    if isinstance(value, SearchMode):
        return value.value
    return str(value)


def print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=_json_default))


def format_hit(position: int, hit: RestaurantHit) -> str:
    parts = [f"{position:2}. {hit.name}"]
    if hit.rating:
        parts.append(f"★{hit.rating:.1f}")
    if hit.price_tier:
        parts.append("¥" * hit.price_tier)
    if hit.distance_from_user is not None:
        parts.append(format_distance(hit.distance_from_user))
    if hit.origin_station_name:
        parts.append(f"[{hit.origin_station_name}]")
    return "  ".join(parts)


def format_station(station: Station) -> str:
    distance = format_distance(station.distance_from_origin)
    return f"{station.name} ({distance}, id={station.id or '-'})"


def _report_stage(stage: SearchStage) -> None:
    print(f"... {stage.name.lower().replace('_', ' ')}", file=sys.stderr)


async def run_search(args: argparse.Namespace, services: Services) -> None:
    mode = SearchMode(args.mode)
    result = await services.mood_search.search(
        args.mood,
        mode,
        Coordinate(latitude=args.lat, longitude=args.lng),
        radius_meters=args.radius if mode is SearchMode.RADIUS else None,
        station_count=args.stations if mode is SearchMode.STATION_RANGE else None,
        on_stage=None if args.json else _report_stage,
    )

    if args.json:
        print_json({"mood": asdict(result.mood), "results": [asdict(hit) for hit in result.hits]})
        return

    print(f"\nMood: {result.mood.original_mood}")
    print(f"Tags: {', '.join(result.mood.tags) or '-'}  (query: {result.mood.query_string})")
    print("=" * 70)
    if not result.hits:
        print("No restaurants found.")
        return
    for position, hit in enumerate(result.hits, 1):
        print(format_hit(position, hit))
        if hit.address_text:
            print(f"    {hit.address_text}")


async def run_nearest(args: argparse.Namespace, services: Services) -> None:
    station = await services.locator.locate_nearest(
        Coordinate(latitude=args.lat, longitude=args.lng)
    )
    if args.json:
        print_json(asdict(station))
    else:
        print(f"Nearest station: {format_station(station)}")


async def run_stations(args: argparse.Namespace, services: Services) -> None:
    nearest = await services.locator.locate_nearest(
        Coordinate(latitude=args.lat, longitude=args.lng)
    )
    stations = await services.expander.expand(nearest, args.count)
    if args.json:
        print_json([asdict(station) for station in stations])
        return

    print(f"\nStations in range of {nearest.name} ({len(stations)}):")
    print("=" * 70)
    for station in stations:
        print(f"  {format_station(station)}")


async def run_mood(args: argparse.Namespace, services: Services) -> None:
    mood = await services.mood_search.convert_mood(args.text)
    if args.json:
        print_json(asdict(mood))
    else:
        print(f"Tags: {', '.join(mood.tags) or '-'}")
        print(f"Query: {mood.query_string}")


COMMANDS = {
    "search": run_search,
    "nearest": run_nearest,
    "stations": run_stations,
    "mood": run_mood,
}


def _add_location_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--lat", type=float, required=True, help="Latitude of your position")
    parser.add_argument("--lng", type=float, required=True, help="Longitude of your position")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Mood dining search helper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Restaurants within 1 km that match a mood
  mood-dining-cli search "tired, want something warm" --lat 35.658 --lng 139.7016

  # Restaurants around the nearest station and the next two
  mood-dining-cli search "がっつり食べたい" --lat 35.658 --lng 139.7016 --mode station

  # Stations in range, without any API keys
  mood-dining-cli --demo stations --lat 35.658 --lng 139.7016 --count 3
        """,
    )
    parser.add_argument(
        "--demo", action="store_true", help="Use built-in demo data instead of the APIs"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    search_parser = subparsers.add_parser("search", help="Search restaurants for a mood")
    search_parser.add_argument("mood", help="How you feel, in free text")
    _add_location_arguments(search_parser)
    search_parser.add_argument(
        "--mode",
        choices=[mode.value for mode in SearchMode],
        default=SearchMode.RADIUS.value,
        help="radius: around you; station: around nearby stations",
    )
    search_parser.add_argument(
        "--radius", type=int, default=DEFAULT_RADIUS_METERS, help="Search radius in meters"
    )
    search_parser.add_argument(
        "--stations", type=int, default=DEFAULT_STATION_COUNT, help="Stations beyond the nearest"
    )
    search_parser.add_argument("--json", action="store_true", help="Output as JSON")

    nearest_parser = subparsers.add_parser("nearest", help="Show the nearest station")
    _add_location_arguments(nearest_parser)
    nearest_parser.add_argument("--json", action="store_true", help="Output as JSON")

    stations_parser = subparsers.add_parser("stations", help="List stations in range")
    _add_location_arguments(stations_parser)
    stations_parser.add_argument(
        "--count", type=int, default=DEFAULT_STATION_COUNT, help="Stations beyond the nearest"
    )
    stations_parser.add_argument("--json", action="store_true", help="Output as JSON")

    mood_parser = subparsers.add_parser("mood", help="Convert a mood into search tags")
    mood_parser.add_argument("text", help="How you feel, in free text")
    mood_parser.add_argument("--json", action="store_true", help="Output as JSON")

    return parser


async def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    config = AppConfig(use_demo_data=True) if args.demo else AppConfig()

    try:
        async with aiohttp.ClientSession() as session:
            services = build_services(config, build_collaborators(config, session))
            await COMMANDS[args.command](args, services)
    except SearchError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        if isinstance(e, NoStationFound) and args.command == "search":
            print("Hint: try --mode radius instead.", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
