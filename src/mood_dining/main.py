"""Main entry point for the mood dining API server."""

import asyncio
import logging
import sys

import aiohttp

from mood_dining.adapters.config import AppConfig
from mood_dining.adapters.web import ApiServer, MoodDiningApi, create_app
from mood_dining.composition import build_collaborators, build_services

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)


async def main() -> None:
    """Main application entry point."""
    config = AppConfig()

    # One session for every outgoing request
    async with aiohttp.ClientSession() as session:
        services = build_services(config, build_collaborators(config, session))
        api = MoodDiningApi(
            mood_conversion=services.mood_search,
            search_runner=services.orchestrator,
            station_locator=services.locator,
            station_expander=services.expander,
        )
        server = ApiServer(create_app(api, config.rate_limit_per_minute), config)

        try:
            await server.start()
        except KeyboardInterrupt:
            logger.info("Shutting down...")
            await server.stop()


def run() -> None:
    """Synchronous entry point for the server command."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
