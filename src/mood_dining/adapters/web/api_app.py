"""Starlette application exposing the mood search over HTTP."""

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from mood_dining.adapters.web.rate_limit_middleware import RateLimitMiddleware
from mood_dining.adapters.web.schemas import (
    LocationBody,
    MoodBody,
    PlacesBody,
    StationsBody,
    mood_json,
    restaurant_json,
    station_json,
)
from mood_dining.domain.errors import (
    InvalidRequest,
    NoStationFound,
    SearchError,
    UpstreamUnavailable,
)
from mood_dining.domain.models import SearchRequest

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from mood_dining.adapters.config import AppConfig
    from mood_dining.domain.contracts import (
        MoodConversion,
        NearestStationFinder,
        SearchRunner,
        StationRangeFinder,
    )

ERROR_STATUS_CODES: dict[type[SearchError], int] = {
    InvalidRequest: 400,
    NoStationFound: 404,
    UpstreamUnavailable: 503,
}


def status_code_for(error: SearchError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES.items():
        if isinstance(error, error_type):
            return status_code
    return 500


def error_response(
    message: str, code: str, status_code: int, retryable: bool = False
) -> JSONResponse:
    return JSONResponse(
        {"status": "error", "error": message, "code": code, "retryable": retryable},
        status_code=status_code,
    )


def _validation_message(error: ValidationError) -> str:
    first = error.errors(include_url=False)[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first['msg']}" if location else str(first["msg"])


class MoodDiningApi:
    """HTTP handlers over the injected search services.

    Every handler answers with ``{"status": "success", "data": ...}`` or
    ``{"status": "error", "error": ..., "code": ...}``.
    """

    def __init__(
        self,
        mood_conversion: "MoodConversion",
        search_runner: "SearchRunner",
        station_locator: "NearestStationFinder",
        station_expander: "StationRangeFinder",
    ) -> None:
        self.mood_conversion = mood_conversion
        self.search_runner = search_runner
        self.station_locator = station_locator
        self.station_expander = station_expander

    async def _respond(self, action: Callable[[], Awaitable[Any]]) -> JSONResponse:
        try:
            data = await action()
        except ValidationError as e:
            return error_response(_validation_message(e), InvalidRequest.code, 400)
        except SearchError as e:
            details = e.to_details()
            status_code = status_code_for(e)
            if status_code >= 500:
                logger.error(f"Request failed with {details.code}: {details.reason}")
            return error_response(details.reason, details.code, status_code, details.retryable)
        except Exception:
            logger.exception("Unhandled error while serving request")
            return error_response("Internal server error", "INTERNAL_ERROR", 500)
        return JSONResponse({"status": "success", "data": data})

    async def health(self, _request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok"})

    async def mood(self, request: Request) -> JSONResponse:
        async def action() -> dict[str, Any]:
            body = MoodBody.model_validate_json(await request.body())
            return mood_json(await self.mood_conversion.convert_mood(body.mood))

        return await self._respond(action)

    async def places(self, request: Request) -> JSONResponse:
        async def action() -> dict[str, Any]:
            body = PlacesBody.model_validate_json(await request.body())
            tags = tuple(tag.strip() for tag in body.tags if tag.strip())
            if not tags and not body.query.strip():
                raise InvalidRequest("query or tags is required")

            hits = await self.search_runner.run(
                SearchRequest(
                    mode=body.mode,
                    origin=body.location.to_coordinate(),
                    query_tags=tags,
                    radius_meters=body.search_radius(),
                    station_count=body.search_station_count(),
                    query_text=body.query.strip(),
                )
            )
            return {"results": [restaurant_json(hit) for hit in hits], "status": "OK"}

        return await self._respond(action)

    async def stations(self, request: Request) -> JSONResponse:
        async def action() -> dict[str, Any]:
            body = StationsBody.model_validate_json(await request.body())
            nearest = await self.station_locator.locate_nearest(body.location.to_coordinate())
            in_range = await self.station_expander.expand(nearest, body.station_count)
            return {
                "nearestStation": station_json(nearest),
                "stationsInRange": [station_json(station) for station in in_range],
                "status": "OK",
            }

        return await self._respond(action)

    async def nearest_station(self, request: Request) -> JSONResponse:
        async def action() -> dict[str, Any]:
            location = LocationBody.model_validate(
                {"lat": request.query_params.get("lat"), "lng": request.query_params.get("lng")}
            )
            station = await self.station_locator.locate_nearest(location.to_coordinate())
            return station_json(station)

        return await self._respond(action)

    def routes(self) -> list[Route]:
        return [
            Route("/api/health", self.health, methods=["GET"]),
            Route("/api/mood", self.mood, methods=["POST"]),
            Route("/api/places", self.places, methods=["POST"]),
            Route("/api/stations", self.stations, methods=["POST"]),
            Route("/api/stations/nearest", self.nearest_station, methods=["GET"]),
        ]


def create_app(api: MoodDiningApi, rate_limit_per_minute: int = 100) -> Starlette:
    """Build the Starlette app with per-IP rate limiting."""
    return Starlette(
        routes=api.routes(),
        middleware=[Middleware(RateLimitMiddleware, requests_per_minute=rate_limit_per_minute)],
    )


class ApiServer:
    """Serves the API with uvicorn until stopped."""

    def __init__(self, app: Starlette, config: "AppConfig") -> None:
        self.app = app
        self.config = config
        self._server: Any = None

    async def start(self) -> None:
        import uvicorn

        server_config = uvicorn.Config(
            self.app,
            host=self.config.host,
            port=self.config.port,
            log_level="info",
        )
        self._server = uvicorn.Server(server_config)
        logger.info(f"Serving mood dining API on http://{self.config.host}:{self.config.port}")
        await self._server.serve()

    async def stop(self) -> None:
        if self._server:
            self._server.should_exit = True
