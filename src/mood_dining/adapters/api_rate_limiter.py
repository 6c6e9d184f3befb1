"""Spacing of outgoing requests to one external API."""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class ApiRateLimiter:
    """Keeps at least ``min_delay_seconds`` between two requests to one API.

    Station probes and per-station searches run concurrently and share one
    limiter per API, so they queue on the lock and leave one slot apart.
    A zero delay turns the limiter off.
    """

    def __init__(
        self,
        api_name: str,
        min_delay_seconds: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if min_delay_seconds < 0:
            raise ValueError("min_delay_seconds must not be negative")
        self.api_name = api_name
        self.min_delay_seconds = min_delay_seconds
        self._clock = clock
        self._sleep = sleep
        self._next_slot: float | None = None
        self._lock = asyncio.Lock()

    @property
    def enabled(self) -> bool:
        return self.min_delay_seconds > 0

    async def acquire(self) -> None:
        """Wait until the next request to this API may go out."""
        if not self.enabled:
            return

        async with self._lock:
            now = self._clock()
            if self._next_slot is not None and now < self._next_slot:
                wait = self._next_slot - now
                logger.debug(f"{self.api_name}: waiting {wait:.2f}s before next request")
                await self._sleep(wait)
                now = self._clock()
            self._next_slot = now + self.min_delay_seconds
