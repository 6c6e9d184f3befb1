"""Shared retry policy for calls to external collaborators."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from mood_dining.domain.errors import TransientUpstreamError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryPolicy:
    """Retry transient failures with exponential backoff.

    Only ``TransientUpstreamError`` is retried. Every other exception,
    including permanent upstream failures, propagates on the first attempt.
    """

    def __init__(
        self,
        max_attempts: int = 3,
        base_delay_seconds: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize the policy.

        Args:
            max_attempts: Total number of attempts, including the first one.
            base_delay_seconds: Delay before the second attempt; doubles after that.
            sleep: Coroutine used to wait between attempts.
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.base_delay_seconds = base_delay_seconds
        self._sleep = sleep

    def delay_for(self, attempt: int) -> float:
        """Delay to wait after the given (1-based) failed attempt."""
        return self.base_delay_seconds * (2 ** (attempt - 1))

    async def call(self, operation: Callable[[], Awaitable[T]], description: str = "call") -> T:
        """Run ``operation`` until it succeeds or attempts are exhausted.

        Raises:
            TransientUpstreamError: The last transient error once every attempt failed.
        """
        for attempt in range(1, self.max_attempts + 1):
            try:
                return await operation()
            except TransientUpstreamError as e:
                if attempt == self.max_attempts:
                    logger.error(f"{description}: all {self.max_attempts} attempts failed: {e}")
                    raise
                delay = self.delay_for(attempt)
                logger.warning(
                    f"{description}: attempt {attempt}/{self.max_attempts} failed: {e}. "
                    f"Retrying in {delay}s..."
                )
                await self._sleep(delay)
        raise AssertionError("unreachable")  # pragma: no cover


NO_RETRY = RetryPolicy(max_attempts=1, base_delay_seconds=0.0)
