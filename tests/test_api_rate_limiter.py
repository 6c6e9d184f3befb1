"""Tests for the outgoing API rate limiter."""

import asyncio

import pytest

from mood_dining.adapters.api_rate_limiter import ApiRateLimiter


class FakeClock:
    """Monotonic clock that only moves when the limiter sleeps or a test advances it."""

    def __init__(self) -> None:
        self.now = 100.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
        await asyncio.sleep(0)


def limiter_with(clock: FakeClock, delay: float, name: str = "google_places") -> ApiRateLimiter:
    return ApiRateLimiter(name, min_delay_seconds=delay, clock=clock, sleep=clock.sleep)


class TestApiRateLimiter:
    @pytest.mark.asyncio
    async def test_first_request_is_immediate(self) -> None:
        """Given a fresh limiter, when acquiring, then it does not wait."""
        clock = FakeClock()

        await limiter_with(clock, 1.0).acquire()

        assert clock.sleeps == []

    @pytest.mark.asyncio
    async def test_second_request_waits_for_remaining_delay(self) -> None:
        """Given a request 0.3s ago, when acquiring with a 1s delay, then waits 0.7s."""
        clock = FakeClock()
        limiter = limiter_with(clock, 1.0)

        await limiter.acquire()
        clock.now += 0.3
        await limiter.acquire()

        assert clock.sleeps == [pytest.approx(0.7)]

    @pytest.mark.asyncio
    async def test_request_after_delay_passes(self) -> None:
        clock = FakeClock()
        limiter = limiter_with(clock, 1.0)

        await limiter.acquire()
        clock.now += 5.0
        await limiter.acquire()

        assert clock.sleeps == []

    @pytest.mark.asyncio
    async def test_zero_delay_is_disabled(self) -> None:
        clock = FakeClock()
        limiter = limiter_with(clock, 0.0)

        for _ in range(5):
            await limiter.acquire()

        assert limiter.enabled is False
        assert clock.sleeps == []

    def test_negative_delay_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            ApiRateLimiter("gemini", min_delay_seconds=-1.0)

    @pytest.mark.asyncio
    async def test_concurrent_requests_leave_one_slot_apart(self) -> None:
        """Given concurrent fan-out calls, when acquiring, then they are spaced by the delay."""
        clock = FakeClock()
        limiter = limiter_with(clock, 0.5, name="google_directions")
        released: list[float] = []

        async def request() -> None:
            await limiter.acquire()
            released.append(clock.now)

        await asyncio.gather(request(), request(), request())

        assert released == [100.0, pytest.approx(100.5), pytest.approx(101.0)]

    @pytest.mark.asyncio
    async def test_separate_limiters_dont_block_each_other(self) -> None:
        """Limiters created for different APIs are independent."""
        clock = FakeClock()
        places = limiter_with(clock, 1.0, "google_places")
        gemini = limiter_with(clock, 1.0, "gemini")

        await places.acquire()
        await gemini.acquire()

        assert clock.sleeps == []
