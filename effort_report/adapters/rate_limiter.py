"""Minimum-interval rate limiter for outbound portal calls."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)


class MinimumIntervalRateLimiter:
    """Suspend callers so consecutive network calls are at least one interval apart.

    The limiter tracks only the timestamp of the last successful call. It has no
    lock of its own; the owning client serializes wait and dispatch.
    """

    def __init__(
        self,
        min_interval_seconds: float = 1.0,
        clock: Callable[[], float] | None = None,
        sleep: Callable[[float], Awaitable[None]] | None = None,
    ):
        """Initialize limiter.

        Args:
            min_interval_seconds: Minimum gap between network calls.
            clock: Optional monotonic clock provider.
            sleep: Optional coroutine used to suspend the caller.

        Raises:
            ValueError: Raised when interval is negative.
        """

        if min_interval_seconds < 0:
            raise ValueError("min_interval_seconds must be >= 0")

        self._min_interval_seconds = float(min_interval_seconds)
        self._clock = clock or time.monotonic
        self._sleep = sleep or asyncio.sleep
        self._last_call_at: float | None = None

    async def limiter_wait(self) -> float:
        """Suspend for the remainder of the interval since the last recorded call.

        Returns:
            float: Seconds the caller was suspended for.
        """

        if self._last_call_at is None:
            return 0.0

        elapsed_seconds = self._clock() - self._last_call_at
        remaining_seconds = self._min_interval_seconds - elapsed_seconds
        if remaining_seconds <= 0:
            return 0.0

        logger.debug("Rate limit: waiting %.3fs before next portal call", remaining_seconds)
        await self._sleep(remaining_seconds)
        return remaining_seconds

    def limiter_record_call(self) -> None:
        """Record the current clock reading as the last successful call."""

        self._last_call_at = self._clock()
