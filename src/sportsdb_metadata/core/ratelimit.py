"""Sliding-window admission control for outgoing API requests."""

from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from collections.abc import Awaitable, Callable
from typing import Final

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SECONDS: Final[float] = 60.0


class SlidingWindowRateLimiter:
    """Admit at most ``max_requests`` requests in any trailing time window.

    Admission is serialised by a single lock: pruning, the capacity check,
    the wait for the oldest timestamp to leave the window and the recording
    of the new timestamp all happen while holding it. A timestamp is only
    recorded once admission is granted, so cancelling a waiting caller leaves
    the window untouched.

    Args:
        max_requests: Maximum admissions per window
        window: Window length in seconds (default: 60)
        clock: Monotonic clock, injectable for tests
        sleep: Async sleep, injectable for tests
    """

    def __init__(
        self,
        max_requests: int,
        window: float = DEFAULT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if max_requests < 1:
            raise ValueError(f"max_requests must be at least 1, got {max_requests}")
        self.max_requests = max_requests
        self.window = window
        self._clock = clock
        self._sleep = sleep
        self._timestamps: deque[float] = deque()
        self._lock = asyncio.Lock()

    def _prune(self, now: float) -> None:
        while self._timestamps and now - self._timestamps[0] >= self.window:
            self._timestamps.popleft()

    async def acquire(self) -> None:
        """Wait until a request may be sent, then record its admission."""
        async with self._lock:
            now = self._clock()
            self._prune(now)
            while len(self._timestamps) >= self.max_requests:
                wait_time = self._timestamps[0] + self.window - now
                logger.warning(
                    "Rate limit of %d requests per %.0fs reached, waiting %.2fs",
                    self.max_requests,
                    self.window,
                    wait_time,
                )
                await self._sleep(max(wait_time, 0.0))
                now = self._clock()
                self._prune(now)
            self._timestamps.append(now)

    async def get_wait_time(self) -> float:
        """Estimate the delay before the next request would be admitted."""
        async with self._lock:
            now = self._clock()
            self._prune(now)
            if len(self._timestamps) < self.max_requests:
                return 0.0
            return max(0.0, self._timestamps[0] + self.window - now)

    @property
    def in_window(self) -> int:
        """Number of admissions currently counted against the window."""
        return len(self._timestamps)
