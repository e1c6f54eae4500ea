"""Rate limiter for outbound remote analysis calls."""

import asyncio
import time
from typing import Awaitable, Callable, Optional

from ..utils import get_logger


class RateLimiter:
    """
    Allows at most one dispatch per rolling window.

    A caller arriving before the window has elapsed waits out the remainder.
    The check and the timestamp update happen under one lock, so two
    near-simultaneous callers cannot both pass before either records its
    dispatch.

    Clock and sleep are injectable so tests can run on simulated time.
    """

    def __init__(
        self,
        min_interval: float = 20.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize rate limiter.

        Args:
            min_interval: Minimum seconds between two dispatches
            clock: Monotonic time source in seconds
            sleep: Coroutine function used to wait
        """
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_request: Optional[float] = None
        self._lock: Optional[asyncio.Lock] = None
        self._lock_loop: Optional[asyncio.AbstractEventLoop] = None
        self.logger = get_logger()

    @property
    def last_request(self) -> Optional[float]:
        """Clock time of the last dispatch, None before the first."""
        return self._last_request

    def _get_lock(self) -> asyncio.Lock:
        # An asyncio.Lock is bound to the loop it was first used on, and every
        # analyze_sync call runs on a fresh loop
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    async def throttle(self) -> float:
        """
        Wait until a dispatch is allowed and record it.

        Returns:
            Seconds spent waiting
        """
        async with self._get_lock():
            waited = 0.0
            if self._last_request is not None:
                elapsed = self._clock() - self._last_request
                if elapsed < self.min_interval:
                    waited = self.min_interval - elapsed
                    self.logger.info(f"Rate limiting: waiting {waited:.1f}s before next request")
                    await self._sleep(waited)

            self._last_request = self._clock()
            return waited

    def reset(self):
        """Forget the last dispatch."""
        self._last_request = None


_shared_limiter: Optional[RateLimiter] = None


def shared_rate_limiter(min_interval: float = 20.0) -> RateLimiter:
    """
    Get the process-wide limiter used by every gateway built without one.

    The limiter is created on first use with the given interval; later
    callers get the same instance unchanged.
    """
    global _shared_limiter
    if _shared_limiter is None:
        _shared_limiter = RateLimiter(min_interval=min_interval)
    return _shared_limiter


def reset_shared_rate_limiter():
    """Drop the process-wide limiter so the next caller creates a fresh one."""
    global _shared_limiter
    _shared_limiter = None
