"""Fixed-window limiter for outbound provider requests."""

import time
from typing import Callable


DEFAULT_MAX_REQUESTS = 30
DEFAULT_WINDOW_SECONDS = 60.0


class RateLimiter:
    """Counter bounding outbound calls per time window.

    The limiter is advisory: it only decides whether a new call may be
    issued. Callers that get False fall back immediately; nothing is queued
    or retried.

    Usage:
        limiter = RateLimiter(max_requests=30, window_seconds=60)
        if limiter.check_rate_limit():
            ...  # issue the request
    """

    def __init__(
        self,
        max_requests: int = DEFAULT_MAX_REQUESTS,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._count = 0
        self._window_start = clock()

    def check_rate_limit(self) -> bool:
        """Consume one request slot if one is available.

        Returns:
            True if the call may proceed, False if the window is exhausted
        """
        now = self._clock()
        if now - self._window_start > self.window_seconds:
            self._count = 0
            self._window_start = now

        if self._count >= self.max_requests:
            return False

        self._count += 1
        return True

    def reset(self) -> None:
        """Start a fresh window with no requests counted."""
        self._count = 0
        self._window_start = self._clock()

    @property
    def remaining(self) -> int:
        """Slots left in the current window (as of the last check)."""
        return max(0, self.max_requests - self._count)
