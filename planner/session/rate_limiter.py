"""Admission control for data lookups triggered by map interaction."""

import time
from collections import deque
from collections.abc import Callable

from planner.config.schema import RateLimitConfig


def monotonic_ms() -> float:
    return time.monotonic() * 1000


class RateLimiter:
    """Two gates, both must pass: minimum spacing and a sliding window.

    Single-threaded use only. Callers check ``can_make_request`` and then call
    ``record_request`` once they commit to the request.
    """

    def __init__(
        self,
        max_requests_per_minute: int = 30,
        min_time_between_requests_ms: float = 2000,
        request_window_ms: float = 60000,
        clock: Callable[[], float] = monotonic_ms,
    ):
        self.max_requests = max_requests_per_minute
        self.min_spacing_ms = min_time_between_requests_ms
        self.window_ms = request_window_ms
        self.clock = clock
        self._requests: deque[float] = deque()
        self._last_request: float | None = None

    @classmethod
    def from_config(
        cls, config: RateLimitConfig, clock: Callable[[], float] = monotonic_ms
    ) -> "RateLimiter":
        return cls(
            max_requests_per_minute=config.max_requests_per_minute,
            min_time_between_requests_ms=config.min_time_between_requests_ms,
            request_window_ms=config.request_window_ms,
            clock=clock,
        )

    def can_make_request(self) -> bool:
        now = self.clock()
        if self._last_request is not None and now - self._last_request < self.min_spacing_ms:
            return False
        while self._requests and now - self._requests[0] >= self.window_ms:
            self._requests.popleft()
        return len(self._requests) < self.max_requests

    def record_request(self) -> None:
        now = self.clock()
        self._requests.append(now)
        self._last_request = now

    def reset(self) -> None:
        self._requests.clear()
        self._last_request = None

    @property
    def recent_count(self) -> int:
        return len(self._requests)
