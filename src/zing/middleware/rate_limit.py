"""Per-client rate limiting step.

A fixed-window counter keyed by the client address. State lives in a
bounded map owned by the limiter instance: expired windows are evicted
lazily, and when the map is still full the least recently seen client
is dropped.
"""

import math
import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass

from zing.errors import TooManyRequests
from zing.http.request import Request
from zing.http.response import error_response
from zing.middleware.protocol import PROCEED, Decision, Respond


@dataclass(frozen=True, slots=True)
class RateLimitConfig:
    """Quota per client: *requests* per *window_seconds*."""

    requests: int = 100
    window_seconds: float = 15 * 60.0
    capacity: int = 10_000


@dataclass(slots=True)
class _Window:
    count: int
    resets_at: float


class RateLimiter:
    """In-memory fixed-window limiter.

    The request that would exceed the quota, and every request after it
    until the window resets, gets ``429`` with a ``Retry-After`` header.

    Usage::

        app.use(RateLimiter(RateLimitConfig(requests=10, window_seconds=60)))
    """

    __slots__ = ("_clock", "_config", "_lock", "_windows")

    def __init__(
        self,
        config: RateLimitConfig | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config or RateLimitConfig()
        self._clock = clock
        self._lock = threading.Lock()
        self._windows: OrderedDict[str, _Window] = OrderedDict()

    def __len__(self) -> int:
        return len(self._windows)

    def _evict(self, now: float) -> None:
        """Make room for one more client. Caller holds the lock."""
        expired = [key for key, window in self._windows.items() if window.resets_at <= now]
        for key in expired:
            del self._windows[key]
        while len(self._windows) >= self._config.capacity:
            self._windows.popitem(last=False)

    def hit(self, key: str) -> int:
        """Count one request for *key*.

        Returns 0 if allowed, otherwise the seconds until the window resets.
        """
        cfg = self._config
        now = self._clock()
        with self._lock:
            window = self._windows.get(key)
            if window is None or window.resets_at <= now:
                if window is None and len(self._windows) >= cfg.capacity:
                    self._evict(now)
                window = _Window(count=0, resets_at=now + cfg.window_seconds)
                self._windows[key] = window
            self._windows.move_to_end(key)

            if window.count >= cfg.requests:
                return max(1, math.ceil(window.resets_at - now))
            window.count += 1
            return 0

    def __call__(self, request: Request) -> Decision:
        retry_after = self.hit(request.remote_addr)
        if not retry_after:
            return PROCEED
        exc = TooManyRequests(retry_after)
        return Respond(error_response(exc.status, exc.detail).with_headers(exc.headers))
