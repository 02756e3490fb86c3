"""
Rate Limiter — Fixed Window per Caller

The first request from a caller opens a window of ``window_seconds``.
Up to ``limit`` requests are allowed inside it; the rest are refused
until the window expires, at which point the next request opens a
fresh one.

Backed by an LRU-bounded in-memory dict guarded by a lock.
"""

from __future__ import annotations

import math
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional

from decisionsuite.config import settings
from decisionsuite.errors import RateLimitExceeded


# Maximum number of unique keys tracked before LRU eviction
MAX_RATE_LIMIT_KEYS = 5000


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    limit: int
    remaining: int
    reset_at: float  # epoch seconds

    def headers(self) -> dict[str, str]:
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(int(self.reset_at)),
        }


@dataclass
class _Window:
    count: int
    reset_at: float


class FixedWindowRateLimiter:
    """Fixed-window request counter keyed by caller identity."""

    def __init__(
        self,
        limit: int = 30,
        window_seconds: int = 900,
        clock: Callable[[], float] = time.time,
        max_keys: int = MAX_RATE_LIMIT_KEYS,
    ):
        self.limit = limit
        self.window_seconds = window_seconds
        self.clock = clock
        self._max_keys = max_keys
        self._windows: OrderedDict[str, _Window] = OrderedDict()
        self._lock = threading.Lock()

    def hit(self, key: str) -> RateLimitResult:
        """Count one request for ``key`` and report whether it is allowed."""
        now = self.clock()
        with self._lock:
            window = self._windows.get(key)
            if window is None or now > window.reset_at:
                if window is None and len(self._windows) >= self._max_keys:
                    self._windows.popitem(last=False)
                window = _Window(count=1, reset_at=now + self.window_seconds)
                self._windows[key] = window
                self._windows.move_to_end(key)
                return RateLimitResult(True, self.limit, self.limit - 1, window.reset_at)

            self._windows.move_to_end(key)
            if window.count >= self.limit:
                return RateLimitResult(False, self.limit, 0, window.reset_at)

            window.count += 1
            return RateLimitResult(True, self.limit, self.limit - window.count, window.reset_at)

    def cleanup(self) -> int:
        """Drop expired windows. Returns how many were removed."""
        now = self.clock()
        with self._lock:
            stale = [k for k, w in self._windows.items() if now > w.reset_at]
            for k in stale:
                del self._windows[k]
        return len(stale)

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()


rate_limiter = FixedWindowRateLimiter(
    limit=settings.RATE_LIMIT_REQUESTS,
    window_seconds=settings.RATE_LIMIT_WINDOW,
)


def check_rate_limit(
    key: Optional[str],
    limiter: Optional[FixedWindowRateLimiter] = None,
) -> Optional[RateLimitResult]:
    """
    Count a request and enforce the limit.

    Returns the window state, or None when rate limiting is disabled.

    Raises:
        RateLimitExceeded (429) carrying Retry-After and X-RateLimit-* headers.
    """
    if not settings.RATE_LIMIT_ENABLED:
        return None

    limiter = limiter or rate_limiter
    result = limiter.hit(key or "anonymous")
    if not result.allowed:
        retry_after = max(1, math.ceil(result.reset_at - limiter.clock()))
        raise RateLimitExceeded(
            f"Rate limit exceeded: {result.limit} requests per "
            f"{limiter.window_seconds} seconds. Retry after {retry_after} seconds.",
            headers={**result.headers(), "Retry-After": str(retry_after)},
        )
    return result
