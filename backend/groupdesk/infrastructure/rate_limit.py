"""Fixed-window rate limiter — per-process request counters keyed by caller.

Invariants:
    - A key may pass at most `limit` times per window
    - Rejections report retry_after_seconds >= 1
    - Expired windows are pruned at most once per prune interval

Design Decisions:
    - In-process dict: single-worker deployments only; counters reset on restart
    - Clock injectable for tests (time.monotonic by default)
"""

import math
import time
from dataclasses import dataclass
from typing import Callable


@dataclass
class RateLimitResult:
    ok: bool
    remaining: int = 0
    retry_after_seconds: int | None = None


@dataclass
class _Window:
    started_at: float
    count: int
    length: float


class RateLimiter:
    """Counts hits per key within fixed windows."""

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        prune_interval_seconds: float = 60.0,
    ):
        self._clock = clock
        self._prune_interval = prune_interval_seconds
        self._windows: dict[str, _Window] = {}
        self._last_prune = clock()

    def hit(self, key: str, limit: int, window_seconds: int) -> RateLimitResult:
        now = self._clock()
        self._prune(now)
        length = max(1.0, float(window_seconds))
        window = self._windows.get(key)

        if window is None or now - window.started_at >= window.length:
            self._windows[key] = _Window(started_at=now, count=1, length=length)
            return RateLimitResult(ok=True, remaining=max(0, limit - 1))

        if window.count >= limit:
            retry_after = math.ceil(window.started_at + window.length - now)
            return RateLimitResult(ok=False, retry_after_seconds=max(retry_after, 1))

        window.count += 1
        window.length = length
        return RateLimitResult(ok=True, remaining=max(0, limit - window.count))

    def reset(self) -> None:
        self._windows.clear()
        self._last_prune = self._clock()

    def __len__(self) -> int:
        return len(self._windows)

    def _prune(self, now: float) -> None:
        if now - self._last_prune < self._prune_interval:
            return
        self._last_prune = now
        expired = [
            key for key, w in self._windows.items()
            if now - w.started_at >= w.length
        ]
        for key in expired:
            del self._windows[key]


# Process-wide limiter used by the write-security guard
rate_limiter = RateLimiter()
