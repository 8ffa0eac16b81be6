"""Fixed-window rate limiter — counting, window reset and pruning."""

from groupdesk.infrastructure.rate_limit import RateLimiter


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_allows_up_to_limit_then_rejects():
    clock = FakeClock()
    limiter = RateLimiter(clock=clock)

    results = [limiter.hit("k", limit=3, window_seconds=60) for _ in range(4)]

    assert [r.ok for r in results] == [True, True, True, False]
    assert [r.remaining for r in results[:3]] == [2, 1, 0]


def test_rejection_reports_seconds_until_window_end():
    clock = FakeClock()
    limiter = RateLimiter(clock=clock)
    limiter.hit("k", limit=1, window_seconds=60)

    clock.now += 15.2
    result = limiter.hit("k", limit=1, window_seconds=60)

    assert result.ok is False
    assert result.retry_after_seconds == 45


def test_retry_after_is_at_least_one_second():
    clock = FakeClock()
    limiter = RateLimiter(clock=clock)
    limiter.hit("k", limit=1, window_seconds=60)

    clock.now += 59.99
    assert limiter.hit("k", limit=1, window_seconds=60).retry_after_seconds == 1


def test_new_window_resets_count():
    clock = FakeClock()
    limiter = RateLimiter(clock=clock)
    limiter.hit("k", limit=1, window_seconds=60)

    clock.now += 60
    assert limiter.hit("k", limit=1, window_seconds=60).ok is True


def test_keys_are_independent():
    limiter = RateLimiter(clock=FakeClock())
    limiter.hit("a", limit=1, window_seconds=60)
    assert limiter.hit("b", limit=1, window_seconds=60).ok is True


def test_expired_windows_are_pruned():
    clock = FakeClock()
    limiter = RateLimiter(clock=clock, prune_interval_seconds=60)
    limiter.hit("old", limit=5, window_seconds=10)

    clock.now += 61
    limiter.hit("new", limit=5, window_seconds=10)

    assert len(limiter) == 1


def test_reset_clears_all_keys():
    limiter = RateLimiter(clock=FakeClock())
    limiter.hit("a", limit=1, window_seconds=60)
    limiter.reset()
    assert len(limiter) == 0
