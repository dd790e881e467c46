from homepa.services.rate_limiter import FixedWindowRateLimiter


class FakeClock:
    def __init__(self, now=1_000.0):
        self.now = now

    def __call__(self):
        return self.now


def test_allows_up_to_max_then_rejects():
    clock = FakeClock()
    limiter = FixedWindowRateLimiter(clock=clock)

    remaining = [limiter.check("ip", 3, 60).remaining for _ in range(3)]
    assert remaining == [2, 1, 0]

    decision = limiter.check("ip", 3, 60)
    assert not decision.allowed
    assert decision.remaining == 0
    assert decision.reset_time == 1_060.0


def test_window_resets_after_it_elapses():
    clock = FakeClock()
    limiter = FixedWindowRateLimiter(clock=clock)
    for _ in range(4):
        limiter.check("ip", 3, 60)
    assert not limiter.check("ip", 3, 60).allowed

    clock.now += 61
    decision = limiter.check("ip", 3, 60)
    assert decision.allowed
    assert decision.remaining == 2
    assert decision.reset_time == clock.now + 60


def test_keys_are_counted_independently():
    limiter = FixedWindowRateLimiter(clock=FakeClock())
    for _ in range(2):
        limiter.check("a", 2, 60)
    assert not limiter.check("a", 2, 60).allowed
    assert limiter.check("b", 2, 60).allowed


def test_retry_after_rounds_up_and_is_at_least_one():
    clock = FakeClock()
    limiter = FixedWindowRateLimiter(clock=clock)
    decision = limiter.check("ip", 1, 90)

    assert decision.retry_after(clock.now) == 90
    assert decision.retry_after(clock.now + 89.5) == 1
    assert decision.retry_after(clock.now + 500) == 1


def test_sweep_removes_only_expired_windows():
    clock = FakeClock()
    limiter = FixedWindowRateLimiter(clock=clock)
    limiter.check("short", 5, 10)
    limiter.check("long", 5, 100)

    clock.now += 11
    assert limiter.sweep() == 1
    # "long" kept its count
    assert limiter.check("long", 5, 100).remaining == 3
