"""Tests for the sliding window rate limiter."""

import threading

from app.backend.middleware import RateLimiter


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class TestRateLimiter:
    """Tests for RateLimiter."""

    def test_hundredth_allowed_hundred_and_first_rejected(self):
        limiter = RateLimiter(max_requests=100, window_seconds=60, clock=FakeClock())
        results = [limiter.hit("10.0.0.1") for _ in range(101)]
        assert all(results[:100])
        assert results[100] is False

    def test_clients_are_limited_independently(self):
        limiter = RateLimiter(max_requests=2, window_seconds=60, clock=FakeClock())
        assert limiter.hit("a") and limiter.hit("a")
        assert not limiter.hit("a")
        assert limiter.hit("b")

    def test_window_slides(self):
        clock = FakeClock()
        limiter = RateLimiter(max_requests=2, window_seconds=60, clock=clock)

        assert limiter.hit("a")
        clock.advance(30)
        assert limiter.hit("a")
        assert not limiter.hit("a")

        # First request leaves the window, one slot frees up
        clock.advance(30)
        assert limiter.hit("a")
        assert not limiter.hit("a")

    def test_rejected_requests_are_not_recorded(self):
        clock = FakeClock()
        limiter = RateLimiter(max_requests=1, window_seconds=60, clock=clock)

        assert limiter.hit("a")
        clock.advance(10)
        for _ in range(5):
            assert not limiter.hit("a")

        clock.advance(50)
        assert limiter.hit("a")

    def test_sweep_evicts_idle_clients(self):
        clock = FakeClock()
        limiter = RateLimiter(max_requests=5, window_seconds=60, clock=clock)
        limiter.hit("idle")
        clock.advance(30)
        limiter.hit("active")

        clock.advance(40)
        assert limiter.sweep() == 1
        assert limiter.tracked_clients() == 1

    def test_hit_sweeps_periodically(self):
        clock = FakeClock()
        limiter = RateLimiter(max_requests=5, window_seconds=60, clock=clock)
        for i in range(10):
            limiter.hit(f"10.0.0.{i}")
        assert limiter.tracked_clients() == 10

        clock.advance(61)
        limiter.hit("10.0.1.1")
        assert limiter.tracked_clients() == 1

    def test_reset_clears_state(self):
        limiter = RateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())
        limiter.hit("a")
        limiter.reset()
        assert limiter.tracked_clients() == 0
        assert limiter.hit("a")

    def test_concurrent_hits_never_exceed_limit(self):
        limiter = RateLimiter(max_requests=50, window_seconds=60)
        accepted = []
        lock = threading.Lock()

        def worker():
            for _ in range(20):
                if limiter.hit("shared"):
                    with lock:
                        accepted.append(1)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(accepted) == 50
