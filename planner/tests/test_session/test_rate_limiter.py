"""Tests for the spacing + sliding-window rate limiter."""

from planner.config.schema import RateLimitConfig
from planner.session.rate_limiter import RateLimiter


class TestSpacing:
    def test_first_request_allowed(self, clock):
        assert RateLimiter(clock=clock).can_make_request()

    def test_too_soon_rejected(self, clock):
        limiter = RateLimiter(clock=clock)
        limiter.record_request()
        clock.advance(1999)
        assert not limiter.can_make_request()

    def test_after_spacing_allowed(self, clock):
        limiter = RateLimiter(clock=clock)
        limiter.record_request()
        clock.advance(2000)
        assert limiter.can_make_request()

    def test_check_does_not_record(self, clock):
        limiter = RateLimiter(clock=clock)
        assert limiter.can_make_request()
        assert limiter.can_make_request()
        assert limiter.recent_count == 0


class TestWindow:
    def test_window_cap(self, clock):
        limiter = RateLimiter(min_time_between_requests_ms=0, clock=clock)
        for _ in range(30):
            assert limiter.can_make_request()
            limiter.record_request()
            clock.advance(100)

        assert limiter.recent_count == 30
        assert not limiter.can_make_request()

        limiter.reset()
        assert limiter.can_make_request()

    def test_window_slides(self, clock):
        limiter = RateLimiter(min_time_between_requests_ms=0, clock=clock)
        for _ in range(30):
            limiter.record_request()
            clock.advance(100)
        assert not limiter.can_make_request()

        # The first request was recorded 3000 ms ago; it leaves the window at 60000
        clock.advance(57000)
        assert limiter.can_make_request()
        assert limiter.recent_count == 29

    def test_spaced_requests_stay_under_cap(self, clock):
        limiter = RateLimiter(clock=clock)
        for _ in range(30):
            assert limiter.can_make_request()
            limiter.record_request()
            clock.advance(2000)
        # 30 requests at 2 s spacing fill exactly one minute, the oldest expires
        assert limiter.can_make_request()


class TestReset:
    def test_reset_clears_both_gates(self, clock):
        limiter = RateLimiter(max_requests_per_minute=1, clock=clock)
        limiter.record_request()
        assert not limiter.can_make_request()

        limiter.reset()
        assert limiter.can_make_request()
        assert limiter.recent_count == 0


class TestFromConfig:
    def test_from_config(self, clock):
        config = RateLimitConfig(
            max_requests_per_minute=2, min_time_between_requests_ms=0
        )
        limiter = RateLimiter.from_config(config, clock=clock)
        limiter.record_request()
        limiter.record_request()
        assert not limiter.can_make_request()
