#!/usr/bin/env python3
"""
Unit tests for the per-user AI rate limiter.
"""

import unittest

from core.cache import ExpiringCache
from web.backend.exceptions import UserRateLimitExceeded
from web.backend.rate_limit import PerUserRateLimiter


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestPerUserRateLimiter(unittest.TestCase):

    def setUp(self):
        self.clock = FakeClock()
        self.limiter = PerUserRateLimiter(ExpiringCache(clock=self.clock), max_requests=3, window_seconds=60)

    def test_remaining_counts_down(self):
        self.assertEqual([self.limiter.check("u1") for _ in range(3)], [2, 1, 0])

    def test_limit_exceeded_reports_retry_after(self):
        for _ in range(3):
            self.limiter.check("u1")
        self.clock.now = 20.0

        with self.assertRaises(UserRateLimitExceeded) as ctx:
            self.limiter.check("u1")
        self.assertAlmostEqual(ctx.exception.retry_after_seconds, 40.0)

    def test_users_are_independent(self):
        for _ in range(3):
            self.limiter.check("u1")
        self.assertEqual(self.limiter.check("u2"), 2)

    def test_window_resets_after_expiry(self):
        for _ in range(3):
            self.limiter.check("u1")
        self.clock.now = 60.0
        self.assertEqual(self.limiter.check("u1"), 2)

    def test_window_is_fixed_from_first_request(self):
        self.limiter.check("u1")
        self.clock.now = 50.0
        self.limiter.check("u1")
        self.limiter.check("u1")
        # The window opened at t=0, so it ends at t=60 regardless of later requests
        self.clock.now = 61.0
        self.assertEqual(self.limiter.check("u1"), 2)


if __name__ == '__main__':
    unittest.main()
