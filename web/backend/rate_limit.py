#!/usr/bin/env python3
"""
Per-user fixed-window rate limiting for AI endpoints.

IP-based limits on uploads are handled separately by slowapi in
``routers.resume``.
"""

import logging

from fastapi import Depends, Request

from core.cache import ExpiringCache
from .auth import AuthenticatedUser, get_current_user
from .exceptions import UserRateLimitExceeded

logger = logging.getLogger(__name__)


class PerUserRateLimiter:
    """Allow ``max_requests`` per user per ``window_seconds``.

    Counters live in the shared ExpiringCache; a window starts at a user's
    first request and the counter disappears when it expires.
    """

    def __init__(self, cache: ExpiringCache, max_requests: int = 15, window_seconds: int = 60):
        self.cache = cache
        self.max_requests = max_requests
        self.window_seconds = window_seconds

    @staticmethod
    def _key(uid: str) -> str:
        return f"ai-rate:{uid}"

    def check(self, uid: str) -> int:
        """Count one request for ``uid``.

        Returns:
            Requests remaining in the current window

        Raises:
            UserRateLimitExceeded: If the window's budget is used up
        """
        key = self._key(uid)
        entry = self.cache.get(key)
        if entry is None:
            entry = {"count": 0}
            self.cache.set(key, entry, self.window_seconds)

        if entry["count"] >= self.max_requests:
            retry_after = self.cache.expires_in(key) or 0.0
            logger.warning(f"AI rate limit exceeded for user {uid}")
            raise UserRateLimitExceeded(retry_after)

        entry["count"] += 1
        return self.max_requests - entry["count"]


def get_ai_rate_limiter(request: Request) -> PerUserRateLimiter:
    return request.app.state.ai_rate_limiter


async def enforce_ai_rate_limit(
    user: AuthenticatedUser = Depends(get_current_user),
    limiter: PerUserRateLimiter = Depends(get_ai_rate_limiter),
) -> AuthenticatedUser:
    """Dependency: authenticate, then charge the user's AI budget.

    Async so the counter is only touched from the event loop thread.
    """
    limiter.check(user.uid)
    return user
