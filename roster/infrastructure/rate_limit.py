"""Rate Limiting — Redis fixed-window counters exposed as FastAPI dependencies.

Invariants:
    - One counter per (bucket, tier, client address, window length, window slot)
    - INCR and EXPIRE run in one transactional pipeline
    - Redis failure allows the request (the limiter is advisory)

Design Decisions:
    - Fixed windows over sliding logs: two Redis commands per check, bounded keys
    - "default" bucket guards every data route; "bulk" adds the stricter pair
      on PATCH /users/statuses
"""

import logging
import math
import time

import redis.asyncio as redis
from fastapi import Request

from roster.config import get_settings
from roster.core.errors import RateLimitExceededError

logger = logging.getLogger(__name__)


class RateLimiter:
    """Fixed-window limiter over redis.asyncio."""

    def __init__(self, client: redis.Redis | None, enabled: bool = True):
        self.client = client
        self.enabled = enabled and client is not None

    async def allow(
        self,
        bucket: str,
        client_id: str,
        *,
        tier: str = "short",
        limit: int,
        window_seconds: int,
        now: float | None = None,
    ) -> bool:
        """Return True while the caller is within `limit` hits for this window."""
        if not self.enabled:
            return True
        if limit <= 0:
            return False
        now = now or time.time()
        window = max(1, int(window_seconds))
        slot = int(math.floor(now / window))
        key = f"rl:{bucket}:{tier}:{client_id}:{window}:{slot}"
        try:
            async with self.client.pipeline(transaction=True) as pipe:
                pipe.incr(key)
                pipe.expire(key, window)
                count, _ = await pipe.execute()
        except Exception as e:
            logger.warning(f"Rate limiter unavailable, allowing request: {e}")
            return True
        return int(count) <= limit

    async def close(self) -> None:
        if self.client is not None:
            await self.client.aclose()


# Singleton (initialized on startup)
rate_limiter = RateLimiter(None, enabled=False)


def init_rate_limiter(redis_url: str, enabled: bool = True) -> None:
    global rate_limiter
    if not enabled:
        rate_limiter = RateLimiter(None, enabled=False)
        return
    rate_limiter = RateLimiter(
        redis.from_url(redis_url, decode_responses=True), enabled=True,
    )


def _windows(scope: str) -> list[tuple[str, int, int]]:
    s = get_settings()
    if scope == "bulk":
        return [
            ("short", s.bulk_rate_limit_short_limit, s.rate_limit_short_window_seconds),
            ("long", s.bulk_rate_limit_long_limit, s.rate_limit_long_window_seconds),
        ]
    return [
        ("short", s.rate_limit_short_limit, s.rate_limit_short_window_seconds),
        ("long", s.rate_limit_long_limit, s.rate_limit_long_window_seconds),
    ]


def enforce_rate_limit(scope: str = "default"):
    """Build a dependency that raises RateLimitExceededError once a window is spent."""

    async def dependency(request: Request) -> None:
        client_id = request.client.host if request.client else "unknown"
        for tier, limit, window in _windows(scope):
            allowed = await rate_limiter.allow(
                scope, client_id, tier=tier, limit=limit, window_seconds=window,
            )
            if not allowed:
                raise RateLimitExceededError(window)

    return dependency
