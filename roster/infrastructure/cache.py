"""List Cache — advisory Redis cache for paginated list responses.

Invariants:
    - get/set/invalidate_by_prefix NEVER raise: errors are logged and swallowed
    - A failed get is a miss; a failed set or invalidation is a no-op
    - Values are stored as JSON text with a TTL
    - Prefix invalidation walks keys with SCAN (never KEYS)

Design Decisions:
    - Singleton list_cache initialized on startup, same lifecycle as db_manager
    - Client is injectable: tests pass a fakeredis client
    - Disabled cache (cache_enabled=False) is a NullListCache, not a None check
      scattered across services
"""

import json
import logging
from typing import Any

import redis.asyncio as redis

logger = logging.getLogger(__name__)


class ListCache:
    """JSON cache over redis.asyncio with best-effort semantics."""

    def __init__(self, client: redis.Redis):
        self.client = client

    async def get(self, key: str) -> Any | None:
        try:
            raw = await self.client.get(key)
        except Exception as e:
            logger.warning(f"Cache get error for key {key}: {e}")
            return None
        if raw is None:
            return None
        try:
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8")
            return json.loads(raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Cache payload for key {key} unreadable: {e}")
            return None

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        try:
            payload = json.dumps(value, ensure_ascii=False)
            await self.client.set(key, payload, ex=ttl_seconds)
        except Exception as e:
            logger.warning(f"Cache set error for key {key}: {e}")

    async def invalidate_by_prefix(self, prefix: str) -> int:
        """Delete every key under `prefix:`. Returns the number of keys deleted."""
        deleted = 0
        try:
            batch: list = []
            async for key in self.client.scan_iter(match=f"{prefix}:*", count=500):
                batch.append(key)
                if len(batch) >= 500:
                    deleted += await self.client.delete(*batch)
                    batch = []
            if batch:
                deleted += await self.client.delete(*batch)
        except Exception as e:
            logger.warning(f"Cache invalidation error for prefix {prefix}: {e}")
        return deleted

    async def ping(self) -> bool:
        try:
            return bool(await self.client.ping())
        except Exception as e:
            logger.warning(f"Cache ping failed: {e}")
            return False

    async def close(self) -> None:
        try:
            await self.client.aclose()
        except Exception as e:
            logger.warning(f"Cache close failed: {e}")


class NullListCache:
    """Cache that never stores anything (cache_enabled=False)."""

    async def get(self, key: str) -> Any | None:
        return None

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        return None

    async def invalidate_by_prefix(self, prefix: str) -> int:
        return 0

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        return None


# Singleton (initialized on startup)
list_cache: ListCache | NullListCache = NullListCache()


def init_cache(redis_url: str, enabled: bool = True) -> None:
    global list_cache
    if not enabled:
        list_cache = NullListCache()
        return
    list_cache = ListCache(redis.from_url(redis_url, decode_responses=True))


async def close_cache() -> None:
    global list_cache
    await list_cache.close()
    list_cache = NullListCache()


def get_cache() -> ListCache | NullListCache:
    """FastAPI dependency for the list cache."""
    return list_cache
