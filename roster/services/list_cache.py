"""List Cache Helpers — read-through and post-commit invalidation for list pages.

Invariants:
    - invalidate_list_caches is only called after a transaction has committed
    - Both the users and the groups list prefixes are dropped on every mutation
    - Cache problems never change the outcome of the calling operation
"""

import logging

from roster.core.cache_keys import LIST_PREFIXES
from roster.core.repository_protocols import ListCacheLike

logger = logging.getLogger(__name__)


async def invalidate_list_caches(cache: ListCacheLike) -> None:
    """Drop every cached users/groups list page."""
    for prefix in LIST_PREFIXES:
        deleted = await cache.invalidate_by_prefix(prefix)
        if deleted:
            logger.debug(f"Invalidated {deleted} cached pages under {prefix}")
