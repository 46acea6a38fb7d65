"""User Service — offset/cursor listing and the bulk status transaction.

Invariants:
    - Listings order by id ascending; offset listings report total from a separate COUNT
    - Cursor listings return rows with id > cursor and are never cached
    - Bulk update: duplicate ids rejected before any storage access
    - Bulk update: all-or-nothing inside one transaction; every missing id reported
    - Bulk update: one UPDATE statement per distinct target status
    - List caches invalidated only after commit

Design Decisions:
    - Page fetch and COUNT are not in one snapshot: total may drift under
      concurrent writes, callers tolerate it
    - No application lock for bulk updates: overlapping concurrent requests are
      ordered by the database alone
"""

import logging
from typing import Sequence

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from roster.core.bulk_status import (
    find_duplicate_ids, find_missing_ids, partition_by_status,
)
from roster.core.cache_keys import users_list_key
from roster.core.domain_types import BULK_UPDATE_MAX, UserId, UserStatus
from roster.core.errors import (
    DuplicateIdsError, RequestValidationFailed, UsersNotFoundError,
)
from roster.core.pagination import (
    check_page_params, cursor_fetch_size, slice_cursor_page,
)
from roster.core.repository_protocols import ListCacheLike
from roster.models.user import User
from roster.schemas.common import (
    CursorMeta, CursorPageResponse, OffsetMeta, OffsetPageResponse,
)
from roster.schemas.user import UserResponse
from roster.services.list_cache import invalidate_list_caches

logger = logging.getLogger(__name__)


class UserService:
    """Reads and bulk writes over the users table."""

    def __init__(self, db: AsyncSession, cache: ListCacheLike, cache_ttl_seconds: int = 30):
        self.db = db
        self.cache = cache
        self.cache_ttl_seconds = cache_ttl_seconds

    async def list_offset(
        self, limit: int, offset: int,
    ) -> OffsetPageResponse[UserResponse]:
        """Offset page of users, read-through cached."""
        check_page_params(limit, offset=offset)
        key = users_list_key(limit, offset)
        cached = await self.cache.get(key)
        if cached is not None:
            return OffsetPageResponse[UserResponse].model_validate(cached)

        result = await self.db.execute(
            select(User).order_by(User.id.asc()).limit(limit).offset(offset),
        )
        users = result.scalars().all()
        total = await self.db.scalar(select(func.count()).select_from(User))

        page = OffsetPageResponse[UserResponse](
            data=[UserResponse.model_validate(u) for u in users],
            meta=OffsetMeta(limit=limit, offset=offset, total=total or 0),
        )
        await self.cache.set(
            key, page.model_dump(mode="json", by_alias=True), self.cache_ttl_seconds,
        )
        return page

    async def list_cursor(
        self, cursor: int | None, limit: int,
    ) -> CursorPageResponse[UserResponse]:
        """Keyset page of users after `cursor` (exclusive)."""
        check_page_params(limit, cursor=cursor)
        query = select(User).order_by(User.id.asc()).limit(cursor_fetch_size(limit))
        if cursor is not None:
            query = query.where(User.id > cursor)
        result = await self.db.execute(query)
        page = slice_cursor_page(result.scalars().all(), limit)
        return CursorPageResponse[UserResponse](
            data=[UserResponse.model_validate(u) for u in page.rows],
            meta=CursorMeta(next_cursor=page.next_cursor, has_next=page.has_next),
        )

    async def bulk_update_statuses(
        self, updates: Sequence[tuple[UserId, UserStatus]],
    ) -> int:
        """Apply every (id, status) pair atomically. Returns the number applied."""
        if not 1 <= len(updates) <= BULK_UPDATE_MAX:
            raise RequestValidationFailed(
                f"updates must contain between 1 and {BULK_UPDATE_MAX} entries",
                "updates",
            )
        ids = [user_id for user_id, _ in updates]
        duplicates = find_duplicate_ids(ids)
        if duplicates:
            raise DuplicateIdsError(duplicates)

        async with self.db.begin():
            result = await self.db.execute(select(User.id).where(User.id.in_(ids)))
            missing = find_missing_ids(ids, result.scalars().all())
            if missing:
                raise UsersNotFoundError(missing)

            for status, status_ids in partition_by_status(updates).items():
                await self.db.execute(
                    update(User)
                    .where(User.id.in_(status_ids))
                    .values(status=status)
                    .execution_options(synchronize_session=False),
                )

        logger.info(
            f"Bulk status update committed for {len(updates)} users",
            extra={"updated": len(updates)},
        )
        await invalidate_list_caches(self.cache)
        return len(updates)
