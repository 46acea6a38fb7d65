"""Group Service — offset listing and membership removal.

Invariants:
    - After every committed removal, group.status == EMPTY iff no user has group_id == group.id
    - Removal never sets a group back to NOT_EMPTY
    - Preconditions, in order: group exists (404), user exists (404), user in group (409)
    - The group row is locked FOR UPDATE before the user is detached; concurrent
      removals against one group run detach + recount one at a time
    - Every failure rolls the whole transaction back before surfacing
    - List caches invalidated only after commit

Design Decisions:
    - Detach is conditional (WHERE group_id = :group): if a concurrent removal of
      the same member committed first, this one fails with CONFLICT instead of
      silently succeeding twice
    - Member count is read after the detach, inside the lock: the count that
      decides EMPTY is never stale
"""

import logging

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from roster.core.cache_keys import groups_list_key
from roster.core.domain_types import GroupId, UserId
from roster.core.errors import MembershipConflictError, ResourceNotFoundError
from roster.core.membership import check_is_member, status_after_removal
from roster.core.pagination import check_page_params
from roster.core.repository_protocols import ListCacheLike
from roster.models.group import Group
from roster.models.user import User
from roster.schemas.common import OffsetMeta, OffsetPageResponse
from roster.schemas.group import GroupResponse
from roster.services.list_cache import invalidate_list_caches

logger = logging.getLogger(__name__)


class GroupService:
    """Reads over groups and the membership removal transaction."""

    def __init__(self, db: AsyncSession, cache: ListCacheLike, cache_ttl_seconds: int = 30):
        self.db = db
        self.cache = cache
        self.cache_ttl_seconds = cache_ttl_seconds

    async def list_offset(
        self, limit: int, offset: int,
    ) -> OffsetPageResponse[GroupResponse]:
        """Offset page of groups, read-through cached."""
        check_page_params(limit, offset=offset)
        key = groups_list_key(limit, offset)
        cached = await self.cache.get(key)
        if cached is not None:
            return OffsetPageResponse[GroupResponse].model_validate(cached)

        result = await self.db.execute(
            select(Group).order_by(Group.id.asc()).limit(limit).offset(offset),
        )
        groups = result.scalars().all()
        total = await self.db.scalar(select(func.count()).select_from(Group))

        page = OffsetPageResponse[GroupResponse](
            data=[GroupResponse.model_validate(g) for g in groups],
            meta=OffsetMeta(limit=limit, offset=offset, total=total or 0),
        )
        await self.cache.set(
            key, page.model_dump(mode="json", by_alias=True), self.cache_ttl_seconds,
        )
        return page

    async def remove_user(self, group_id: GroupId, user_id: UserId) -> None:
        """Detach user from group and restore the emptiness flag, atomically."""
        async with self.db.begin():
            found_group = await self.db.scalar(
                select(Group.id).where(Group.id == group_id),
            )
            if found_group is None:
                raise ResourceNotFoundError("Group", group_id)

            row = (await self.db.execute(
                select(User.id, User.group_id).where(User.id == user_id),
            )).one_or_none()
            if row is None:
                raise ResourceNotFoundError("User", user_id)
            check_is_member(user_id, row.group_id, group_id)

            # Serialization point for this group until commit/rollback
            await self.db.execute(
                select(Group.id).where(Group.id == group_id).with_for_update(),
            )

            detached = await self.db.execute(
                update(User)
                .where(User.id == user_id, User.group_id == group_id)
                .values(group_id=None)
                .execution_options(synchronize_session=False),
            )
            if detached.rowcount == 0:
                raise MembershipConflictError(user_id, group_id)

            remaining = await self.db.scalar(
                select(func.count()).select_from(User).where(User.group_id == group_id),
            )
            new_status = status_after_removal(remaining or 0)
            if new_status is not None:
                await self.db.execute(
                    update(Group)
                    .where(Group.id == group_id)
                    .values(status=new_status)
                    .execution_options(synchronize_session=False),
                )

        logger.info(
            f"User {user_id} removed from group {group_id} ({remaining} remaining)",
            extra={"group_id": group_id, "user_id": user_id},
        )
        await invalidate_list_caches(self.cache)
