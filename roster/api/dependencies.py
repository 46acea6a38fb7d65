"""Route Dependencies — service factories wired to the DB session and list cache."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from roster.config import get_settings
from roster.core.repository_protocols import ListCacheLike
from roster.infrastructure.cache import get_cache
from roster.infrastructure.database import get_db
from roster.services.groups import GroupService
from roster.services.users import UserService


def get_user_service(
    db: AsyncSession = Depends(get_db),
    cache: ListCacheLike = Depends(get_cache),
) -> UserService:
    return UserService(db, cache, get_settings().cache_ttl_seconds)


def get_group_service(
    db: AsyncSession = Depends(get_db),
    cache: ListCacheLike = Depends(get_cache),
) -> GroupService:
    return GroupService(db, cache, get_settings().cache_ttl_seconds)
