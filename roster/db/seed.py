"""Reference Seed — the 5-group / 12-user dataset used in development and tests.

Invariants:
    - Seeded group statuses match membership (HR is the only group with no members)
    - On an empty database ids come out as 1..5 (groups) and 1..12 (users)

Design Decisions:
    - ORM inserts without explicit ids: keeps PostgreSQL sequences in step
    - Runnable as `python -m roster.db.seed` against DATABASE_URL
"""

import asyncio
import logging

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from roster.core.domain_types import GroupStatus, UserStatus
from roster.models.group import Group
from roster.models.user import User

logger = logging.getLogger(__name__)

SEED_GROUPS: list[tuple[str, GroupStatus]] = [
    ("Engineering", GroupStatus.NOT_EMPTY),
    ("Marketing", GroupStatus.NOT_EMPTY),
    ("Sales", GroupStatus.NOT_EMPTY),
    ("HR", GroupStatus.EMPTY),
    ("Finance", GroupStatus.NOT_EMPTY),
]

# (username, status, index into SEED_GROUPS or None)
SEED_USERS: list[tuple[str, UserStatus, int | None]] = [
    ("alice", UserStatus.ACTIVE, 0),
    ("bob", UserStatus.ACTIVE, 0),
    ("charlie", UserStatus.PENDING, 0),
    ("david", UserStatus.ACTIVE, 1),
    ("eve", UserStatus.BLOCKED, 1),
    ("frank", UserStatus.ACTIVE, 2),
    ("grace", UserStatus.PENDING, 2),
    ("henry", UserStatus.ACTIVE, 2),
    ("ivy", UserStatus.ACTIVE, 4),
    ("jack", UserStatus.PENDING, None),
    ("karen", UserStatus.ACTIVE, None),
    ("leo", UserStatus.BLOCKED, None),
]


async def seed_reference_data(db: AsyncSession) -> tuple[list[Group], list[User]]:
    """Replace all rows with the reference dataset and commit."""
    await db.execute(delete(User))
    await db.execute(delete(Group))

    groups = [Group(name=name, status=status) for name, status in SEED_GROUPS]
    for group in groups:
        db.add(group)
        await db.flush()

    users = []
    for username, status, group_index in SEED_USERS:
        group_id = groups[group_index].id if group_index is not None else None
        user = User(username=username, status=status, group_id=group_id)
        db.add(user)
        await db.flush()
        users.append(user)

    await db.commit()
    logger.info(f"Seed completed: {len(groups)} groups, {len(users)} users")
    return groups, users


async def _main() -> None:
    from roster.config import get_settings
    from roster.db.session import create_session_factory
    from roster.infrastructure.observability import setup_logging

    settings = get_settings()
    setup_logging(settings.log_level, "text")
    engine, session_factory = create_session_factory(settings.database_url)
    try:
        async with session_factory() as db:
            await seed_reference_data(db)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(_main())
