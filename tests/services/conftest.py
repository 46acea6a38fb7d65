"""Service test fixtures — file-backed SQLite DB, fake Redis cache, FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite database seeded with the reference dataset
    - get_db and get_cache dependencies overridden to use the test DB and fake Redis
    - db_manager patched so the readiness probe sees the test engine
    - Rate limiting stays disabled unless a test installs its own limiter

Design Decisions:
    - File-backed SQLite over :memory: each session gets its own connection, so
      concurrent transactions really contend (in-memory would share one connection)
    - Assertions read through fresh sessions: never trust an identity map that
      saw the row before the request committed
"""

import pytest
from fakeredis.aioredis import FakeRedis
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from roster.core.domain_types import GroupStatus
from roster.db.base import Base
from roster.db.seed import seed_reference_data
from roster.infrastructure.cache import ListCache, get_cache
from roster.infrastructure.database import get_db, DatabaseSessionManager
import roster.infrastructure.database as db_module
import roster.models  # noqa: F401
from roster.models.group import Group
from roster.models.user import User
from roster.main import app


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'roster_test.db'}", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def seeded(test_session_factory):
    """Reference dataset: groups 1..5 (HR=4 empty), users 1..12 (10..12 groupless)."""
    async with test_session_factory() as db:
        groups, users = await seed_reference_data(db)
    return {"groups": groups, "users": users}


@pytest.fixture
async def fake_redis():
    client = FakeRedis(decode_responses=True)
    yield client
    await client.flushall()
    await client.aclose()


@pytest.fixture
def cache(fake_redis):
    return ListCache(fake_redis)


@pytest.fixture
async def client(test_engine, test_session_factory, cache):
    """FastAPI test client with DB and cache dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache] = lambda: cache

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


# ─── Read helpers (fresh session per read) ──────────────────────

@pytest.fixture
def read_user(test_session_factory):
    async def _read(user_id: int) -> User | None:
        async with test_session_factory() as db:
            return await db.get(User, user_id)
    return _read


@pytest.fixture
def read_group(test_session_factory):
    async def _read(group_id: int) -> Group | None:
        async with test_session_factory() as db:
            return await db.get(Group, group_id)
    return _read


@pytest.fixture
def assert_emptiness_invariant(test_session_factory):
    """Check status == EMPTY iff member count == 0, for every group."""
    async def _check() -> None:
        async with test_session_factory() as db:
            counts = dict((await db.execute(
                select(User.group_id, func.count())
                .where(User.group_id.is_not(None))
                .group_by(User.group_id),
            )).all())
            groups = (await db.execute(select(Group))).scalars().all()
        for group in groups:
            members = counts.get(group.id, 0)
            assert (group.status == GroupStatus.EMPTY) == (members == 0), (
                f"group {group.id} status={group.status.value} members={members}"
            )
    return _check
