"""Tests for Settings — defaults and database URL normalization."""

from roster.config import Settings


def test_postgres_url_is_rewritten_for_asyncpg():
    s = Settings(database_url="postgresql://u:p@host:5432/roster")
    assert s.database_url == "postgresql+asyncpg://u:p@host:5432/roster"


def test_other_urls_pass_through():
    s = Settings(database_url="sqlite+aiosqlite:///./dev.db")
    assert s.database_url == "sqlite+aiosqlite:///./dev.db"


def test_rate_limit_defaults(monkeypatch):
    for name in (
        "RATE_LIMIT_SHORT_LIMIT", "RATE_LIMIT_LONG_LIMIT",
        "BULK_RATE_LIMIT_SHORT_LIMIT", "BULK_RATE_LIMIT_LONG_LIMIT",
    ):
        monkeypatch.delenv(name, raising=False)
    s = Settings()
    assert (s.rate_limit_short_limit, s.rate_limit_short_window_seconds) == (10, 1)
    assert (s.rate_limit_long_limit, s.rate_limit_long_window_seconds) == (100, 60)
    assert (s.bulk_rate_limit_short_limit, s.bulk_rate_limit_long_limit) == (5, 20)


def test_cache_ttl_default(monkeypatch):
    monkeypatch.delenv("CACHE_TTL_SECONDS", raising=False)
    assert Settings().cache_ttl_seconds == 30
