"""Database Infrastructure — async session factory, SQLAlchemy Base, reference seed.

Invariants:
    - Single async engine per process (initialized via init_db)
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL (ADR: native async, real row locks)
    - aiosqlite in tests (ADR: no external dependency; FOR UPDATE is omitted by the dialect)
"""
