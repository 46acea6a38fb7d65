"""ORM Models — SQLAlchemy declarative models for users and groups.

Invariants:
    - All models inherit from Base (db/base.py)
    - users.group_id references groups.id

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
      or alembic autogenerate runs
"""

from roster.models.group import Group  # noqa: F401
from roster.models.user import User  # noqa: F401
