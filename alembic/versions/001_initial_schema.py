"""Initial schema — groups, users, status enums and lookup indexes.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_status = postgresql.ENUM(
    "pending", "active", "blocked", name="user_status", create_type=False,
)
group_status = postgresql.ENUM(
    "empty", "notEmpty", name="group_status", create_type=False,
)


def upgrade() -> None:
    bind = op.get_bind()
    user_status.create(bind, checkfirst=True)
    group_status.create(bind, checkfirst=True)

    op.create_table(
        "groups",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("status", group_status, nullable=False, server_default="empty"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("status", user_status, nullable=False, server_default="pending"),
        sa.Column("group_id", sa.Integer, sa.ForeignKey("groups.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_index("ix_users_group_id", "users", ["group_id"])
    op.create_index("ix_users_status", "users", ["status"])
    op.create_index("ix_groups_status", "groups", ["status"])


def downgrade() -> None:
    op.drop_index("ix_groups_status", table_name="groups")
    op.drop_index("ix_users_status", table_name="users")
    op.drop_index("ix_users_group_id", table_name="users")
    op.drop_table("users")
    op.drop_table("groups")
    bind = op.get_bind()
    group_status.drop(bind, checkfirst=True)
    user_status.drop(bind, checkfirst=True)
