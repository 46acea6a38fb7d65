"""User ORM — persists an account, its status and optional group membership.

Invariants:
    - id is a serial integer primary key (monotonic, never reused)
    - group_id is nullable: a user belongs to 0..1 groups
    - status is only written by the bulk status transaction (and seeding)
    - created_at / updated_at are system-maintained, never client-settable

Design Decisions:
    - username is opaque text: no normalization, any unicode accepted
    - updated_at uses onupdate: bulk Core UPDATE statements bump it too
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from roster.core.domain_types import UserStatus
from roster.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """User entity — an account optionally attached to one Group."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[UserStatus] = mapped_column(
        SAEnum(
            UserStatus, name="user_status",
            values_callable=lambda enum: [m.value for m in enum],
        ),
        nullable=False,
        default=UserStatus.PENDING,
        index=True,
    )
    group_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("groups.id"), nullable=True, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )
