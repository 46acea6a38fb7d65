"""Group ORM — persists a membership group and its emptiness flag.

Invariants:
    - id is a serial integer primary key (monotonic, never reused)
    - status == EMPTY iff no users row references this group
    - status is only written by membership removal (and seeding)

Design Decisions:
    - No relationship() to users: member counts are always computed with an
      explicit COUNT inside the removal transaction, never from a loaded collection
    - Named DB enum `group_status` stores the enum *values* ("notEmpty")
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from roster.core.domain_types import GroupStatus
from roster.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Group(Base):
    """Group entity — owns 0..N users through users.group_id."""
    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[GroupStatus] = mapped_column(
        SAEnum(
            GroupStatus, name="group_status",
            values_callable=lambda enum: [m.value for m in enum],
        ),
        nullable=False,
        default=GroupStatus.EMPTY,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )
