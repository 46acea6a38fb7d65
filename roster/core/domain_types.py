"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, GroupId wrap ints — identities are monotonically assigned, never reused
    - UserStatus and GroupStatus are closed: no raw string matching in domain logic
    - GroupStatus.EMPTY iff the group has zero members (enforced by membership removal)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders, and the values are
      exactly the DB enum labels (note camelCase "notEmpty")
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
GroupId = NewType("GroupId", int)


# ─── Enums ───────────────────────────────────────────────────────

class UserStatus(str, Enum):
    """Account lifecycle status — maps to DB enum `user_status`."""
    PENDING = "pending"
    ACTIVE = "active"
    BLOCKED = "blocked"


class GroupStatus(str, Enum):
    """Group emptiness flag — maps to DB enum `group_status`."""
    EMPTY = "empty"
    NOT_EMPTY = "notEmpty"


# ─── Limits ──────────────────────────────────────────────────────

PAGE_LIMIT_MIN = 1
PAGE_LIMIT_MAX = 100
PAGE_LIMIT_DEFAULT = 20
BULK_UPDATE_MAX = 500

# Identity columns are 32-bit INTEGER
ID_MAX = 2_147_483_647
