"""Bulk Status — pure checks and grouping for the bulk status transaction.

Invariants:
    - Duplicate detection looks only at the request's own list (no storage access)
    - Missing ids are reported in request order, every one of them
    - partition_by_status yields at most one id list per distinct status (<= 3)

Design Decisions:
    - One UPDATE per distinct target status bounds write statements by the
      size of the status enum, not by request size
    - Two concurrent requests overlapping on ids are NOT serialized here; storage
      transaction ordering decides the outcome (documented behavior)
"""

from collections import Counter
from typing import Iterable, Sequence

from roster.core.domain_types import UserId, UserStatus


def find_duplicate_ids(ids: Sequence[UserId]) -> list[UserId]:
    """Ids appearing more than once, in first-seen order."""
    counts = Counter(ids)
    seen: set[UserId] = set()
    duplicates = []
    for user_id in ids:
        if counts[user_id] > 1 and user_id not in seen:
            duplicates.append(user_id)
            seen.add(user_id)
    return duplicates


def find_missing_ids(
    requested: Sequence[UserId], existing: Iterable[UserId],
) -> list[UserId]:
    """Requested ids absent from `existing`, in request order."""
    found = set(existing)
    return [user_id for user_id in requested if user_id not in found]


def partition_by_status(
    updates: Iterable[tuple[UserId, UserStatus]],
) -> dict[UserStatus, list[UserId]]:
    """Group (id, status) pairs into {status: [ids]} preserving request order."""
    by_status: dict[UserStatus, list[UserId]] = {}
    for user_id, status in updates:
        by_status.setdefault(status, []).append(user_id)
    return by_status
