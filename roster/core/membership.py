"""Membership — pure rules for detaching a user from a group.

Invariants:
    - A user may only be removed from the group its group_id names
    - Removal only ever moves a group toward EMPTY, never back to NOT_EMPTY
    - EMPTY is chosen iff the live member count after the detach is zero

Design Decisions:
    - "Belongs to another group" and "belongs to no group" are the same CONFLICT:
      both mean user.group_id != group_id
"""

from roster.core.domain_types import GroupId, GroupStatus, UserId
from roster.core.errors import MembershipConflictError


def check_is_member(
    user_id: UserId, user_group_id: GroupId | None, group_id: GroupId,
) -> None:
    """Raise MembershipConflictError unless the user currently belongs to group_id."""
    if user_group_id != group_id:
        raise MembershipConflictError(user_id, group_id)


def status_after_removal(remaining_members: int) -> GroupStatus | None:
    """New group status after a detach, or None to leave it unchanged."""
    if remaining_members == 0:
        return GroupStatus.EMPTY
    return None
