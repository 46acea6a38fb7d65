"""Tests for membership rules — who may be detached, and the resulting group status."""

import pytest

from roster.core.domain_types import GroupStatus
from roster.core.errors import MembershipConflictError
from roster.core.membership import check_is_member, status_after_removal


def test_member_passes():
    check_is_member(user_id=1, user_group_id=3, group_id=3)


def test_member_of_other_group_conflicts():
    with pytest.raises(MembershipConflictError) as exc_info:
        check_is_member(user_id=1, user_group_id=2, group_id=3)
    assert exc_info.value.http_status == 409
    assert exc_info.value.message == "User 1 is not a member of group 3"


def test_groupless_user_conflicts():
    with pytest.raises(MembershipConflictError):
        check_is_member(user_id=10, user_group_id=None, group_id=1)


def test_last_member_leaving_empties_group():
    assert status_after_removal(0) == GroupStatus.EMPTY


@pytest.mark.parametrize("remaining", [1, 2, 50])
def test_remaining_members_leave_status_alone(remaining):
    assert status_after_removal(remaining) is None
