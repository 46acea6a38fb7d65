"""Membership Removal — verifies detach, emptiness flag restoration, and error precedence.

Invariants:
    - status stays NOT_EMPTY until the last member leaves, then becomes EMPTY
    - Removing an already-removed member is CONFLICT (not idempotent)
    - Group missing → 404, user missing → 404, user in another/no group → 409
    - Concurrent removal of the last two members ends EMPTY with both detached
    - Failed removals change nothing

Design Decisions:
    - Concurrency test drives GroupService directly with two independent sessions;
      the HTTP layer adds nothing to the race
"""

import asyncio

import pytest

from roster.core.domain_types import GroupStatus
from roster.services.groups import GroupService


async def test_remove_returns_204_and_detaches_user(client, seeded, read_user):
    res = await client.delete("/api/v1/groups/1/users/1")
    assert res.status_code == 204
    assert res.content == b""
    user = await read_user(1)
    assert user.group_id is None


async def test_three_member_group_empties_only_after_last_removal(
    client, seeded, read_group, assert_emptiness_invariant,
):
    """Engineering (group 1) has alice, bob, charlie (users 1, 2, 3)."""
    for user_id, expected in (
        (1, GroupStatus.NOT_EMPTY),
        (2, GroupStatus.NOT_EMPTY),
        (3, GroupStatus.EMPTY),
    ):
        res = await client.delete(f"/api/v1/groups/1/users/{user_id}")
        assert res.status_code == 204
        group = await read_group(1)
        assert group.status == expected
        await assert_emptiness_invariant()


async def test_removing_same_member_twice_is_conflict(client, seeded):
    first = await client.delete("/api/v1/groups/1/users/1")
    assert first.status_code == 204

    second = await client.delete("/api/v1/groups/1/users/1")
    assert second.status_code == 409
    assert second.json()["error"]["code"] == "CONFLICT"


async def test_user_in_other_group_is_conflict_not_not_found(client, seeded, read_user):
    """alice (user 1) belongs to Engineering (1), request names Marketing (2)."""
    res = await client.delete("/api/v1/groups/2/users/1")
    assert res.status_code == 409
    body = res.json()
    assert body["error"]["code"] == "CONFLICT"
    assert "not a member of group 2" in body["error"]["message"]
    user = await read_user(1)
    assert user.group_id == 1


async def test_groupless_user_is_conflict(client, seeded):
    """jack (user 10) has no group."""
    res = await client.delete("/api/v1/groups/1/users/10")
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "CONFLICT"


async def test_missing_group_is_not_found(client, seeded):
    res = await client.delete("/api/v1/groups/999/users/1")
    assert res.status_code == 404
    body = res.json()
    assert body["error"]["code"] == "NOT_FOUND"
    assert "Group" in body["error"]["message"]


async def test_missing_user_is_not_found(client, seeded):
    res = await client.delete("/api/v1/groups/1/users/999")
    assert res.status_code == 404
    body = res.json()
    assert body["error"]["code"] == "NOT_FOUND"
    assert "User" in body["error"]["message"]


async def test_missing_group_checked_before_missing_user(client, seeded):
    res = await client.delete("/api/v1/groups/999/users/999")
    assert res.status_code == 404
    assert "Group" in res.json()["error"]["message"]


async def test_non_integer_path_ids_are_validation_errors(client, seeded):
    res = await client.delete("/api/v1/groups/abc/users/1")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_single_member_group_becomes_empty(client, seeded, read_group):
    """Finance (group 5) has only ivy (user 9)."""
    res = await client.delete("/api/v1/groups/5/users/9")
    assert res.status_code == 204
    group = await read_group(5)
    assert group.status == GroupStatus.EMPTY


async def test_removal_leaves_other_groups_untouched(client, seeded, read_group):
    await client.delete("/api/v1/groups/5/users/9")
    for group_id in (1, 2, 3):
        group = await read_group(group_id)
        assert group.status == GroupStatus.NOT_EMPTY
    hr = await read_group(4)
    assert hr.status == GroupStatus.EMPTY


async def test_removal_bumps_user_updated_at(client, seeded, read_user):
    before = await read_user(6)
    await client.delete("/api/v1/groups/3/users/6")
    after = await read_user(6)
    assert after.updated_at >= before.updated_at


async def test_concurrent_removal_of_last_two_members(
    test_session_factory, cache, seeded, read_group, read_user,
    assert_emptiness_invariant,
):
    """Marketing (group 2) has exactly david (4) and eve (5)."""
    async def remove(user_id: int) -> None:
        async with test_session_factory() as db:
            await GroupService(db, cache).remove_user(2, user_id)

    await asyncio.gather(remove(4), remove(5))

    group = await read_group(2)
    assert group.status == GroupStatus.EMPTY
    assert (await read_user(4)).group_id is None
    assert (await read_user(5)).group_id is None
    await assert_emptiness_invariant()


async def test_concurrent_removals_across_whole_group(
    test_session_factory, cache, seeded, read_group, assert_emptiness_invariant,
):
    """Sales (group 3) has frank, grace, henry (6, 7, 8)."""
    async def remove(user_id: int) -> None:
        async with test_session_factory() as db:
            await GroupService(db, cache).remove_user(3, user_id)

    await asyncio.gather(remove(6), remove(7), remove(8))

    group = await read_group(3)
    assert group.status == GroupStatus.EMPTY
    await assert_emptiness_invariant()


@pytest.mark.parametrize("path", [
    "/api/v1/groups/99999999999999999999/users/1",
    "/api/v1/groups/1/users/2147483648",
    "/api/v1/groups/0/users/1",
    "/api/v1/groups/1/users/-3",
])
async def test_out_of_range_path_ids_are_validation_errors(
    client, seeded, read_user, path,
):
    res = await client.delete(path)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    assert (await read_user(1)).group_id == 1


async def test_largest_storable_id_is_plain_not_found(client, seeded):
    res = await client.delete("/api/v1/groups/2147483647/users/1")
    assert res.status_code == 404
