"""Groups Routes — offset listing and membership removal.

Invariants:
    - DELETE /{group_id}/users/{user_id} returns 204 with no body on success
    - 404 when group or user is missing, 409 when the user is not in that group
    - Path ids outside 1..ID_MAX are VALIDATION_ERROR (400), never a storage fault
"""

from fastapi import APIRouter, Depends, Path, Query, Response, status

from roster.api.dependencies import get_group_service
from roster.core.domain_types import (
    GroupId, UserId, ID_MAX, PAGE_LIMIT_DEFAULT, PAGE_LIMIT_MAX, PAGE_LIMIT_MIN,
)
from roster.infrastructure.rate_limit import enforce_rate_limit
from roster.schemas.common import OffsetPageResponse
from roster.schemas.group import GroupResponse
from roster.services.groups import GroupService

router = APIRouter(
    prefix="/api/v1/groups", tags=["groups"],
    dependencies=[Depends(enforce_rate_limit("default"))],
)


@router.get("", response_model=OffsetPageResponse[GroupResponse])
async def list_groups(
    limit: int = Query(PAGE_LIMIT_DEFAULT, ge=PAGE_LIMIT_MIN, le=PAGE_LIMIT_MAX),
    offset: int = Query(0, ge=0, le=ID_MAX),
    service: GroupService = Depends(get_group_service),
):
    """List groups ordered by id with offset pagination."""
    return await service.list_offset(limit, offset)


@router.delete(
    "/{group_id}/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT,
)
async def remove_user_from_group(
    group_id: int = Path(ge=1, le=ID_MAX),
    user_id: int = Path(ge=1, le=ID_MAX),
    service: GroupService = Depends(get_group_service),
):
    """Remove a user from a group; marks the group empty when it was the last member."""
    await service.remove_user(GroupId(group_id), UserId(user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
