"""Users Routes — offset listing, cursor listing, and bulk status updates.

Invariants:
    - limit 1..100 (default 20), offset 0..ID_MAX (default 0), cursor 1..ID_MAX when present
    - Non-integer query values are rejected as VALIDATION_ERROR (400)
    - PATCH /statuses carries the stricter bulk rate limit on top of the default one

Design Decisions:
    - /cursor declared before any /{id}-style route so it is never captured
"""

from fastapi import APIRouter, Depends, Query

from roster.api.dependencies import get_user_service
from roster.core.domain_types import (
    UserId, ID_MAX, PAGE_LIMIT_DEFAULT, PAGE_LIMIT_MAX, PAGE_LIMIT_MIN,
)
from roster.infrastructure.rate_limit import enforce_rate_limit
from roster.schemas.common import CursorPageResponse, OffsetPageResponse
from roster.schemas.user import (
    BulkStatusUpdateRequest, BulkStatusUpdateResponse, UserResponse,
)
from roster.services.users import UserService

router = APIRouter(
    prefix="/api/v1/users", tags=["users"],
    dependencies=[Depends(enforce_rate_limit("default"))],
)


@router.get("", response_model=OffsetPageResponse[UserResponse])
async def list_users(
    limit: int = Query(PAGE_LIMIT_DEFAULT, ge=PAGE_LIMIT_MIN, le=PAGE_LIMIT_MAX),
    offset: int = Query(0, ge=0, le=ID_MAX),
    service: UserService = Depends(get_user_service),
):
    """List users ordered by id with offset pagination."""
    return await service.list_offset(limit, offset)


@router.get("/cursor", response_model=CursorPageResponse[UserResponse])
async def list_users_cursor(
    cursor: int | None = Query(None, ge=1, le=ID_MAX),
    limit: int = Query(PAGE_LIMIT_DEFAULT, ge=PAGE_LIMIT_MIN, le=PAGE_LIMIT_MAX),
    service: UserService = Depends(get_user_service),
):
    """List users with id > cursor (keyset pagination)."""
    return await service.list_cursor(cursor, limit)


@router.patch(
    "/statuses",
    response_model=BulkStatusUpdateResponse,
    dependencies=[Depends(enforce_rate_limit("bulk"))],
)
async def bulk_update_statuses(
    body: BulkStatusUpdateRequest,
    service: UserService = Depends(get_user_service),
):
    """Atomically set the status of up to 500 users."""
    updated = await service.bulk_update_statuses(
        [(UserId(u.id), u.status) for u in body.updates],
    )
    return BulkStatusUpdateResponse(updated=updated)
