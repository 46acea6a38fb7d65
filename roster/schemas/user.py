"""User Schemas — user responses and the bulk status request with field-level validation.

Invariants:
    - BulkStatusUpdateRequest.updates: 1..500 entries, unknown fields rejected
    - ids are strict integers in 1..ID_MAX (no "5", no 5.5, no true)
    - status must be one of pending | active | blocked

Design Decisions:
    - Duplicate ids are NOT checked here: the service rejects them, so the rule
      holds for every caller, not only HTTP
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from roster.core.domain_types import BULK_UPDATE_MAX, ID_MAX, UserStatus
from roster.schemas.common import CamelModel


class UserResponse(CamelModel):
    """User response — public-facing account data."""
    id: int
    username: str
    status: UserStatus
    group_id: int | None
    created_at: datetime
    updated_at: datetime


class StatusUpdate(BaseModel):
    """One (id, target status) pair."""
    model_config = ConfigDict(extra="forbid")

    id: StrictInt = Field(ge=1, le=ID_MAX)
    status: UserStatus


class BulkStatusUpdateRequest(BaseModel):
    """PATCH /users/statuses body."""
    model_config = ConfigDict(extra="forbid")

    updates: list[StatusUpdate] = Field(min_length=1, max_length=BULK_UPDATE_MAX)


class BulkStatusUpdateResponse(BaseModel):
    updated: int
