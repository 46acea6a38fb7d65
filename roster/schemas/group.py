"""Group Schemas — public-facing group data."""

from datetime import datetime

from roster.core.domain_types import GroupStatus
from roster.schemas.common import CamelModel


class GroupResponse(CamelModel):
    id: int
    name: str
    status: GroupStatus
    created_at: datetime
    updated_at: datetime
