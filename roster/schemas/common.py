"""Common Schemas — camelCase base model and pagination envelopes.

Invariants:
    - Offset envelope: {data, meta: {limit, offset, total}}
    - Cursor envelope: {data, meta: {nextCursor, hasNext}}; nextCursor is null iff hasNext is false

Design Decisions:
    - alias_generator=to_camel + populate_by_name: Python code uses snake_case,
      the wire uses camelCase, and cached JSON validates straight back into models
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for response models serialized with camelCase keys."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )


class OffsetMeta(CamelModel):
    limit: int
    offset: int
    total: int


class OffsetPageResponse(CamelModel, Generic[T]):
    data: list[T]
    meta: OffsetMeta


class CursorMeta(CamelModel):
    next_cursor: int | None
    has_next: bool


class CursorPageResponse(CamelModel, Generic[T]):
    data: list[T]
    meta: CursorMeta
