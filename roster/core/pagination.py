"""Pagination — pure parameter checks and page-shaping for offset and cursor listings.

Invariants:
    - Both strategies order by ascending id; nothing here reorders rows
    - limit is 1..100; offset >= 0; cursor, when given, >= 1 (never clamped)
    - Cursor pages are fetched with limit + 1 rows; the extra row only signals hasNext
    - next_cursor is the id of the last *returned* row, or None when exhausted

Design Decisions:
    - Keyset cursor (id > cursor) over positional skip: cost per page is O(limit)
      regardless of position, and deleted ids leave no hole in the sequence
    - Rows are generic (anything with an `id`)
"""

from dataclasses import dataclass
from typing import Generic, Protocol, Sequence, TypeVar

from roster.core.domain_types import PAGE_LIMIT_MAX, PAGE_LIMIT_MIN
from roster.core.errors import RequestValidationFailed


class HasId(Protocol):
    id: int


RowT = TypeVar("RowT", bound=HasId)


@dataclass(frozen=True)
class CursorPage(Generic[RowT]):
    rows: list[RowT]
    next_cursor: int | None
    has_next: bool


def check_page_params(
    limit: int, offset: int | None = None, cursor: int | None = None,
) -> None:
    """Raise RequestValidationFailed for out-of-range paging input."""
    if not PAGE_LIMIT_MIN <= limit <= PAGE_LIMIT_MAX:
        raise RequestValidationFailed(
            f"limit must be between {PAGE_LIMIT_MIN} and {PAGE_LIMIT_MAX}", "limit",
        )
    if offset is not None and offset < 0:
        raise RequestValidationFailed("offset must not be less than 0", "offset")
    if cursor is not None and cursor < 1:
        raise RequestValidationFailed("cursor must not be less than 1", "cursor")


def cursor_fetch_size(limit: int) -> int:
    """Rows to request from the store for a cursor page of `limit`."""
    return limit + 1


def slice_cursor_page(fetched: Sequence[RowT], limit: int) -> CursorPage[RowT]:
    """Trim a limit+1 fetch into a page. Pure, no IO."""
    has_next = len(fetched) > limit
    rows = list(fetched[:limit])
    next_cursor = rows[-1].id if has_next else None
    return CursorPage(rows=rows, next_cursor=next_cursor, has_next=has_next)
