from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from dealership.domain.errors import ValidationError

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 6
MAX_LIMIT = 100


class PagingValidationError(ValidationError):
    """Raised when paging or sorting parameters are invalid."""

    pass


class SortKey(str, Enum):
    NEWEST = "newest"
    PRICE_ASC = "priceAsc"
    PRICE_DESC = "priceDesc"


class SortField(str, Enum):
    CREATED_AT = "created_at"
    PRICE = "price"


@dataclass(frozen=True, slots=True)
class Ordering:
    """Primary sort plus a fixed ascending ``id`` tiebreaker.

    The tiebreaker makes the ordering total, so consecutive pages partition
    the filtered set even when prices or timestamps collide.
    """

    field: SortField
    descending: bool


@dataclass(frozen=True, slots=True)
class PageWindow:
    ordering: Ordering
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


_ORDERINGS = {
    SortKey.NEWEST: Ordering(field=SortField.CREATED_AT, descending=True),
    SortKey.PRICE_ASC: Ordering(field=SortField.PRICE, descending=False),
    SortKey.PRICE_DESC: Ordering(field=SortField.PRICE, descending=True),
}

NEWEST_FIRST = _ORDERINGS[SortKey.NEWEST]


def resolve_page(
    sort_by: str | SortKey | None = None,
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
) -> PageWindow:
    """
    Resolve sort key and 1-based page number into ordering and offset.

    Raises:
        PagingValidationError: If sort key is unknown, page < 1, or limit is
            outside 1..MAX_LIMIT
    """
    try:
        key = SortKey(sort_by) if sort_by else SortKey.NEWEST
    except ValueError:
        raise PagingValidationError(
            errors=[
                {
                    "field": "sort_by",
                    "message": f"Must be one of {[k.value for k in SortKey]}",
                    "code": "INVALID_SORT_KEY",
                }
            ]
        )

    if page < 1:
        raise PagingValidationError("page must be >= 1", field="page")
    if limit <= 0:
        raise PagingValidationError("limit must be > 0", field="limit")
    if limit > MAX_LIMIT:
        raise PagingValidationError(f"limit must be <= {MAX_LIMIT}", field="limit")

    return PageWindow(ordering=_ORDERINGS[key], page=page, limit=limit)


def total_pages(total_count: int, limit: int) -> int:
    if limit <= 0:
        raise PagingValidationError("limit must be > 0", field="limit")
    return -(-total_count // limit)
