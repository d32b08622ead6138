"""Tests for sort key resolution and page arithmetic."""

from __future__ import annotations

import pytest

from dealership.domain.paging import (
    MAX_LIMIT,
    NEWEST_FIRST,
    Ordering,
    PagingValidationError,
    SortField,
    resolve_page,
    total_pages,
)


@pytest.mark.parametrize(
    ("sort_by", "expected"),
    [
        (None, Ordering(SortField.CREATED_AT, descending=True)),
        ("newest", Ordering(SortField.CREATED_AT, descending=True)),
        ("priceAsc", Ordering(SortField.PRICE, descending=False)),
        ("priceDesc", Ordering(SortField.PRICE, descending=True)),
    ],
)
def test_resolves_sort_keys(sort_by: str | None, expected: Ordering) -> None:
    assert resolve_page(sort_by).ordering == expected


def test_newest_first_constant_matches_default() -> None:
    assert resolve_page().ordering == NEWEST_FIRST


def test_unknown_sort_key_is_rejected() -> None:
    with pytest.raises(PagingValidationError) as exc_info:
        resolve_page("cheapest")

    assert exc_info.value.errors is not None
    assert exc_info.value.errors[0]["code"] == "INVALID_SORT_KEY"


@pytest.mark.parametrize(("page", "limit", "offset"), [(1, 6, 0), (2, 6, 6), (3, 10, 20)])
def test_offset_is_page_minus_one_times_limit(page: int, limit: int, offset: int) -> None:
    assert resolve_page("newest", page, limit).offset == offset


def test_page_below_one_is_rejected() -> None:
    with pytest.raises(PagingValidationError, match="page"):
        resolve_page("newest", 0, 6)


@pytest.mark.parametrize("limit", [0, -1, MAX_LIMIT + 1])
def test_limit_out_of_range_is_rejected(limit: int) -> None:
    with pytest.raises(PagingValidationError, match="limit"):
        resolve_page("newest", 1, limit)


def test_limit_at_max_is_accepted() -> None:
    assert resolve_page("newest", 1, MAX_LIMIT).limit == MAX_LIMIT


@pytest.mark.parametrize(
    ("total", "limit", "pages"),
    [(0, 6, 0), (1, 6, 1), (6, 6, 1), (7, 6, 2), (3, 2, 2)],
)
def test_total_pages_rounds_up(total: int, limit: int, pages: int) -> None:
    assert total_pages(total, limit) == pages
