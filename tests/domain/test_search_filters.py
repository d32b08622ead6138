"""Tests for SearchFilters validation and the facet filter compiler."""

from __future__ import annotations

from decimal import Decimal

import pytest

from dealership.domain.car import CarStatus
from dealership.domain.search import (
    CarPredicate,
    FilterValidationError,
    SearchFilters,
    compile_filters,
)


# ==============================================================================
# Validation
# ==============================================================================


def test_default_filters_are_valid() -> None:
    SearchFilters().validate()


def test_max_below_min_is_not_an_error() -> None:
    SearchFilters(min_price=Decimal("20000"), max_price=Decimal("10000")).validate()


@pytest.mark.parametrize("field", ["min_price", "max_price"])
def test_rejects_float_prices(field: str) -> None:
    with pytest.raises(FilterValidationError) as exc_info:
        SearchFilters(**{field: 100.0}).validate()  # type: ignore[arg-type]

    assert exc_info.value.context["field"] == field


@pytest.mark.parametrize("field", ["min_price", "max_price"])
def test_rejects_negative_prices(field: str) -> None:
    with pytest.raises(FilterValidationError, match=">= 0"):
        SearchFilters(**{field: Decimal("-1")}).validate()


def test_rejects_nan_price() -> None:
    with pytest.raises(FilterValidationError, match="number"):
        SearchFilters(max_price=Decimal("NaN")).validate()


def test_rejects_infinite_min_price() -> None:
    with pytest.raises(FilterValidationError, match="finite"):
        SearchFilters(min_price=Decimal("Infinity")).validate()


def test_accepts_infinite_max_price() -> None:
    SearchFilters(max_price=Decimal("Infinity")).validate()


# ==============================================================================
# Compilation
# ==============================================================================


def test_empty_filters_compile_to_available_cars_from_zero() -> None:
    predicate = compile_filters(SearchFilters())

    assert predicate == CarPredicate(status=CarStatus.AVAILABLE, price_min=Decimal("0"))


def test_blank_facets_are_dropped() -> None:
    predicate = compile_filters(
        SearchFilters(search="   ", make="", body_type=" ", fuel_type="\t", transmission="")
    )

    assert predicate.text is None
    assert predicate.make is None
    assert predicate.body_type is None
    assert predicate.fuel_type is None
    assert predicate.transmission is None


def test_facet_values_are_trimmed() -> None:
    predicate = compile_filters(SearchFilters(make="  Toyota ", search=" red "))

    assert predicate.make == "Toyota"
    assert predicate.text == "red"


def test_price_bounds_pass_through() -> None:
    predicate = compile_filters(
        SearchFilters(min_price=Decimal("10000"), max_price=Decimal("20000"))
    )

    assert predicate.price_min == Decimal("10000")
    assert predicate.price_max == Decimal("20000")


def test_infinite_max_price_means_unbounded() -> None:
    predicate = compile_filters(SearchFilters(max_price=Decimal("Infinity")))

    assert predicate.price_max is None


def test_status_constraint_is_always_present() -> None:
    assert compile_filters(SearchFilters(make="Ford")).status is CarStatus.AVAILABLE
