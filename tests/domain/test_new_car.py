"""Tests for inventory-entry validation."""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal

import pytest

from dealership.domain.car import CarStatus, NewCar, parse_car_status
from dealership.domain.errors import ValidationError

VALID = NewCar(
    make="Toyota",
    model="Corolla",
    year=2021,
    price=Decimal("21000.00"),
    images=("https://cdn.example/cars/1/front.jpg",),
    mileage=12000,
    seats=5,
)


def _fields(exc_info: pytest.ExceptionInfo[ValidationError]) -> set[str]:
    return {error["field"] for error in exc_info.value.errors}


def test_valid_entry_passes() -> None:
    VALID.validate()


def test_zero_price_and_mileage_are_allowed() -> None:
    replace(VALID, price=Decimal("0"), mileage=0).validate()


@pytest.mark.parametrize(
    "changes, field",
    [
        ({"price": Decimal("-0.01")}, "price"),
        ({"price": Decimal("NaN")}, "price"),
        ({"mileage": -1}, "mileage"),
        ({"seats": 0}, "seats"),
        ({"status": "RESERVED"}, "status"),
        ({"images": ()}, "images"),
        ({"images": ("data:image/png;base64,AAAA",)}, "images"),
        ({"make": "  "}, "make"),
    ],
)
def test_invalid_field_is_reported(changes: dict, field: str) -> None:
    with pytest.raises(ValidationError) as exc_info:
        replace(VALID, **changes).validate()

    assert _fields(exc_info) == {field}


def test_every_invalid_field_is_reported_at_once() -> None:
    with pytest.raises(ValidationError) as exc_info:
        replace(VALID, price=Decimal("-1"), mileage=-5, images=()).validate()

    assert _fields(exc_info) == {"price", "mileage", "images"}


def test_status_accepts_plain_strings() -> None:
    replace(VALID, status="SOLD").validate()

    assert parse_car_status("SOLD") is CarStatus.SOLD


def test_parse_unknown_status_raises_validation_error() -> None:
    with pytest.raises(ValidationError):
        parse_car_status("RESERVED")
