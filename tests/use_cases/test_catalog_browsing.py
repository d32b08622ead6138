"""Tests for GetFeaturedCars and GetCatalogFacets."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from dealership.adapters.in_memory_car_catalog_repository import InMemoryCarCatalogRepository
from dealership.domain.car import Car, CarStatus, PriceRange
from dealership.domain.paging import PagingValidationError
from dealership.use_cases.get_catalog_facets import GetCatalogFacets
from dealership.use_cases.get_featured_cars import GetFeaturedCars, GetFeaturedCarsRequest

BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _car(n: int, **overrides) -> Car:
    defaults = dict(
        id=f"00000000-0000-0000-0000-{n:012d}",
        make="Toyota",
        model="Corolla",
        year=2020,
        price=Decimal("20000"),
        created_at=BASE_TIME + timedelta(days=n),
    )
    defaults.update(overrides)
    return Car(**defaults)


# ==============================================================================
# Featured cars
# ==============================================================================


def test_featured_cars_are_newest_available_featured() -> None:
    cars = [
        _car(1, featured=True),
        _car(2, featured=True),
        _car(3, featured=False),
        _car(4, featured=True, status=CarStatus.SOLD),
        _car(5, featured=True),
        _car(6, featured=True),
    ]

    response = GetFeaturedCars(InMemoryCarCatalogRepository(cars)).execute(
        GetFeaturedCarsRequest()
    )

    assert [car.id for car in response.cars] == [cars[5].id, cars[4].id, cars[1].id]


def test_featured_cars_rejects_non_positive_limit() -> None:
    with pytest.raises(PagingValidationError):
        GetFeaturedCars(InMemoryCarCatalogRepository([])).execute(GetFeaturedCarsRequest(limit=0))


# ==============================================================================
# Facets
# ==============================================================================


def test_facets_come_from_available_cars_only() -> None:
    cars = [
        _car(1, make="Toyota", body_type="SUV", fuel_type="Hybrid", transmission="CVT"),
        _car(2, make="Honda", body_type="Sedan", fuel_type="Gasoline", price=Decimal("30000")),
        _car(3, make="BMW", body_type="Coupe", status=CarStatus.SOLD, price=Decimal("90000")),
        _car(4, make="Toyota", body_type="", price=Decimal("15000")),
    ]

    facets = GetCatalogFacets(InMemoryCarCatalogRepository(cars)).execute()

    assert facets.makes == ["Honda", "Toyota"]
    assert facets.body_types == ["SUV", "Sedan"]
    assert facets.fuel_types == ["Gasoline", "Hybrid"]
    assert facets.transmissions == ["CVT"]
    assert facets.price_range == PriceRange(min=Decimal("15000"), max=Decimal("30000"))


def test_facets_of_empty_inventory_have_zero_price_range() -> None:
    facets = GetCatalogFacets(InMemoryCarCatalogRepository([])).execute()

    assert facets.makes == []
    assert facets.price_range == PriceRange(min=Decimal("0"), max=Decimal("0"))
