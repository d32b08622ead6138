from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from dealership.domain.car import PriceRange
from dealership.domain.search import CarPredicate
from dealership.ports.car_catalog_repository import CarCatalogRepository


@dataclass(frozen=True, slots=True)
class CatalogFacets:
    makes: list[str]
    body_types: list[str]
    fuel_types: list[str]
    transmissions: list[str]
    price_range: PriceRange


class GetCatalogFacets:
    """Values the search form can offer, drawn from currently available cars."""

    def __init__(self, car_catalog_repository: CarCatalogRepository) -> None:
        self._cars = car_catalog_repository

    def execute(self) -> CatalogFacets:
        available = CarPredicate()
        price_range = self._cars.aggregate_price_range(available) or PriceRange(
            min=Decimal("0"), max=Decimal("0")
        )
        return CatalogFacets(
            makes=self._cars.distinct_values("make", available),
            body_types=self._cars.distinct_values("body_type", available),
            fuel_types=self._cars.distinct_values("fuel_type", available),
            transmissions=self._cars.distinct_values("transmission", available),
            price_range=price_range,
        )
