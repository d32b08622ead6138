from __future__ import annotations

from dataclasses import dataclass

from dealership.domain.car import Car, CarStatus
from dealership.domain.paging import NEWEST_FIRST, PagingValidationError
from dealership.domain.search import CarPredicate
from dealership.ports.car_catalog_repository import CarCatalogRepository


@dataclass(frozen=True, slots=True)
class GetFeaturedCarsRequest:
    limit: int = 3


@dataclass(frozen=True, slots=True)
class GetFeaturedCarsResponse:
    cars: list[Car]


class GetFeaturedCars:
    """Newest available cars flagged as featured, for the landing page."""

    def __init__(self, car_catalog_repository: CarCatalogRepository) -> None:
        self._cars = car_catalog_repository

    def execute(self, request: GetFeaturedCarsRequest) -> GetFeaturedCarsResponse:
        if request.limit <= 0:
            raise PagingValidationError("limit must be > 0", field="limit")

        cars = self._cars.list_cars(
            predicate=CarPredicate(status=CarStatus.AVAILABLE, featured=True),
            ordering=NEWEST_FIRST,
            offset=0,
            limit=request.limit,
        )
        return GetFeaturedCarsResponse(cars=cars)
