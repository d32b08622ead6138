from __future__ import annotations

from dataclasses import dataclass

from dealership.domain.car import CatalogItem
from dealership.domain.identity import Identity, require_identity
from dealership.ports.car_catalog_repository import CarCatalogRepository
from dealership.ports.saved_car_repository import SavedCarRepository


@dataclass(frozen=True, slots=True)
class ListSavedCarsResponse:
    items: list[CatalogItem]


class ListSavedCars:
    def __init__(
        self,
        car_catalog_repository: CarCatalogRepository,
        saved_car_repository: SavedCarRepository,
    ) -> None:
        self._cars = car_catalog_repository
        self._saved = saved_car_repository

    def execute(self, caller: Identity | None) -> ListSavedCarsResponse:
        caller = require_identity(caller)
        car_ids = self._saved.list_car_ids(caller.user_id)
        cars = self._cars.get_many(car_ids) if car_ids else {}
        # Keep most-recently-saved order
        return ListSavedCarsResponse(
            items=[CatalogItem(car=cars[car_id], wishlisted=True) for car_id in car_ids if car_id in cars]
        )
