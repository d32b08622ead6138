from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from dealership.domain import views
from dealership.domain.car import Car, NewCar, parse_car_status
from dealership.domain.identity import Identity, require_admin
from dealership.ports.cache_invalidator import CacheInvalidator
from dealership.ports.car_catalog_repository import CarCatalogRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AddCarRequest:
    caller: Identity | None
    car: NewCar


@dataclass(frozen=True, slots=True)
class AddCarResponse:
    car: Car


class AddCar:
    """
    Admin inventory entry.

    Pictures are uploaded to object storage before this runs; the request
    carries their public URLs only.
    """

    def __init__(
        self,
        car_catalog_repository: CarCatalogRepository,
        cache_invalidator: CacheInvalidator,
    ) -> None:
        self._cars = car_catalog_repository
        self._invalidator = cache_invalidator

    def execute(self, request: AddCarRequest) -> AddCarResponse:
        """
        Raises:
            UnauthorizedError / ForbiddenError: If the caller is not an admin
            ValidationError: If any field of the entry is invalid
        """
        require_admin(request.caller)
        request.car.validate()

        new_car = replace(request.car, status=parse_car_status(request.car.status))
        car = self._cars.create(new_car)

        logger.info(
            "Car added to inventory",
            extra={"car_id": car.id, "status": car.status.value, "images": len(car.images)},
        )
        self._invalidator.invalidate(views.after_inventory_change())

        return AddCarResponse(car=car)
