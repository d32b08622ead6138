from __future__ import annotations

import logging
from dataclasses import dataclass

from dealership.domain import views
from dealership.domain.errors import NotFoundError
from dealership.domain.identity import Identity, require_identity
from dealership.domain.ids import require_uuid
from dealership.ports.cache_invalidator import CacheInvalidator
from dealership.ports.car_catalog_repository import CarCatalogRepository
from dealership.ports.saved_car_repository import SavedCarRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ToggleSavedCarRequest:
    caller: Identity | None
    car_id: str


@dataclass(frozen=True, slots=True)
class ToggleSavedCarResponse:
    car_id: str
    saved: bool


class ToggleSavedCar:
    """Add the car to the caller's wishlist, or remove it if already there."""

    def __init__(
        self,
        car_catalog_repository: CarCatalogRepository,
        saved_car_repository: SavedCarRepository,
        cache_invalidator: CacheInvalidator,
    ) -> None:
        self._cars = car_catalog_repository
        self._saved = saved_car_repository
        self._invalidator = cache_invalidator

    def execute(self, request: ToggleSavedCarRequest) -> ToggleSavedCarResponse:
        caller = require_identity(request.caller)
        require_uuid(request.car_id, "car_id")

        if self._cars.get_by_id(request.car_id) is None:
            raise NotFoundError(resource="Car", identifier=request.car_id)

        saved = self._saved.toggle(caller.user_id, request.car_id)

        logger.info(
            "Wishlist toggled",
            extra={"car_id": request.car_id, "user_id": caller.user_id, "saved": saved},
        )
        self._invalidator.invalidate(views.after_wishlist_toggle(request.car_id))

        return ToggleSavedCarResponse(car_id=request.car_id, saved=saved)
