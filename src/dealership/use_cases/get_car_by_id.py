"""Get car by ID use case."""

from __future__ import annotations

from dataclasses import dataclass

from dealership.domain.booking import VISIBLE_TO_USER_STATUSES, Booking
from dealership.domain.car import Car
from dealership.domain.errors import NotFoundError
from dealership.domain.identity import Identity
from dealership.domain.ids import require_uuid
from dealership.ports.booking_repository import BookingRepository
from dealership.ports.car_catalog_repository import CarCatalogRepository
from dealership.ports.saved_car_repository import SavedCarRepository


@dataclass(frozen=True, slots=True)
class GetCarByIdRequest:
    """Request to get a car by ID."""

    car_id: str
    caller: Identity | None = None


@dataclass(frozen=True, slots=True)
class GetCarByIdResponse:
    """The car plus what the caller has already done with it."""

    car: Car
    wishlisted: bool = False
    user_test_drive: Booking | None = None


class GetCarById:
    """
    Use case for retrieving a single car by ID.

    Responsibilities:
    - Validate car_id format (must be valid UUID)
    - Raise NotFoundError if car doesn't exist (any status, sold cars included)
    - For a signed-in caller, report wishlist state and their latest
      pending/confirmed/completed test drive for this car
    """

    def __init__(
        self,
        car_catalog_repository: CarCatalogRepository,
        saved_car_repository: SavedCarRepository,
        booking_repository: BookingRepository,
    ) -> None:
        self._cars = car_catalog_repository
        self._saved = saved_car_repository
        self._bookings = booking_repository

    def execute(self, request: GetCarByIdRequest) -> GetCarByIdResponse:
        """
        Raises:
            ValidationError: If car_id is not a valid UUID format
            NotFoundError: If car with given ID doesn't exist
        """
        require_uuid(request.car_id, "car_id")

        car = self._cars.get_by_id(request.car_id)
        if car is None:
            raise NotFoundError(resource="Car", identifier=request.car_id)

        if request.caller is None:
            return GetCarByIdResponse(car=car)

        user_id = request.caller.user_id
        return GetCarByIdResponse(
            car=car,
            wishlisted=self._saved.exists(user_id, car.id),
            user_test_drive=self._bookings.latest_for_user_and_car(
                user_id, car.id, VISIBLE_TO_USER_STATUSES
            ),
        )
