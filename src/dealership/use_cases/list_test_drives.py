from __future__ import annotations

from dataclasses import dataclass

from dealership.domain.booking import Booking, parse_status
from dealership.domain.car import Car
from dealership.domain.identity import Identity, require_admin, require_identity
from dealership.ports.booking_repository import BookingRepository
from dealership.ports.car_catalog_repository import CarCatalogRepository


@dataclass(frozen=True, slots=True)
class BookingWithCar:
    booking: Booking
    car: Car | None


@dataclass(frozen=True, slots=True)
class ListTestDrivesResponse:
    items: list[BookingWithCar]


def _attach_cars(cars: CarCatalogRepository, bookings: list[Booking]) -> list[BookingWithCar]:
    by_id = cars.get_many(list({b.car_id for b in bookings})) if bookings else {}
    return [BookingWithCar(booking=b, car=by_id.get(b.car_id)) for b in bookings]


class ListUserTestDrives:
    """The caller's own bookings, latest booking date first."""

    def __init__(
        self,
        booking_repository: BookingRepository,
        car_catalog_repository: CarCatalogRepository,
    ) -> None:
        self._bookings = booking_repository
        self._cars = car_catalog_repository

    def execute(self, caller: Identity | None) -> ListTestDrivesResponse:
        caller = require_identity(caller)
        bookings = self._bookings.list_for_user(caller.user_id)
        return ListTestDrivesResponse(items=_attach_cars(self._cars, bookings))


@dataclass(frozen=True, slots=True)
class ListAllTestDrivesRequest:
    caller: Identity | None
    status: str | None = None
    search: str | None = None


class ListAllTestDrives:
    """Every booking, for the admin screen. Optional status and make/model search."""

    def __init__(
        self,
        booking_repository: BookingRepository,
        car_catalog_repository: CarCatalogRepository,
    ) -> None:
        self._bookings = booking_repository
        self._cars = car_catalog_repository

    def execute(self, request: ListAllTestDrivesRequest) -> ListTestDrivesResponse:
        require_admin(request.caller)
        status = parse_status(request.status) if request.status else None

        items = _attach_cars(self._cars, self._bookings.list_all(status))

        needle = (request.search or "").strip().lower()
        if needle:
            items = [
                item
                for item in items
                if item.car is not None
                and (needle in item.car.make.lower() or needle in item.car.model.lower())
            ]
        return ListTestDrivesResponse(items=items)
