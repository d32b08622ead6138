from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from dealership.domain import views
from dealership.domain.booking import (
    Booking,
    CarUnavailableError,
    NewBooking,
    SlotAlreadyBookedError,
)
from dealership.domain.car import CarStatus
from dealership.domain.errors import NotFoundError
from dealership.domain.identity import Identity, require_identity
from dealership.domain.ids import require_uuid
from dealership.ports.booking_repository import BookingRepository
from dealership.ports.cache_invalidator import CacheInvalidator
from dealership.ports.car_catalog_repository import CarCatalogRepository
from dealership.use_cases.slot_conflict_checker import SlotConflictChecker

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BookTestDriveRequest:
    caller: Identity | None
    car_id: str
    booking_date: date
    start_time: str
    end_time: str
    notes: str | None = None


@dataclass(frozen=True, slots=True)
class BookTestDriveResponse:
    booking: Booking


class BookTestDrive:
    """
    Book a test drive slot for the caller.

    The conflict check runs first so the common case fails fast without a
    write; a booking that slips past it concurrently is still rejected by the
    store with the same SlotAlreadyBookedError. Nothing is written on any
    failure path.
    """

    def __init__(
        self,
        car_catalog_repository: CarCatalogRepository,
        booking_repository: BookingRepository,
        cache_invalidator: CacheInvalidator,
    ) -> None:
        self._cars = car_catalog_repository
        self._bookings = booking_repository
        self._conflicts = SlotConflictChecker(booking_repository)
        self._invalidator = cache_invalidator

    def execute(self, request: BookTestDriveRequest) -> BookTestDriveResponse:
        """
        Raises:
            UnauthorizedError: If there is no caller
            ValidationError: If car_id or times are malformed
            NotFoundError: If the car does not exist
            CarUnavailableError: If the car is not AVAILABLE
            SlotAlreadyBookedError: If the slot is held by an active booking
        """
        caller = require_identity(request.caller)
        require_uuid(request.car_id, "car_id")

        notes = request.notes.strip() if request.notes else None
        new_booking = NewBooking(
            car_id=request.car_id,
            user_id=caller.user_id,
            booking_date=request.booking_date,
            start_time=request.start_time,
            end_time=request.end_time,
            notes=notes or None,
        )
        new_booking.validate()

        car = self._cars.get_by_id(request.car_id)
        if car is None:
            raise NotFoundError(resource="Car", identifier=request.car_id)
        if car.status is not CarStatus.AVAILABLE:
            raise CarUnavailableError(car.id)

        if self._conflicts.has_conflict(car.id, request.booking_date, request.start_time):
            logger.info(
                "Test drive slot already booked",
                extra={
                    "car_id": car.id,
                    "booking_date": request.booking_date.isoformat(),
                    "start_time": request.start_time,
                },
            )
            raise SlotAlreadyBookedError(car.id, request.booking_date, request.start_time)

        booking = self._bookings.create(new_booking)

        logger.info(
            "Test drive booked",
            extra={"booking_id": booking.id, "car_id": car.id, "user_id": caller.user_id},
        )
        self._invalidator.invalidate(views.after_booking_change(car.id))

        return BookTestDriveResponse(booking=booking)
