from __future__ import annotations

import logging
from dataclasses import dataclass

from dealership.domain import views
from dealership.domain.booking import (
    NON_TERMINAL_STATUSES,
    Booking,
    BookingStatus,
    parse_status,
    rejected_status_change,
)
from dealership.domain.errors import NotFoundError
from dealership.domain.identity import Identity, require_admin
from dealership.domain.ids import require_uuid
from dealership.ports.booking_repository import BookingRepository
from dealership.ports.cache_invalidator import CacheInvalidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UpdateTestDriveStatusRequest:
    caller: Identity | None
    booking_id: str
    status: str | BookingStatus


@dataclass(frozen=True, slots=True)
class UpdateTestDriveStatusResponse:
    booking: Booking


class UpdateTestDriveStatus:
    """
    Admin reassignment of a booking's status.

    Any move out of a non-terminal status is accepted, including lateral
    ones such as CONFIRMED -> PENDING. Terminal bookings reject every change.
    """

    def __init__(
        self,
        booking_repository: BookingRepository,
        cache_invalidator: CacheInvalidator,
    ) -> None:
        self._bookings = booking_repository
        self._invalidator = cache_invalidator

    def execute(self, request: UpdateTestDriveStatusRequest) -> UpdateTestDriveStatusResponse:
        """
        Raises:
            UnauthorizedError / ForbiddenError: If the caller is not an admin
            ValidationError: If booking_id or status is invalid
            NotFoundError: If the booking does not exist
            BookingAlreadyCancelledError: If a CANCELLED booking is set to CANCELLED again
            InvalidStatusTransitionError: If the booking is in a terminal status,
                including one reached by a concurrent writer
        """
        require_admin(request.caller)
        require_uuid(request.booking_id, "booking_id")
        status = parse_status(request.status)

        booking = self._bookings.get_by_id(request.booking_id)
        if booking is None:
            raise NotFoundError(resource="Booking", identifier=request.booking_id)
        if booking.status.is_terminal:
            raise rejected_status_change(booking, status)

        updated = self._bookings.update_status(
            booking.id, status, expected=NON_TERMINAL_STATUSES
        )

        logger.info(
            "Test drive status changed",
            extra={
                "booking_id": booking.id,
                "status_before": booking.status.value,
                "status_after": status.value,
            },
        )
        self._invalidator.invalidate(views.after_booking_change(booking.car_id))

        return UpdateTestDriveStatusResponse(booking=updated)
