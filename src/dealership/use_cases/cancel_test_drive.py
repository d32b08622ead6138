from __future__ import annotations

import logging
from dataclasses import dataclass

from dealership.domain import views
from dealership.domain.booking import (
    NON_TERMINAL_STATUSES,
    Booking,
    BookingStatus,
    rejected_status_change,
)
from dealership.domain.errors import ForbiddenError, NotFoundError
from dealership.domain.identity import Identity, require_identity
from dealership.domain.ids import require_uuid
from dealership.ports.booking_repository import BookingRepository
from dealership.ports.cache_invalidator import CacheInvalidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CancelTestDriveRequest:
    caller: Identity | None
    booking_id: str


@dataclass(frozen=True, slots=True)
class CancelTestDriveResponse:
    booking: Booking


class CancelTestDrive:
    """Cancel a booking. Allowed for the booking's owner or an admin."""

    def __init__(
        self,
        booking_repository: BookingRepository,
        cache_invalidator: CacheInvalidator,
    ) -> None:
        self._bookings = booking_repository
        self._invalidator = cache_invalidator

    def execute(self, request: CancelTestDriveRequest) -> CancelTestDriveResponse:
        """
        Raises:
            UnauthorizedError: If there is no caller
            NotFoundError: If the booking does not exist
            ForbiddenError: If the caller is neither owner nor admin
            BookingAlreadyCancelledError: If the booking is already CANCELLED
            InvalidStatusTransitionError: If the booking is COMPLETED or NO_SHOW
        """
        caller = require_identity(request.caller)
        require_uuid(request.booking_id, "booking_id")

        booking = self._bookings.get_by_id(request.booking_id)
        if booking is None:
            raise NotFoundError(resource="Booking", identifier=request.booking_id)

        if booking.user_id != caller.user_id and not caller.is_admin:
            raise ForbiddenError(
                "Only the owner or an admin can cancel the test drive",
                booking_id=booking.id,
            )

        # Rejections leave the row (and its updated_at) untouched
        if booking.status.is_terminal:
            raise rejected_status_change(booking, BookingStatus.CANCELLED)

        # A concurrent writer may have closed the booking since the read above
        cancelled = self._bookings.update_status(
            booking.id, BookingStatus.CANCELLED, expected=NON_TERMINAL_STATUSES
        )

        logger.info(
            "Test drive cancelled",
            extra={"booking_id": booking.id, "by_admin": booking.user_id != caller.user_id},
        )
        self._invalidator.invalidate(views.after_booking_change(booking.car_id))

        return CancelTestDriveResponse(booking=cancelled)
