from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Collection
from datetime import date

from dealership.domain.booking import Booking, BookingStatus, BookingStatusEntry, NewBooking


class BookingRepository(ABC):
    """
    Port for test-drive booking records.

    The store is the authority for the one-booking-per-slot rule: ``create`` must refuse
    a booking whose (car_id, booking_date, start_time) is already held by a
    PENDING or CONFIRMED booking, raising SlotAlreadyBookedError, even when
    the caller's own conflict check passed a moment earlier.
    """

    @abstractmethod
    def get_by_id(self, booking_id: str) -> Booking | None: ...

    @abstractmethod
    def find_matching(
        self,
        car_id: str,
        booking_date: date,
        start_time: str,
        statuses: Collection[BookingStatus],
    ) -> list[Booking]: ...

    @abstractmethod
    def create(self, booking: NewBooking) -> Booking:
        """
        Insert a PENDING booking.

        Raises:
            SlotAlreadyBookedError: If the slot is already held
        """
        ...

    @abstractmethod
    def update_status(
        self,
        booking_id: str,
        status: BookingStatus,
        *,
        expected: Collection[BookingStatus],
    ) -> Booking:
        """
        Set status and bump updated_at, only while the current status is in ``expected``.

        The check and the write are one atomic step, so two callers racing on
        the same booking cannot both leave a terminal status behind.

        Raises:
            NotFoundError: If the booking does not exist
            BookingAlreadyCancelledError: If a CANCELLED booking is cancelled again
            InvalidStatusTransitionError: If the current status is not in ``expected``
            SlotAlreadyBookedError: If moving into an active status would double-book the slot
        """
        ...

    @abstractmethod
    def latest_for_user_and_car(
        self,
        user_id: str,
        car_id: str,
        statuses: Collection[BookingStatus],
    ) -> Booking | None:
        """Most recently created booking of this user for this car."""
        ...

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[Booking]:
        """Bookings of one user, booking_date descending then created_at descending."""
        ...

    @abstractmethod
    def list_all(self, status: BookingStatus | None = None) -> list[Booking]:
        """All bookings (optionally one status), booking_date descending then created_at descending."""
        ...

    @abstractmethod
    def status_snapshot(self) -> list[BookingStatusEntry]: ...
