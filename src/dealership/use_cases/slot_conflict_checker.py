from __future__ import annotations

from datetime import date

from dealership.domain.booking import ACTIVE_STATUSES
from dealership.ports.booking_repository import BookingRepository


class SlotConflictChecker:
    """
    Is (car, date, start_time) already held by a PENDING or CONFIRMED booking?

    Only start times are compared; a 10:00-11:00 booking does not block a
    10:30 start. This is a fast-path check; the booking store's uniqueness
    rule is what actually prevents double bookings.
    """

    def __init__(self, booking_repository: BookingRepository) -> None:
        self._bookings = booking_repository

    def has_conflict(self, car_id: str, booking_date: date, start_time: str) -> bool:
        return bool(
            self._bookings.find_matching(car_id, booking_date, start_time, ACTIVE_STATUSES)
        )
