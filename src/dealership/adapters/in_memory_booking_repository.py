from __future__ import annotations

import threading
import uuid
from collections.abc import Collection
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Callable

from dealership.domain.booking import (
    ACTIVE_STATUSES,
    Booking,
    BookingStatus,
    BookingStatusEntry,
    NewBooking,
    SlotAlreadyBookedError,
    rejected_status_change,
)
from dealership.domain.errors import NotFoundError
from dealership.ports.booking_repository import BookingRepository


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryBookingRepository(BookingRepository):
    """
    Canonical contract implementation for tests.

    Enforces the active-slot uniqueness rule and conditional status changes
    under a lock, the same guarantees the partial unique index and the
    conditional UPDATE give in PostgreSQL.
    """

    def __init__(
        self,
        bookings: list[Booking] | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._bookings: dict[str, Booking] = {b.id: b for b in bookings or []}
        self._clock = clock
        self._lock = threading.Lock()

    def get_by_id(self, booking_id: str) -> Booking | None:
        return self._bookings.get(booking_id)

    def find_matching(
        self,
        car_id: str,
        booking_date: date,
        start_time: str,
        statuses: Collection[BookingStatus],
    ) -> list[Booking]:
        return [
            b
            for b in list(self._bookings.values())
            if b.car_id == car_id
            and b.booking_date == booking_date
            and b.start_time == start_time
            and b.status in statuses
        ]

    def create(self, booking: NewBooking) -> Booking:
        with self._lock:
            if self.find_matching(
                booking.car_id, booking.booking_date, booking.start_time, ACTIVE_STATUSES
            ):
                raise SlotAlreadyBookedError(
                    booking.car_id, booking.booking_date, booking.start_time
                )
            now = self._clock()
            created = Booking(
                id=str(uuid.uuid4()),
                car_id=booking.car_id,
                user_id=booking.user_id,
                booking_date=booking.booking_date,
                start_time=booking.start_time,
                end_time=booking.end_time,
                status=BookingStatus.PENDING,
                notes=booking.notes,
                created_at=now,
                updated_at=now,
            )
            self._bookings[created.id] = created
            return created

    def update_status(
        self,
        booking_id: str,
        status: BookingStatus,
        *,
        expected: Collection[BookingStatus],
    ) -> Booking:
        with self._lock:
            current = self._bookings.get(booking_id)
            if current is None:
                raise NotFoundError(resource="Booking", identifier=booking_id)
            if current.status not in expected:
                raise rejected_status_change(current, status)
            if status.holds_slot and any(
                b.id != booking_id
                for b in self.find_matching(
                    current.car_id, current.booking_date, current.start_time, ACTIVE_STATUSES
                )
            ):
                raise SlotAlreadyBookedError(
                    current.car_id, current.booking_date, current.start_time
                )
            updated = replace(current, status=status, updated_at=self._clock())
            self._bookings[booking_id] = updated
            return updated

    def latest_for_user_and_car(
        self,
        user_id: str,
        car_id: str,
        statuses: Collection[BookingStatus],
    ) -> Booking | None:
        candidates = [
            b
            for b in self._bookings.values()
            if b.user_id == user_id and b.car_id == car_id and b.status in statuses
        ]
        return max(candidates, key=lambda b: b.created_at, default=None)

    def list_for_user(self, user_id: str) -> list[Booking]:
        return self._newest_first(b for b in self._bookings.values() if b.user_id == user_id)

    def list_all(self, status: BookingStatus | None = None) -> list[Booking]:
        return self._newest_first(
            b for b in self._bookings.values() if status is None or b.status == status
        )

    def status_snapshot(self) -> list[BookingStatusEntry]:
        return [
            BookingStatusEntry(id=b.id, car_id=b.car_id, status=b.status)
            for b in self._bookings.values()
        ]

    @staticmethod
    def _newest_first(bookings) -> list[Booking]:
        return sorted(bookings, key=lambda b: (b.booking_date, b.created_at), reverse=True)
