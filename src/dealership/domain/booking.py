"""Test-drive bookings and their status machine.

PENDING -> CONFIRMED | CANCELLED | COMPLETED | NO_SHOW
CONFIRMED -> PENDING | CANCELLED | COMPLETED | NO_SHOW
CANCELLED, COMPLETED, NO_SHOW are terminal.

Only terminal states are protected; moves between non-terminal states are
accepted as-is.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum

from dealership.domain.errors import ConflictError, ValidationError


class BookingStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES

    @property
    def holds_slot(self) -> bool:
        return self in ACTIVE_STATUSES


# Statuses that occupy a (car, date, start_time) slot
ACTIVE_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED})
TERMINAL_STATUSES = frozenset(
    {BookingStatus.CANCELLED, BookingStatus.COMPLETED, BookingStatus.NO_SHOW}
)
# Statuses a booking may still leave
NON_TERMINAL_STATUSES = frozenset(BookingStatus) - TERMINAL_STATUSES
# Statuses shown to a user on a car's detail page
VISIBLE_TO_USER_STATUSES = frozenset(
    {BookingStatus.PENDING, BookingStatus.CONFIRMED, BookingStatus.COMPLETED}
)


class BookingValidationError(ValidationError):
    """Raised when booking input is malformed."""

    pass


class BookingConflictError(ConflictError):
    """A booking operation collides with the current booking state."""

    pass


class SlotAlreadyBookedError(BookingConflictError):
    def __init__(self, car_id: str, booking_date: date, start_time: str) -> None:
        super().__init__(
            "Test drive slot is already booked",
            car_id=car_id,
            booking_date=booking_date.isoformat(),
            start_time=start_time,
        )


class BookingAlreadyCancelledError(BookingConflictError):
    def __init__(self, booking_id: str) -> None:
        super().__init__("Test drive has already been cancelled", booking_id=booking_id)


class InvalidStatusTransitionError(ConflictError):
    def __init__(self, booking_id: str, current: BookingStatus, requested: BookingStatus) -> None:
        super().__init__(
            f"Booking in terminal status {current.value} cannot move to {requested.value}",
            booking_id=booking_id,
            current_status=current.value,
            requested_status=requested.value,
        )


class CarUnavailableError(ConflictError):
    def __init__(self, car_id: str) -> None:
        super().__init__("Car is not available for test drive", car_id=car_id)


_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def rejected_status_change(booking: Booking, requested: BookingStatus) -> ConflictError:
    """Error for a booking whose current status refuses the requested one."""
    if booking.status is BookingStatus.CANCELLED and requested is BookingStatus.CANCELLED:
        return BookingAlreadyCancelledError(booking.id)
    return InvalidStatusTransitionError(booking.id, booking.status, requested)


def parse_status(value: str | BookingStatus) -> BookingStatus:
    try:
        return BookingStatus(value)
    except ValueError:
        raise BookingValidationError(
            errors=[
                {
                    "field": "status",
                    "message": f"Must be one of {[s.value for s in BookingStatus]}",
                    "code": "INVALID_STATUS",
                }
            ]
        )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class Slot:
    car_id: str
    booking_date: date
    start_time: str


@dataclass(frozen=True, slots=True)
class NewBooking:
    """Fields required to insert a booking."""

    car_id: str
    user_id: str
    booking_date: date
    start_time: str
    end_time: str
    notes: str | None = None

    @property
    def slot(self) -> Slot:
        return Slot(self.car_id, self.booking_date, self.start_time)

    def validate(self) -> None:
        """
        Raises:
            BookingValidationError: If times are not HH:MM or end is not after start
        """
        errors = []
        for name in ("start_time", "end_time"):
            if not _TIME_PATTERN.match(getattr(self, name)):
                errors.append(
                    {"field": name, "message": "Must be HH:MM (24h)", "code": "INVALID_TIME"}
                )
        if errors:
            raise BookingValidationError(errors=errors)

        # Zero-padded HH:MM compares correctly as text
        if self.end_time <= self.start_time:
            raise BookingValidationError(
                errors=[
                    {
                        "field": "end_time",
                        "message": "Must be after start_time",
                        "code": "INVALID_RANGE",
                    }
                ]
            )


@dataclass(frozen=True)
class Booking:
    id: str
    car_id: str
    user_id: str
    booking_date: date
    start_time: str
    end_time: str
    status: BookingStatus = BookingStatus.PENDING
    notes: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @property
    def slot(self) -> Slot:
        return Slot(self.car_id, self.booking_date, self.start_time)


@dataclass(frozen=True, slots=True)
class BookingStatusEntry:
    """Minimal projection of a booking used for read-side aggregation."""

    id: str
    car_id: str
    status: BookingStatus
