from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from dealership.domain.booking import BookingStatus, BookingStatusEntry
from dealership.domain.car import CarStatus, InventoryEntry


@dataclass(frozen=True, slots=True)
class CarStats:
    total: int
    available: int
    unavailable: int
    sold: int
    featured: int


@dataclass(frozen=True, slots=True)
class BookingStats:
    total: int
    pending: int
    confirmed: int
    completed: int
    cancelled: int
    no_show: int
    conversion_rate: Decimal


@dataclass(frozen=True, slots=True)
class DashboardStats:
    cars: CarStats
    test_drives: BookingStats


def compute_dashboard_stats(
    cars: Iterable[InventoryEntry],
    bookings: Iterable[BookingStatusEntry],
) -> DashboardStats:
    """
    Derive dashboard numbers from a single store snapshot.

    Conversion rate is the share of completed test drives whose car has since
    been sold, as a percentage rounded to 2 places.
    """
    cars = list(cars)
    bookings = list(bookings)

    car_counts = Counter(car.status for car in cars)
    booking_counts = Counter(booking.status for booking in bookings)

    completed = booking_counts[BookingStatus.COMPLETED]
    completed_car_ids = {b.car_id for b in bookings if b.status is BookingStatus.COMPLETED}
    sold_after_test_drive = sum(
        1 for car in cars if car.status is CarStatus.SOLD and car.id in completed_car_ids
    )

    if completed:
        rate = Decimal(sold_after_test_drive) * 100 / Decimal(completed)
    else:
        rate = Decimal("0")

    return DashboardStats(
        cars=CarStats(
            total=len(cars),
            available=car_counts[CarStatus.AVAILABLE],
            unavailable=car_counts[CarStatus.UNAVAILABLE],
            sold=car_counts[CarStatus.SOLD],
            featured=sum(1 for car in cars if car.featured),
        ),
        test_drives=BookingStats(
            total=len(bookings),
            pending=booking_counts[BookingStatus.PENDING],
            confirmed=booking_counts[BookingStatus.CONFIRMED],
            completed=completed,
            cancelled=booking_counts[BookingStatus.CANCELLED],
            no_show=booking_counts[BookingStatus.NO_SHOW],
            conversion_rate=rate.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP),
        ),
    )
