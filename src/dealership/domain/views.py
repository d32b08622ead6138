"""Logical views that go stale after mutations."""

from __future__ import annotations

RESERVATIONS = "/reservations"
ADMIN_TEST_DRIVES = "/admin/test-drives"
SAVED_CARS = "/saved-cars"
HOME = "/"
CATALOG = "/cars"
ADMIN_CARS = "/admin/cars"


def car_detail(car_id: str) -> str:
    return f"/cars/{car_id}"


def booking_form(car_id: str) -> str:
    return f"/test-drive/{car_id}"


def after_booking_change(car_id: str) -> frozenset[str]:
    return frozenset(
        {booking_form(car_id), car_detail(car_id), RESERVATIONS, ADMIN_TEST_DRIVES}
    )


def after_wishlist_toggle(car_id: str) -> frozenset[str]:
    return frozenset({SAVED_CARS, car_detail(car_id)})


def after_inventory_change() -> frozenset[str]:
    return frozenset({ADMIN_CARS, CATALOG, HOME})
