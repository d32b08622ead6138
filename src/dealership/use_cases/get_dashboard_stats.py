from __future__ import annotations

from dealership.domain.dashboard import DashboardStats, compute_dashboard_stats
from dealership.domain.identity import Identity, require_admin
from dealership.ports.booking_repository import BookingRepository
from dealership.ports.car_catalog_repository import CarCatalogRepository


class GetDashboardStats:
    """Admin dashboard numbers, recomputed from the store on every call."""

    def __init__(
        self,
        car_catalog_repository: CarCatalogRepository,
        booking_repository: BookingRepository,
    ) -> None:
        self._cars = car_catalog_repository
        self._bookings = booking_repository

    def execute(self, caller: Identity | None) -> DashboardStats:
        require_admin(caller)
        return compute_dashboard_stats(
            self._cars.inventory_snapshot(),
            self._bookings.status_snapshot(),
        )
