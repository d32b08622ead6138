from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from dealership.domain.car import Car, InventoryEntry, NewCar, PriceRange
from dealership.domain.paging import Ordering
from dealership.domain.search import CarPredicate

# Columns catalog_facets may ask distinct values for
FACET_FIELDS = ("make", "body_type", "fuel_type", "transmission")


class CarCatalogRepository(ABC):
    """
    Port for car records: catalog reads plus inventory entry.

    Contract (Preconditions):
        - predicates are compiled and paging is resolved by the caller (UseCase)
        - Implementations trust inputs are valid and do not re-validate
        - list_cars applies ``ordering`` followed by ascending ``id`` so that
          offset windows never overlap or skip rows

    Store failures surface as CollaboratorError, never as empty results.
    """

    @abstractmethod
    def get_by_id(self, car_id: str) -> Car | None: ...

    @abstractmethod
    def get_many(self, car_ids: Sequence[str]) -> dict[str, Car]:
        """Batched lookup; unknown ids are absent from the result."""
        ...

    @abstractmethod
    def list_cars(
        self,
        predicate: CarPredicate,
        ordering: Ordering,
        offset: int,
        limit: int,
    ) -> list[Car]: ...

    @abstractmethod
    def count_cars(self, predicate: CarPredicate) -> int: ...

    @abstractmethod
    def aggregate_price_range(self, predicate: CarPredicate) -> PriceRange | None:
        """Min/max price over matching cars, or None when nothing matches."""
        ...

    @abstractmethod
    def distinct_values(self, field: str, predicate: CarPredicate) -> list[str]:
        """Sorted distinct non-empty values of one of FACET_FIELDS."""
        ...

    @abstractmethod
    def inventory_snapshot(self) -> list[InventoryEntry]: ...

    @abstractmethod
    def create(self, car: NewCar) -> Car:
        """Insert a validated inventory entry; id and timestamps are assigned here."""
        ...
