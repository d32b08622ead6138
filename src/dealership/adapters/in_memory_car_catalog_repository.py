from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Sequence

from dealership.domain.car import Car, CarStatus, InventoryEntry, NewCar, PriceRange
from dealership.domain.paging import Ordering, SortField
from dealership.domain.search import CarPredicate
from dealership.ports.car_catalog_repository import FACET_FIELDS, CarCatalogRepository


class InMemoryCarCatalogRepository(CarCatalogRepository):
    """
    Canonical contract implementation for tests.

    - Applies AND-semantics filtering
    - Orders by the requested field, ties broken by ascending id
    - Applies offset/limit AFTER filtering and ordering
    """

    def __init__(self, cars: list[Car]) -> None:
        self._cars = list(cars)

    def get_by_id(self, car_id: str) -> Car | None:
        return next((car for car in self._cars if car.id == car_id), None)

    def get_many(self, car_ids: Sequence[str]) -> dict[str, Car]:
        wanted = set(car_ids)
        return {car.id: car for car in self._cars if car.id in wanted}

    def list_cars(
        self,
        predicate: CarPredicate,
        ordering: Ordering,
        offset: int,
        limit: int,
    ) -> list[Car]:
        # Trust that UseCase has validated inputs (contract programming)
        matches = sorted(self._filter(predicate), key=lambda car: car.id)
        # list.sort is stable, also with reverse=True, so id order survives ties
        if ordering.field is SortField.PRICE:
            matches.sort(key=lambda car: car.price, reverse=ordering.descending)
        else:
            matches.sort(key=lambda car: car.created_at, reverse=ordering.descending)
        return matches[offset : offset + limit]

    def count_cars(self, predicate: CarPredicate) -> int:
        return len(self._filter(predicate))

    def aggregate_price_range(self, predicate: CarPredicate) -> PriceRange | None:
        prices = [car.price for car in self._filter(predicate)]
        if not prices:
            return None
        return PriceRange(min=min(prices), max=max(prices))

    def distinct_values(self, field: str, predicate: CarPredicate) -> list[str]:
        if field not in FACET_FIELDS:
            raise ValueError(f"Unsupported facet field: {field}")
        return sorted({getattr(car, field) for car in self._filter(predicate) if getattr(car, field)})

    def inventory_snapshot(self) -> list[InventoryEntry]:
        return [InventoryEntry(id=car.id, status=car.status, featured=car.featured) for car in self._cars]

    def create(self, car: NewCar) -> Car:
        now = datetime.now(timezone.utc)
        created = Car(
            id=str(uuid.uuid4()),
            make=car.make,
            model=car.model,
            year=car.year,
            price=car.price,
            mileage=car.mileage,
            color=car.color,
            fuel_type=car.fuel_type,
            transmission=car.transmission,
            body_type=car.body_type,
            seats=car.seats,
            description=car.description,
            status=CarStatus(car.status),
            featured=car.featured,
            images=tuple(car.images),
            created_at=now,
            updated_at=now,
        )
        self._cars.append(created)
        return created

    def _filter(self, predicate: CarPredicate) -> list[Car]:
        return [car for car in self._cars if self._matches(car, predicate)]

    def _matches(self, car: Car, predicate: CarPredicate) -> bool:
        if predicate.status is not None and car.status != predicate.status:
            return False
        if predicate.featured is not None and car.featured != predicate.featured:
            return False
        if predicate.text:
            needle = predicate.text.lower()
            if not any(needle in value.lower() for value in (car.make, car.model, car.color)):
                return False
        if predicate.make and car.make.lower() != predicate.make.lower():
            return False
        if predicate.body_type and car.body_type.lower() != predicate.body_type.lower():
            return False
        if predicate.fuel_type and car.fuel_type.lower() != predicate.fuel_type.lower():
            return False
        if predicate.transmission and car.transmission.lower() != predicate.transmission.lower():
            return False
        if car.price < predicate.price_min:
            return False
        if predicate.price_max is not None and car.price > predicate.price_max:
            return False
        return True
