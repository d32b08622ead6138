"""PostgreSQL implementation of CarCatalogRepository."""

from __future__ import annotations

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from dealership.domain.car import Car, CarStatus, InventoryEntry, NewCar, PriceRange
from dealership.domain.paging import Ordering, SortField
from dealership.domain.search import CarPredicate
from dealership.infra.db.errors import store_call
from dealership.infra.db.models.car import CarRow
from dealership.ports.car_catalog_repository import FACET_FIELDS, CarCatalogRepository


def _parse_uuid(value: str) -> UUID | None:
    try:
        return UUID(value)
    except ValueError:
        return None


class PostgresCarCatalogRepository(CarCatalogRepository):
    """
    PostgreSQL implementation of CarCatalogRepository.

    - Predicates become SQL WHERE clauses (ILIKE for free text)
    - Every listing is ordered by the requested column, then by id
    - Converts CarRow (infrastructure) to Car (domain)
    - Inserts flush immediately so the generated id and timestamps come back
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, car_id: str) -> Car | None:
        key = _parse_uuid(car_id)
        if key is None:
            return None
        with store_call("cars.get_by_id"):
            row = self._session.execute(select(CarRow).where(CarRow.id == key)).scalar_one_or_none()
        return self._to_domain(row) if row else None

    def get_many(self, car_ids: Sequence[str]) -> dict[str, Car]:
        keys = [key for key in map(_parse_uuid, car_ids) if key is not None]
        if not keys:
            return {}
        with store_call("cars.get_many"):
            rows = self._session.execute(select(CarRow).where(CarRow.id.in_(keys))).scalars().all()
        return {str(row.id): self._to_domain(row) for row in rows}

    def list_cars(
        self,
        predicate: CarPredicate,
        ordering: Ordering,
        offset: int,
        limit: int,
    ) -> list[Car]:
        """
        SELECT a page of matching cars.

        ``id`` is always the last sort column so that OFFSET windows are
        disjoint even when several cars share a price or timestamp.
        """
        column = CarRow.price if ordering.field is SortField.PRICE else CarRow.created_at
        primary = column.desc() if ordering.descending else column.asc()

        query = (
            select(CarRow)
            .where(*self._conditions(predicate))
            .order_by(primary, CarRow.id.asc())
            .offset(offset)
            .limit(limit)
        )
        with store_call("cars.list"):
            rows = self._session.execute(query).scalars().all()
        return [self._to_domain(row) for row in rows]

    def count_cars(self, predicate: CarPredicate) -> int:
        query = select(func.count()).select_from(CarRow).where(*self._conditions(predicate))
        with store_call("cars.count"):
            return self._session.execute(query).scalar() or 0

    def aggregate_price_range(self, predicate: CarPredicate) -> PriceRange | None:
        query = select(func.min(CarRow.price), func.max(CarRow.price)).where(
            *self._conditions(predicate)
        )
        with store_call("cars.price_range"):
            low, high = self._session.execute(query).one()
        if low is None or high is None:
            return None
        return PriceRange(min=low, max=high)

    def distinct_values(self, field: str, predicate: CarPredicate) -> list[str]:
        if field not in FACET_FIELDS:
            raise ValueError(f"Unsupported facet field: {field}")
        column = getattr(CarRow, field)
        query = (
            select(column)
            .where(*self._conditions(predicate), column != "")
            .distinct()
            .order_by(column)
        )
        with store_call("cars.distinct"):
            return list(self._session.execute(query).scalars().all())

    def inventory_snapshot(self) -> list[InventoryEntry]:
        query = select(CarRow.id, CarRow.status, CarRow.featured)
        with store_call("cars.snapshot"):
            rows = self._session.execute(query).all()
        return [
            InventoryEntry(id=str(row.id), status=CarStatus(row.status), featured=row.featured)
            for row in rows
        ]

    def create(self, car: NewCar) -> Car:
        row = CarRow(
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
            status=CarStatus(car.status).value,
            featured=car.featured,
            images=list(car.images),
        )
        with store_call("cars.create"):
            self._session.add(row)
            self._session.flush()
        return self._to_domain(row)

    def _conditions(self, predicate: CarPredicate) -> list[Any]:
        conditions: list[Any] = []

        if predicate.status is not None:
            conditions.append(CarRow.status == predicate.status.value)
        if predicate.featured is not None:
            conditions.append(CarRow.featured.is_(predicate.featured))

        # Free text: any of make/model/color, case-insensitive substring
        if predicate.text:
            conditions.append(
                or_(
                    CarRow.make.icontains(predicate.text, autoescape=True),
                    CarRow.model.icontains(predicate.text, autoescape=True),
                    CarRow.color.icontains(predicate.text, autoescape=True),
                )
            )

        # Case-insensitive exact match per facet
        for field in FACET_FIELDS:
            value = getattr(predicate, field)
            if value:
                conditions.append(func.lower(getattr(CarRow, field)) == value.lower())

        conditions.append(CarRow.price >= predicate.price_min)
        if predicate.price_max is not None:
            conditions.append(CarRow.price <= predicate.price_max)

        return conditions

    def _to_domain(self, row: CarRow) -> Car:
        return Car(
            id=str(row.id),  # Convert UUID to string
            make=row.make,
            model=row.model,
            year=row.year,
            price=row.price,  # Already Decimal from NUMERIC column
            mileage=row.mileage,
            color=row.color,
            fuel_type=row.fuel_type,
            transmission=row.transmission,
            body_type=row.body_type,
            seats=row.seats,
            description=row.description,
            status=CarStatus(row.status),
            featured=row.featured,
            images=tuple(row.images or ()),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
