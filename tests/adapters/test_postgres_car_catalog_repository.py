"""
Unit test suite for PostgresCarCatalogRepository.

Uses a mocked Session and inspects the SQL compiled for PostgreSQL:
- Predicates become WHERE clauses
- Every listing ends its ORDER BY with the id tiebreaker
- Rows convert to domain Cars (UUID -> str, ARRAY -> tuple)
- Connectivity failures surface as CollaboratorError
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import Mock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from dealership.adapters.postgres_car_catalog_repository import PostgresCarCatalogRepository
from dealership.domain.car import CarStatus, NewCar, PriceRange
from dealership.domain.errors import CollaboratorError
from dealership.domain.paging import NEWEST_FIRST, Ordering, SortField
from dealership.domain.search import CarPredicate
from dealership.infra.db.models.car import CarRow

CAR_UUID = uuid.UUID("00000000-0000-0000-0000-000000000001")
NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


@pytest.fixture()
def mock_session() -> Mock:
    return Mock(spec=Session)


@pytest.fixture()
def car_row() -> CarRow:
    return CarRow(
        id=CAR_UUID,
        make="Toyota",
        model="Corolla",
        year=2021,
        price=Decimal("21000.00"),
        mileage=12000,
        color="White",
        fuel_type="Hybrid",
        transmission="CVT",
        body_type="Sedan",
        seats=5,
        description="One owner",
        status="AVAILABLE",
        featured=True,
        images=["https://img.example/1.jpg"],
        created_at=NOW,
        updated_at=NOW,
    )


def _compiled(mock_session: Mock, call: int = 0) -> str:
    query = mock_session.execute.call_args_list[call].args[0]
    return str(query.compile(dialect=postgresql.dialect()))


# ==============================================================================
# Listing
# ==============================================================================


def test_list_cars_orders_by_primary_then_id(mock_session: Mock) -> None:
    mock_session.execute.return_value.scalars.return_value.all.return_value = []
    repo = PostgresCarCatalogRepository(mock_session)

    repo.list_cars(CarPredicate(), Ordering(SortField.PRICE, descending=False), 4, 2)

    sql = _compiled(mock_session)
    assert "ORDER BY cars.price ASC, cars.id ASC" in sql
    assert "LIMIT" in sql
    assert "OFFSET" in sql


def test_newest_first_sorts_created_at_descending(mock_session: Mock) -> None:
    mock_session.execute.return_value.scalars.return_value.all.return_value = []
    repo = PostgresCarCatalogRepository(mock_session)

    repo.list_cars(CarPredicate(), NEWEST_FIRST, 0, 6)

    assert "ORDER BY cars.created_at DESC, cars.id ASC" in _compiled(mock_session)


def test_predicate_becomes_where_clauses(mock_session: Mock) -> None:
    mock_session.execute.return_value.scalars.return_value.all.return_value = []
    repo = PostgresCarCatalogRepository(mock_session)

    repo.list_cars(
        CarPredicate(
            make="toyota",
            body_type="SUV",
            price_min=Decimal("10000"),
            price_max=Decimal("30000"),
            featured=True,
        ),
        NEWEST_FIRST,
        0,
        6,
    )

    sql = _compiled(mock_session)
    assert "cars.status = " in sql
    assert "lower(cars.make) = " in sql
    assert "lower(cars.body_type) = " in sql
    assert "cars.price >= " in sql
    assert "cars.price <= " in sql
    assert "cars.featured IS true" in sql


def test_unbounded_max_price_has_no_upper_clause(mock_session: Mock) -> None:
    mock_session.execute.return_value.scalar.return_value = 0
    repo = PostgresCarCatalogRepository(mock_session)

    repo.count_cars(CarPredicate())

    assert "cars.price <= " not in _compiled(mock_session)


def test_rows_convert_to_domain(mock_session: Mock, car_row: CarRow) -> None:
    mock_session.execute.return_value.scalars.return_value.all.return_value = [car_row]
    repo = PostgresCarCatalogRepository(mock_session)

    [car] = repo.list_cars(CarPredicate(), NEWEST_FIRST, 0, 6)

    assert car.id == str(CAR_UUID)
    assert car.price == Decimal("21000.00")
    assert car.status is CarStatus.AVAILABLE
    assert car.images == ("https://img.example/1.jpg",)


# ==============================================================================
# Lookups and aggregates
# ==============================================================================


def test_get_by_id_with_malformed_id_skips_query(mock_session: Mock) -> None:
    repo = PostgresCarCatalogRepository(mock_session)

    assert repo.get_by_id("not-a-uuid") is None
    mock_session.execute.assert_not_called()


def test_get_many_keys_by_string_id(mock_session: Mock, car_row: CarRow) -> None:
    mock_session.execute.return_value.scalars.return_value.all.return_value = [car_row]
    repo = PostgresCarCatalogRepository(mock_session)

    cars = repo.get_many([str(CAR_UUID)])

    assert list(cars) == [str(CAR_UUID)]


def test_count_cars_returns_scalar(mock_session: Mock) -> None:
    mock_session.execute.return_value.scalar.return_value = 7

    assert PostgresCarCatalogRepository(mock_session).count_cars(CarPredicate()) == 7


def test_price_range_of_empty_set_is_none(mock_session: Mock) -> None:
    mock_session.execute.return_value.one.return_value = (None, None)

    assert PostgresCarCatalogRepository(mock_session).aggregate_price_range(CarPredicate()) is None


def test_price_range(mock_session: Mock) -> None:
    mock_session.execute.return_value.one.return_value = (Decimal("5"), Decimal("9"))

    assert PostgresCarCatalogRepository(mock_session).aggregate_price_range(
        CarPredicate()
    ) == PriceRange(min=Decimal("5"), max=Decimal("9"))


def test_distinct_values_rejects_unknown_field(mock_session: Mock) -> None:
    with pytest.raises(ValueError):
        PostgresCarCatalogRepository(mock_session).distinct_values("price", CarPredicate())


# ==============================================================================
# Failures
# ==============================================================================


def test_connectivity_failure_is_collaborator_error(mock_session: Mock) -> None:
    mock_session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))
    repo = PostgresCarCatalogRepository(mock_session)

    with pytest.raises(CollaboratorError) as exc_info:
        repo.count_cars(CarPredicate())

    assert exc_info.value.context["collaborator"] == "Database"


def test_create_adds_row_and_flushes(mock_session: Mock) -> None:
    def server_defaults(row: CarRow) -> None:
        row.id = CAR_UUID
        row.created_at = row.updated_at = NOW

    mock_session.flush.side_effect = lambda: server_defaults(mock_session.add.call_args.args[0])
    repo = PostgresCarCatalogRepository(mock_session)

    car = repo.create(
        NewCar(
            make="Mazda",
            model="CX-5",
            year=2022,
            price=Decimal("27500.00"),
            images=("https://cdn.example/cx5.jpg",),
            status="SOLD",
        )
    )

    [row] = mock_session.add.call_args.args
    assert row.status == "SOLD"
    assert row.images == ["https://cdn.example/cx5.jpg"]
    assert car.id == str(CAR_UUID)
    assert car.status is CarStatus.SOLD
    assert car.created_at == NOW


def test_create_connectivity_failure_becomes_collaborator_error(mock_session: Mock) -> None:
    mock_session.flush.side_effect = OperationalError("INSERT", {}, Exception("refused"))
    repo = PostgresCarCatalogRepository(mock_session)

    with pytest.raises(CollaboratorError):
        repo.create(
            NewCar(
                make="Mazda",
                model="CX-5",
                year=2022,
                price=Decimal("27500.00"),
                images=("https://cdn.example/cx5.jpg",),
            )
        )
