"""Unit test suite for PostgresSavedCarRepository."""

from __future__ import annotations

import uuid
from unittest.mock import Mock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.orm import Session

from dealership.adapters.postgres_saved_car_repository import PostgresSavedCarRepository

CAR_ID = "00000000-0000-0000-0000-000000000001"


@pytest.fixture()
def mock_session() -> Mock:
    return Mock(spec=Session)


def test_toggle_removes_existing_row(mock_session: Mock) -> None:
    mock_session.execute.return_value = Mock(rowcount=1)

    saved = PostgresSavedCarRepository(mock_session).toggle("user-1", CAR_ID)

    assert saved is False
    assert mock_session.execute.call_count == 1


def test_toggle_inserts_when_nothing_was_removed(mock_session: Mock) -> None:
    mock_session.execute.side_effect = [Mock(rowcount=0), Mock()]

    saved = PostgresSavedCarRepository(mock_session).toggle("user-1", CAR_ID)

    assert saved is True
    insert = mock_session.execute.call_args_list[1].args[0]
    assert "ON CONFLICT DO NOTHING" in str(insert.compile(dialect=postgresql.dialect()))


def test_saved_among_with_no_ids_skips_query(mock_session: Mock) -> None:
    assert PostgresSavedCarRepository(mock_session).saved_among("user-1", []) == set()
    mock_session.execute.assert_not_called()


def test_saved_among_returns_string_ids(mock_session: Mock) -> None:
    mock_session.execute.return_value.scalars.return_value.all.return_value = [uuid.UUID(CAR_ID)]

    assert PostgresSavedCarRepository(mock_session).saved_among("user-1", [CAR_ID]) == {CAR_ID}


def test_list_car_ids_orders_by_saved_at(mock_session: Mock) -> None:
    mock_session.execute.return_value.scalars.return_value.all.return_value = []

    PostgresSavedCarRepository(mock_session).list_car_ids("user-1")

    query = mock_session.execute.call_args.args[0]
    assert "ORDER BY saved_cars.saved_at DESC" in str(query.compile(dialect=postgresql.dialect()))
