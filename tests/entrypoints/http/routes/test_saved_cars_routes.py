"""Test suite for the /v1/saved-cars routes."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from dealership.domain.car import Car, CatalogItem
from dealership.domain.errors import NotFoundError, UnauthorizedError
from dealership.domain.identity import Identity
from dealership.entrypoints.http.dependencies import (
    get_list_saved_cars_use_case,
    get_toggle_saved_car_use_case,
)
from dealership.entrypoints.http.exception_handlers import register_exception_handlers
from dealership.entrypoints.http.routes.saved_cars import router
from dealership.use_cases.list_saved_cars import ListSavedCarsResponse
from dealership.use_cases.toggle_saved_car import ToggleSavedCarResponse

CAR_ID = "550e8400-e29b-41d4-a716-446655440000"


@pytest.fixture
def app() -> FastAPI:
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router, prefix="/v1")
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def mock_use_case() -> Mock:
    return Mock()


def test_toggle_saves_car(app: FastAPI, client: TestClient, mock_use_case: Mock) -> None:
    mock_use_case.execute.return_value = ToggleSavedCarResponse(car_id=CAR_ID, saved=True)
    app.dependency_overrides[get_toggle_saved_car_use_case] = lambda: mock_use_case

    response = client.post(f"/v1/saved-cars/{CAR_ID}/toggle", headers={"X-User-Id": "user-1"})

    assert response.status_code == 200
    assert response.json() == {"car_id": CAR_ID, "saved": True}
    request = mock_use_case.execute.call_args.args[0]
    assert request.caller == Identity(user_id="user-1")
    assert request.car_id == CAR_ID


def test_toggle_anonymous_is_401(app: FastAPI, client: TestClient, mock_use_case: Mock) -> None:
    mock_use_case.execute.side_effect = UnauthorizedError("Authentication required")
    app.dependency_overrides[get_toggle_saved_car_use_case] = lambda: mock_use_case

    response = client.post(f"/v1/saved-cars/{CAR_ID}/toggle")

    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"
    assert mock_use_case.execute.call_args.args[0].caller is None


def test_toggle_unknown_car_is_404(app: FastAPI, client: TestClient, mock_use_case: Mock) -> None:
    mock_use_case.execute.side_effect = NotFoundError("Car", CAR_ID)
    app.dependency_overrides[get_toggle_saved_car_use_case] = lambda: mock_use_case

    response = client.post(f"/v1/saved-cars/{CAR_ID}/toggle", headers={"X-User-Id": "user-1"})

    assert response.status_code == 404


def test_list_saved_cars_marks_every_car_wishlisted(
    app: FastAPI, client: TestClient, mock_use_case: Mock
) -> None:
    car = Car(id=CAR_ID, make="Honda", model="Civic", year=2021, price=Decimal("21000.00"))
    mock_use_case.execute.return_value = ListSavedCarsResponse(
        items=[CatalogItem(car=car, wishlisted=True)]
    )
    app.dependency_overrides[get_list_saved_cars_use_case] = lambda: mock_use_case

    response = client.get("/v1/saved-cars", headers={"X-User-Id": "user-1"})

    assert response.status_code == 200
    cars = response.json()["cars"]
    assert [(c["id"], c["wishlisted"]) for c in cars] == [(CAR_ID, True)]
    mock_use_case.execute.assert_called_once_with(Identity(user_id="user-1"))
