"""
Unit tests for FastAPI application setup and configuration.

This test suite verifies the application structure and wiring:
- build_app() creates properly configured FastAPI instance
- Application metadata (title, version, docs URLs)
- Router registration (health at the root, everything else under /v1)
- OpenAPI schema generation
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from dealership.entrypoints.http.app import build_app


@pytest.fixture
def app() -> FastAPI:
    return build_app()


# ==============================================================================
# Application Creation
# ==============================================================================


def test_build_app_returns_fastapi_instance(app: FastAPI) -> None:
    assert isinstance(app, FastAPI)


def test_build_app_creates_new_instance_each_call() -> None:
    assert build_app() is not build_app()


# ==============================================================================
# Application Metadata
# ==============================================================================


def test_app_metadata(app: FastAPI) -> None:
    assert app.title == "Car Dealership API"
    assert app.version == "0.1.0"
    assert "X-User-Id" in app.description


def test_app_documentation_urls(app: FastAPI) -> None:
    assert (app.docs_url, app.redoc_url, app.openapi_url) == ("/docs", "/redoc", "/openapi.json")


def test_app_documentation_endpoints_are_accessible(app: FastAPI) -> None:
    client = TestClient(app)

    assert client.get("/docs").status_code == 200
    assert client.get("/redoc").status_code == 200

    response = client.get("/openapi.json")
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"


# ==============================================================================
# Router Registration
# ==============================================================================


@pytest.mark.parametrize(
    ("path", "method"),
    [
        ("/health", "get"),
        ("/v1/cars", "get"),
        ("/v1/cars/featured", "get"),
        ("/v1/cars/facets", "get"),
        ("/v1/cars/image-search", "post"),
        ("/v1/cars/{car_id}", "get"),
        ("/v1/saved-cars", "get"),
        ("/v1/saved-cars/{car_id}/toggle", "post"),
        ("/v1/test-drives", "post"),
        ("/v1/test-drives", "get"),
        ("/v1/test-drives/{booking_id}/cancel", "post"),
        ("/v1/admin/test-drives", "get"),
        ("/v1/admin/test-drives/{booking_id}/status", "patch"),
        ("/v1/admin/dashboard", "get"),
        ("/v1/admin/cars", "post"),
        ("/v1/admin/cars/extract", "post"),
    ],
)
def test_app_registers_route(app: FastAPI, path: str, method: str) -> None:
    paths = app.openapi()["paths"]

    assert method in paths[path]


def test_api_routes_are_not_served_without_prefix(app: FastAPI) -> None:
    paths = app.openapi()["paths"]

    assert "/cars" not in paths
    assert "/test-drives" not in paths


def test_search_endpoint_documents_query_params(app: FastAPI) -> None:
    operation = app.openapi()["paths"]["/v1/cars"]["get"]
    param_names = {p["name"] for p in operation["parameters"]}

    assert {
        "search",
        "make",
        "body_type",
        "fuel_type",
        "transmission",
        "min_price",
        "max_price",
        "sort_by",
        "page",
        "limit",
    } <= param_names
    assert "Cars" in operation["tags"]


# ==============================================================================
# Route Accessibility
# ==============================================================================


def test_health_endpoint_responds(app: FastAPI) -> None:
    response = TestClient(app).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_app_returns_404_for_unknown_routes(app: FastAPI) -> None:
    client = TestClient(app)

    assert client.get("/unknown").status_code == 404
    assert client.get("/v1/unknown").status_code == 404


def test_module_level_app_is_from_build_app() -> None:
    from dealership.entrypoints.http.app import app

    assert isinstance(app, FastAPI)
    assert app.title == "Car Dealership API"
