"""
Dependency injection for FastAPI routes.

Key principle: Database sessions are per-request, never cached.
Only stateless singletons (cache invalidator, classifier client) use lru_cache.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Generator

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from dealership.adapters.after_commit_cache_invalidator import AfterCommitCacheInvalidator
from dealership.adapters.logging_cache_invalidator import LoggingCacheInvalidator
from dealership.adapters.openai_car_image_classifier import OpenAICarImageClassifier
from dealership.adapters.postgres_booking_repository import PostgresBookingRepository
from dealership.adapters.postgres_car_catalog_repository import PostgresCarCatalogRepository
from dealership.adapters.postgres_saved_car_repository import PostgresSavedCarRepository
from dealership.domain.identity import Identity
from dealership.infra.db.session import get_session
from dealership.ports.cache_invalidator import CacheInvalidator
from dealership.ports.car_image_classifier import CarImageClassifier
from dealership.use_cases.add_car import AddCar
from dealership.use_cases.book_test_drive import BookTestDrive
from dealership.use_cases.cancel_test_drive import CancelTestDrive
from dealership.use_cases.extract_car_metadata import ExtractCarMetadata, SuggestSearchFromImage
from dealership.use_cases.get_car_by_id import GetCarById
from dealership.use_cases.get_catalog_facets import GetCatalogFacets
from dealership.use_cases.get_dashboard_stats import GetDashboardStats
from dealership.use_cases.get_featured_cars import GetFeaturedCars
from dealership.use_cases.list_saved_cars import ListSavedCars
from dealership.use_cases.list_test_drives import ListAllTestDrives, ListUserTestDrives
from dealership.use_cases.search_car_catalog import SearchCarCatalog
from dealership.use_cases.toggle_saved_car import ToggleSavedCar
from dealership.use_cases.update_test_drive_status import UpdateTestDriveStatus

ADMIN_ROLE = "ADMIN"


def get_db() -> Generator[Session, None, None]:
    """
    Provides a database session for a single request.

    Commit on success, rollback on exception, close at the end of the
    request (see get_session).
    """
    with get_session() as session:
        yield session


def get_caller(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Identity | None:
    """
    Identity vouched for by the upstream authentication layer.

    No X-User-Id header means an anonymous caller.
    """
    if not x_user_id or not x_user_id.strip():
        return None
    return Identity(
        user_id=x_user_id.strip(),
        is_admin=(x_user_role or "").strip().upper() == ADMIN_ROLE,
    )


@lru_cache
def get_cache_invalidator() -> CacheInvalidator:
    return LoggingCacheInvalidator()


def get_request_cache_invalidator(
    db: Session = Depends(get_db),
    target: CacheInvalidator = Depends(get_cache_invalidator),
) -> CacheInvalidator:
    """Invalidator bound to the request session; views go out after its commit."""
    return AfterCommitCacheInvalidator(session=db, target=target)


@lru_cache
def get_car_image_classifier() -> CarImageClassifier:
    return OpenAICarImageClassifier()


# ==============================================================================
# Catalog
# ==============================================================================


def get_search_catalog_use_case(db: Session = Depends(get_db)) -> SearchCarCatalog:
    return SearchCarCatalog(
        car_catalog_repository=PostgresCarCatalogRepository(session=db),
        saved_car_repository=PostgresSavedCarRepository(session=db),
    )


def get_get_car_by_id_use_case(db: Session = Depends(get_db)) -> GetCarById:
    return GetCarById(
        car_catalog_repository=PostgresCarCatalogRepository(session=db),
        saved_car_repository=PostgresSavedCarRepository(session=db),
        booking_repository=PostgresBookingRepository(session=db),
    )


def get_featured_cars_use_case(db: Session = Depends(get_db)) -> GetFeaturedCars:
    return GetFeaturedCars(car_catalog_repository=PostgresCarCatalogRepository(session=db))


def get_catalog_facets_use_case(db: Session = Depends(get_db)) -> GetCatalogFacets:
    return GetCatalogFacets(car_catalog_repository=PostgresCarCatalogRepository(session=db))


def get_suggest_search_from_image_use_case(
    classifier: CarImageClassifier = Depends(get_car_image_classifier),
) -> SuggestSearchFromImage:
    return SuggestSearchFromImage(classifier=classifier)


# ==============================================================================
# Wishlist
# ==============================================================================


def get_toggle_saved_car_use_case(
    db: Session = Depends(get_db),
    invalidator: CacheInvalidator = Depends(get_request_cache_invalidator),
) -> ToggleSavedCar:
    return ToggleSavedCar(
        car_catalog_repository=PostgresCarCatalogRepository(session=db),
        saved_car_repository=PostgresSavedCarRepository(session=db),
        cache_invalidator=invalidator,
    )


def get_list_saved_cars_use_case(db: Session = Depends(get_db)) -> ListSavedCars:
    return ListSavedCars(
        car_catalog_repository=PostgresCarCatalogRepository(session=db),
        saved_car_repository=PostgresSavedCarRepository(session=db),
    )


# ==============================================================================
# Test drives
# ==============================================================================


def get_book_test_drive_use_case(
    db: Session = Depends(get_db),
    invalidator: CacheInvalidator = Depends(get_request_cache_invalidator),
) -> BookTestDrive:
    return BookTestDrive(
        car_catalog_repository=PostgresCarCatalogRepository(session=db),
        booking_repository=PostgresBookingRepository(session=db),
        cache_invalidator=invalidator,
    )


def get_cancel_test_drive_use_case(
    db: Session = Depends(get_db),
    invalidator: CacheInvalidator = Depends(get_request_cache_invalidator),
) -> CancelTestDrive:
    return CancelTestDrive(
        booking_repository=PostgresBookingRepository(session=db),
        cache_invalidator=invalidator,
    )


def get_update_test_drive_status_use_case(
    db: Session = Depends(get_db),
    invalidator: CacheInvalidator = Depends(get_request_cache_invalidator),
) -> UpdateTestDriveStatus:
    return UpdateTestDriveStatus(
        booking_repository=PostgresBookingRepository(session=db),
        cache_invalidator=invalidator,
    )


def get_list_user_test_drives_use_case(db: Session = Depends(get_db)) -> ListUserTestDrives:
    return ListUserTestDrives(
        booking_repository=PostgresBookingRepository(session=db),
        car_catalog_repository=PostgresCarCatalogRepository(session=db),
    )


def get_list_all_test_drives_use_case(db: Session = Depends(get_db)) -> ListAllTestDrives:
    return ListAllTestDrives(
        booking_repository=PostgresBookingRepository(session=db),
        car_catalog_repository=PostgresCarCatalogRepository(session=db),
    )


# ==============================================================================
# Admin
# ==============================================================================


def get_dashboard_stats_use_case(db: Session = Depends(get_db)) -> GetDashboardStats:
    return GetDashboardStats(
        car_catalog_repository=PostgresCarCatalogRepository(session=db),
        booking_repository=PostgresBookingRepository(session=db),
    )


def get_extract_car_metadata_use_case(
    classifier: CarImageClassifier = Depends(get_car_image_classifier),
) -> ExtractCarMetadata:
    return ExtractCarMetadata(classifier=classifier)


def get_add_car_use_case(
    db: Session = Depends(get_db),
    invalidator: CacheInvalidator = Depends(get_request_cache_invalidator),
) -> AddCar:
    return AddCar(
        car_catalog_repository=PostgresCarCatalogRepository(session=db),
        cache_invalidator=invalidator,
    )
