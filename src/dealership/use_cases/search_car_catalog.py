from __future__ import annotations

import logging
from dataclasses import dataclass

from dealership.domain.car import CatalogItem
from dealership.domain.identity import Identity
from dealership.domain.paging import resolve_page, total_pages
from dealership.domain.search import SearchFilters, compile_filters
from dealership.ports.car_catalog_repository import CarCatalogRepository
from dealership.ports.saved_car_repository import SavedCarRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SearchCarCatalogRequest:
    filters: SearchFilters
    caller: Identity | None = None


@dataclass(frozen=True, slots=True)
class SearchCarCatalogResponse:
    items: list[CatalogItem]
    total_count: int
    page: int
    limit: int
    total_pages: int


class SearchCarCatalog:
    """
    List available cars matching the filters, one page at a time.

    Steps: validate, compile the predicate, count, fetch the page slice under
    a total ordering, then flag wishlisted cars for the caller with a single
    batched lookup. Read-only.
    """

    def __init__(
        self,
        car_catalog_repository: CarCatalogRepository,
        saved_car_repository: SavedCarRepository,
    ) -> None:
        self._cars = car_catalog_repository
        self._saved = saved_car_repository

    def execute(self, request: SearchCarCatalogRequest) -> SearchCarCatalogResponse:
        """
        Execute catalog search.

        Raises:
            FilterValidationError: If filter parameters are invalid
            PagingValidationError: If sort key, page or limit are invalid
            CollaboratorError: If the store is unreachable
        """
        filters = request.filters
        filters.validate()
        window = resolve_page(filters.sort_by, filters.page, filters.limit)
        predicate = compile_filters(filters)

        total_count = self._cars.count_cars(predicate)
        cars = []
        if window.offset < total_count:
            cars = self._cars.list_cars(
                predicate=predicate,
                ordering=window.ordering,
                offset=window.offset,
                limit=window.limit,
            )

        saved: set[str] = set()
        if request.caller is not None and cars:
            saved = self._saved.saved_among(request.caller.user_id, [car.id for car in cars])

        logger.debug(
            "Catalog search",
            extra={"total_count": total_count, "page": window.page, "limit": window.limit},
        )

        return SearchCarCatalogResponse(
            items=[CatalogItem(car=car, wishlisted=car.id in saved) for car in cars],
            total_count=total_count,
            page=window.page,
            limit=window.limit,
            total_pages=total_pages(total_count, window.limit),
        )
