from __future__ import annotations

from decimal import Decimal

from dealership.domain.car import Car, CatalogItem
from dealership.domain.search import SearchFilters
from dealership.entrypoints.http.dtos.catalog_search import (
    CarDetailResponseDTO,
    CarResponseDTO,
    CarsSearchQueryDTO,
    CatalogFacetsResponseDTO,
    CatalogSearchResponseDTO,
    PriceRangeDTO,
    UserTestDriveDTO,
)
from dealership.use_cases.get_car_by_id import GetCarByIdResponse
from dealership.use_cases.get_catalog_facets import CatalogFacets
from dealership.use_cases.search_car_catalog import SearchCarCatalogResponse


class CatalogSearchMapper:
    """Maps between REST DTOs and domain models for the car catalog."""

    @staticmethod
    def to_domain_filters(dto: CarsSearchQueryDTO) -> SearchFilters:
        """
        Converts query params to domain filters, handling Decimal conversion.

        Blank strings pass through untouched; the filter compiler treats
        them as "not provided".
        """
        return SearchFilters(
            search=dto.search,
            make=dto.make,
            body_type=dto.body_type,
            fuel_type=dto.fuel_type,
            transmission=dto.transmission,
            min_price=Decimal(dto.min_price) if dto.min_price else None,
            max_price=Decimal(dto.max_price) if dto.max_price else None,
            sort_by=dto.sort_by,
            page=dto.page,
            limit=dto.limit,
        )

    @staticmethod
    def to_car_response(car: Car, wishlisted: bool = False) -> CarResponseDTO:
        """Decimal -> str conversion happens here, at the boundary."""
        return CarResponseDTO(
            id=car.id,
            make=car.make,
            model=car.model,
            year=car.year,
            price=str(car.price),
            mileage=car.mileage,
            color=car.color,
            fuel_type=car.fuel_type,
            transmission=car.transmission,
            body_type=car.body_type,
            seats=car.seats,
            description=car.description,
            status=car.status.value,
            featured=car.featured,
            images=list(car.images),
            created_at=car.created_at,
            updated_at=car.updated_at,
            wishlisted=wishlisted,
        )

    @staticmethod
    def to_item_response(item: CatalogItem) -> CarResponseDTO:
        return CatalogSearchMapper.to_car_response(item.car, wishlisted=item.wishlisted)

    @staticmethod
    def to_response(result: SearchCarCatalogResponse) -> CatalogSearchResponseDTO:
        return CatalogSearchResponseDTO(
            cars=[CatalogSearchMapper.to_item_response(item) for item in result.items],
            total=result.total_count,
            page=result.page,
            limit=result.limit,
            total_pages=result.total_pages,
        )

    @staticmethod
    def to_detail_response(result: GetCarByIdResponse) -> CarDetailResponseDTO:
        booking = result.user_test_drive
        return CarDetailResponseDTO(
            car=CatalogSearchMapper.to_car_response(result.car, wishlisted=result.wishlisted),
            user_test_drive=(
                UserTestDriveDTO(
                    id=booking.id,
                    status=booking.status.value,
                    booking_date=booking.booking_date,
                )
                if booking
                else None
            ),
        )

    @staticmethod
    def to_facets_response(facets: CatalogFacets) -> CatalogFacetsResponseDTO:
        return CatalogFacetsResponseDTO(
            makes=facets.makes,
            body_types=facets.body_types,
            fuel_types=facets.fuel_types,
            transmissions=facets.transmissions,
            price_range=PriceRangeDTO(
                min=str(facets.price_range.min),
                max=str(facets.price_range.max),
            ),
        )
