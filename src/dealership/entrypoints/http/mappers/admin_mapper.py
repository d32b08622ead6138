from __future__ import annotations

from decimal import Decimal
from typing import Any

from dealership.domain.ai_metadata import AIExtractedCarMetadata, ImageSearchHints
from dealership.domain.car import NewCar
from dealership.domain.dashboard import DashboardStats
from dealership.entrypoints.http.dtos.admin import (
    AddCarRequestDTO,
    BookingStatsDTO,
    CarMetadataResponseDTO,
    CarStatsDTO,
    DashboardResponseDTO,
    ImageSearchResponseDTO,
)


def _scalar(value: Any) -> int | float | str:
    # Classifier values are unverified; anything non-scalar is shown as text
    if isinstance(value, (int, float, str)) and not isinstance(value, bool):
        return value
    return str(value)


class AdminMapper:
    @staticmethod
    def to_dashboard_response(stats: DashboardStats) -> DashboardResponseDTO:
        cars, drives = stats.cars, stats.test_drives
        return DashboardResponseDTO(
            cars=CarStatsDTO(
                total=cars.total,
                available=cars.available,
                unavailable=cars.unavailable,
                sold=cars.sold,
                featured=cars.featured,
            ),
            test_drives=BookingStatsDTO(
                total=drives.total,
                pending=drives.pending,
                confirmed=drives.confirmed,
                completed=drives.completed,
                cancelled=drives.cancelled,
                no_show=drives.no_show,
                conversion_rate=float(drives.conversion_rate),
            ),
        )

    @staticmethod
    def to_metadata_response(metadata: AIExtractedCarMetadata) -> CarMetadataResponseDTO:
        return CarMetadataResponseDTO(
            make=metadata.make,
            model=metadata.model,
            year=_scalar(metadata.year),
            color=metadata.color,
            body_type=metadata.body_type,
            price=_scalar(metadata.price),
            mileage=_scalar(metadata.mileage),
            fuel_type=metadata.fuel_type,
            transmission=metadata.transmission,
            description=metadata.description,
            confidence=_scalar(metadata.confidence),
        )

    @staticmethod
    def to_image_search_response(hints: ImageSearchHints) -> ImageSearchResponseDTO:
        return ImageSearchResponseDTO(
            make=hints.make,
            body_type=hints.body_type,
            color=hints.color,
            confidence=hints.confidence,
        )

    @staticmethod
    def to_new_car(dto: AddCarRequestDTO) -> NewCar:
        return NewCar(
            make=dto.make.strip(),
            model=dto.model.strip(),
            year=dto.year,
            price=Decimal(dto.price),
            images=tuple(url.strip() for url in dto.images),
            mileage=dto.mileage,
            color=dto.color.strip(),
            fuel_type=dto.fuel_type.strip(),
            transmission=dto.transmission.strip(),
            body_type=dto.body_type.strip(),
            seats=dto.seats,
            description=dto.description,
            status=dto.status.strip().upper(),
            featured=dto.featured,
        )
