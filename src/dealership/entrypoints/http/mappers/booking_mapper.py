from __future__ import annotations

from dealership.domain.booking import Booking
from dealership.domain.car import Car
from dealership.domain.identity import Identity
from dealership.entrypoints.http.dtos.test_drive import (
    BookingListResponseDTO,
    BookingResponseDTO,
    BookTestDriveRequestDTO,
)
from dealership.entrypoints.http.mappers.catalog_search_mapper import CatalogSearchMapper
from dealership.use_cases.book_test_drive import BookTestDriveRequest
from dealership.use_cases.list_test_drives import ListTestDrivesResponse


class BookingMapper:
    """Maps between REST DTOs and domain models for test-drive bookings."""

    @staticmethod
    def to_domain_request(dto: BookTestDriveRequestDTO, caller: Identity | None) -> BookTestDriveRequest:
        return BookTestDriveRequest(
            caller=caller,
            car_id=dto.car_id,
            booking_date=dto.booking_date,
            start_time=dto.start_time,
            end_time=dto.end_time,
            notes=dto.notes,
        )

    @staticmethod
    def to_booking_response(booking: Booking, car: Car | None = None) -> BookingResponseDTO:
        return BookingResponseDTO(
            id=booking.id,
            car_id=booking.car_id,
            user_id=booking.user_id,
            booking_date=booking.booking_date,
            start_time=booking.start_time,
            end_time=booking.end_time,
            status=booking.status.value,
            notes=booking.notes,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
            car=CatalogSearchMapper.to_car_response(car) if car else None,
        )

    @staticmethod
    def to_list_response(result: ListTestDrivesResponse) -> BookingListResponseDTO:
        return BookingListResponseDTO(
            test_drives=[
                BookingMapper.to_booking_response(item.booking, item.car) for item in result.items
            ]
        )
