from fastapi import APIRouter, Depends, File, UploadFile, status

from dealership.domain.ai_metadata import PayloadRejected
from dealership.domain.identity import Identity
from dealership.entrypoints.http.dependencies import (
    get_add_car_use_case,
    get_caller,
    get_dashboard_stats_use_case,
    get_extract_car_metadata_use_case,
    get_list_all_test_drives_use_case,
    get_update_test_drive_status_use_case,
)
from dealership.entrypoints.http.dtos.admin import (
    AddCarRequestDTO,
    CarMetadataResponseDTO,
    DashboardResponseDTO,
)
from dealership.entrypoints.http.dtos.catalog_search import CarResponseDTO
from dealership.entrypoints.http.dtos.test_drive import (
    BookingListResponseDTO,
    BookingResponseDTO,
    UpdateTestDriveStatusRequestDTO,
)
from dealership.entrypoints.http.error_responses import ErrorResponse
from dealership.entrypoints.http.mappers.admin_mapper import AdminMapper
from dealership.entrypoints.http.mappers.booking_mapper import BookingMapper
from dealership.entrypoints.http.mappers.catalog_search_mapper import CatalogSearchMapper
from dealership.use_cases.add_car import AddCar, AddCarRequest
from dealership.use_cases.extract_car_metadata import ExtractCarMetadata, ImageRequest
from dealership.use_cases.get_dashboard_stats import GetDashboardStats
from dealership.use_cases.list_test_drives import ListAllTestDrives, ListAllTestDrivesRequest
from dealership.use_cases.update_test_drive_status import (
    UpdateTestDriveStatus,
    UpdateTestDriveStatusRequest,
)

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/test-drives", response_model=BookingListResponseDTO, summary="All test drives")
def list_test_drives(
    status: str | None = None,
    search: str | None = None,
    caller: Identity | None = Depends(get_caller),
    use_case: ListAllTestDrives = Depends(get_list_all_test_drives_use_case),
) -> BookingListResponseDTO:
    result = use_case.execute(
        ListAllTestDrivesRequest(caller=caller, status=status, search=search)
    )
    return BookingMapper.to_list_response(result)


@router.patch(
    "/test-drives/{booking_id}/status",
    response_model=BookingResponseDTO,
    summary="Set a test drive's status",
    responses={
        409: {"model": ErrorResponse, "description": "Booking is in a terminal status"},
    },
)
def update_test_drive_status(
    booking_id: str,
    body: UpdateTestDriveStatusRequestDTO,
    caller: Identity | None = Depends(get_caller),
    use_case: UpdateTestDriveStatus = Depends(get_update_test_drive_status_use_case),
) -> BookingResponseDTO:
    result = use_case.execute(
        UpdateTestDriveStatusRequest(caller=caller, booking_id=booking_id, status=body.status)
    )
    return BookingMapper.to_booking_response(result.booking)


@router.get("/dashboard", response_model=DashboardResponseDTO, summary="Dashboard statistics")
def dashboard(
    caller: Identity | None = Depends(get_caller),
    use_case: GetDashboardStats = Depends(get_dashboard_stats_use_case),
) -> DashboardResponseDTO:
    return AdminMapper.to_dashboard_response(use_case.execute(caller))


@router.post(
    "/cars",
    response_model=CarResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Add a car to the inventory",
    responses={
        422: {"model": ErrorResponse, "description": "Invalid inventory entry"},
    },
)
def add_car(
    body: AddCarRequestDTO,
    caller: Identity | None = Depends(get_caller),
    use_case: AddCar = Depends(get_add_car_use_case),
) -> CarResponseDTO:
    result = use_case.execute(AddCarRequest(caller=caller, car=AdminMapper.to_new_car(body)))
    return CatalogSearchMapper.to_car_response(result.car)


@router.post(
    "/cars/extract",
    response_model=CarMetadataResponseDTO,
    summary="Pre-fill a listing from a car photo",
    responses={
        422: {
            "model": ErrorResponse,
            "description": "Classifier reply was malformed or incomplete",
        },
        503: {"model": ErrorResponse, "description": "Classifier unavailable"},
    },
)
async def extract_car_metadata(
    image: UploadFile = File(...),
    caller: Identity | None = Depends(get_caller),
    use_case: ExtractCarMetadata = Depends(get_extract_car_metadata_use_case),
) -> CarMetadataResponseDTO:
    content = await image.read()
    result = use_case.execute(
        ImageRequest(image=content, mime_type=image.content_type or "", caller=caller)
    )
    if isinstance(result, PayloadRejected):
        raise result.error
    return AdminMapper.to_metadata_response(result.value)
