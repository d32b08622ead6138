from fastapi import APIRouter, Depends

from dealership.domain.identity import Identity
from dealership.entrypoints.http.dependencies import (
    get_caller,
    get_list_saved_cars_use_case,
    get_toggle_saved_car_use_case,
)
from dealership.entrypoints.http.dtos.catalog_search import (
    SavedCarsResponseDTO,
    SavedCarToggleResponseDTO,
)
from dealership.entrypoints.http.mappers.catalog_search_mapper import CatalogSearchMapper
from dealership.use_cases.list_saved_cars import ListSavedCars
from dealership.use_cases.toggle_saved_car import ToggleSavedCar, ToggleSavedCarRequest

router = APIRouter(tags=["Saved cars"])


@router.post(
    "/saved-cars/{car_id}/toggle",
    response_model=SavedCarToggleResponseDTO,
    summary="Add or remove a car from the caller's wishlist",
)
def toggle_saved_car(
    car_id: str,
    caller: Identity | None = Depends(get_caller),
    use_case: ToggleSavedCar = Depends(get_toggle_saved_car_use_case),
) -> SavedCarToggleResponseDTO:
    result = use_case.execute(ToggleSavedCarRequest(caller=caller, car_id=car_id))
    return SavedCarToggleResponseDTO(car_id=result.car_id, saved=result.saved)


@router.get("/saved-cars", response_model=SavedCarsResponseDTO, summary="Caller's wishlist")
def list_saved_cars(
    caller: Identity | None = Depends(get_caller),
    use_case: ListSavedCars = Depends(get_list_saved_cars_use_case),
) -> SavedCarsResponseDTO:
    result = use_case.execute(caller)
    return SavedCarsResponseDTO(
        cars=[CatalogSearchMapper.to_item_response(item) for item in result.items]
    )
