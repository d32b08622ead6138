from fastapi import APIRouter, Depends, File, UploadFile

from dealership.domain.ai_metadata import PayloadRejected
from dealership.domain.identity import Identity
from dealership.entrypoints.http.dependencies import (
    get_caller,
    get_catalog_facets_use_case,
    get_featured_cars_use_case,
    get_get_car_by_id_use_case,
    get_search_catalog_use_case,
    get_suggest_search_from_image_use_case,
)
from dealership.entrypoints.http.dtos.admin import ImageSearchResponseDTO
from dealership.entrypoints.http.dtos.catalog_search import (
    CarDetailResponseDTO,
    CarsSearchQueryDTO,
    CatalogFacetsResponseDTO,
    CatalogSearchResponseDTO,
    FeaturedCarsResponseDTO,
)
from dealership.entrypoints.http.error_responses import ErrorResponse
from dealership.entrypoints.http.mappers.admin_mapper import AdminMapper
from dealership.entrypoints.http.mappers.catalog_search_mapper import CatalogSearchMapper
from dealership.use_cases.extract_car_metadata import ImageRequest, SuggestSearchFromImage
from dealership.use_cases.get_car_by_id import GetCarById, GetCarByIdRequest
from dealership.use_cases.get_catalog_facets import GetCatalogFacets
from dealership.use_cases.get_featured_cars import GetFeaturedCars, GetFeaturedCarsRequest
from dealership.use_cases.search_car_catalog import SearchCarCatalog, SearchCarCatalogRequest

router = APIRouter(tags=["Cars"])


@router.get(
    "/cars",
    response_model=CatalogSearchResponseDTO,
    summary="Search available cars",
    description="""
    Search available cars with optional facets and pagination.

    ## Filters
    - All facets use AND semantics; blank values are ignored
    - search: case-insensitive substring on make, model or color
    - make/body_type/fuel_type/transmission: case-insensitive exact match
    - min_price/max_price: inclusive; max_price below min_price matches nothing

    ## Sorting & pagination
    - sort_by: newest (default), priceAsc, priceDesc; ties broken by id
    - page is 1-based; limit defaults to 6

    ## Example
    ```
    GET /v1/cars?make=Toyota&min_price=10000&max_price=30000&sort_by=priceAsc&limit=2
    ```
    """,
)
def search_cars(
    query: CarsSearchQueryDTO = Depends(),
    caller: Identity | None = Depends(get_caller),
    use_case: SearchCarCatalog = Depends(get_search_catalog_use_case),
) -> CatalogSearchResponseDTO:
    """Search cars endpoint following parse → execute → map → return pattern."""
    request = SearchCarCatalogRequest(
        filters=CatalogSearchMapper.to_domain_filters(query),
        caller=caller,
    )
    result = use_case.execute(request)
    return CatalogSearchMapper.to_response(result)


@router.get("/cars/featured", response_model=FeaturedCarsResponseDTO, summary="Featured cars")
def featured_cars(
    limit: int = 3,
    use_case: GetFeaturedCars = Depends(get_featured_cars_use_case),
) -> FeaturedCarsResponseDTO:
    result = use_case.execute(GetFeaturedCarsRequest(limit=limit))
    return FeaturedCarsResponseDTO(
        cars=[CatalogSearchMapper.to_car_response(car) for car in result.cars]
    )


@router.get(
    "/cars/facets",
    response_model=CatalogFacetsResponseDTO,
    summary="Filter values offered by the search form",
)
def catalog_facets(
    use_case: GetCatalogFacets = Depends(get_catalog_facets_use_case),
) -> CatalogFacetsResponseDTO:
    return CatalogSearchMapper.to_facets_response(use_case.execute())


@router.post(
    "/cars/image-search",
    response_model=ImageSearchResponseDTO,
    summary="Suggest search filters from a car photo",
)
async def image_search(
    image: UploadFile = File(...),
    use_case: SuggestSearchFromImage = Depends(get_suggest_search_from_image_use_case),
) -> ImageSearchResponseDTO:
    content = await image.read()
    result = use_case.execute(
        ImageRequest(image=content, mime_type=image.content_type or "")
    )
    if isinstance(result, PayloadRejected):
        raise result.error
    return AdminMapper.to_image_search_response(result.value)


@router.get(
    "/cars/{car_id}",
    response_model=CarDetailResponseDTO,
    summary="Car detail",
    responses={
        404: {"model": ErrorResponse, "description": "Car not found"},
        422: {"model": ErrorResponse, "description": "Invalid UUID"},
    },
)
def get_car(
    car_id: str,
    caller: Identity | None = Depends(get_caller),
    use_case: GetCarById = Depends(get_get_car_by_id_use_case),
) -> CarDetailResponseDTO:
    result = use_case.execute(GetCarByIdRequest(car_id=car_id, caller=caller))
    return CatalogSearchMapper.to_detail_response(result)
