from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class CarResponseDTO(BaseModel):
    id: str
    make: str
    model: str
    year: int
    price: str
    mileage: int
    color: str
    fuel_type: str
    transmission: str
    body_type: str
    seats: int | None
    description: str
    status: str
    featured: bool
    images: list[str]
    created_at: datetime
    updated_at: datetime
    wishlisted: bool = False


class CarsSearchQueryDTO(BaseModel):
    """Query parameters for searching available cars."""

    search: str | None = Field(
        default=None,
        description="Free text matched against make, model and color (case-insensitive substring)",
        examples=["corolla"],
    )
    make: str | None = Field(
        default=None,
        description="Filter by make (case-insensitive exact match)",
        examples=["Toyota"],
    )
    body_type: str | None = Field(default=None, examples=["SUV"])
    fuel_type: str | None = Field(default=None, examples=["Hybrid"])
    transmission: str | None = Field(default=None, examples=["Automatic"])
    min_price: str | None = Field(
        default=None,
        description="Minimum price (inclusive, decimal as string)",
        examples=["10000.00"],
        pattern=r"^\d+(\.\d{1,2})?$",
    )
    max_price: str | None = Field(
        default=None,
        description="Maximum price (inclusive, decimal as string). Omit for no upper bound.",
        examples=["30000.00"],
        pattern=r"^\d+(\.\d{1,2})?$",
    )
    sort_by: str = Field(
        default="newest",
        description="One of newest, priceAsc, priceDesc",
        examples=["priceAsc"],
    )
    page: int = Field(default=1, description="1-based page number", examples=[1], ge=1)
    limit: int = Field(default=6, description="Page size", examples=[6], ge=1, le=100)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "make": "Toyota",
                "min_price": "10000.00",
                "max_price": "30000.00",
                "sort_by": "priceAsc",
                "page": 1,
                "limit": 6,
            }
        }
    )


class CatalogSearchResponseDTO(BaseModel):
    cars: list[CarResponseDTO]
    total: int
    page: int
    limit: int
    total_pages: int


class UserTestDriveDTO(BaseModel):
    id: str
    status: str
    booking_date: date


class CarDetailResponseDTO(BaseModel):
    car: CarResponseDTO
    user_test_drive: UserTestDriveDTO | None = None


class FeaturedCarsResponseDTO(BaseModel):
    cars: list[CarResponseDTO]


class PriceRangeDTO(BaseModel):
    min: str
    max: str


class CatalogFacetsResponseDTO(BaseModel):
    makes: list[str]
    body_types: list[str]
    fuel_types: list[str]
    transmissions: list[str]
    price_range: PriceRangeDTO


class SavedCarToggleResponseDTO(BaseModel):
    car_id: str
    saved: bool


class SavedCarsResponseDTO(BaseModel):
    cars: list[CarResponseDTO]
