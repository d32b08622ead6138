from pydantic import BaseModel, Field


class CarStatsDTO(BaseModel):
    total: int
    available: int
    unavailable: int
    sold: int
    featured: int


class BookingStatsDTO(BaseModel):
    total: int
    pending: int
    confirmed: int
    completed: int
    cancelled: int
    no_show: int
    conversion_rate: float


class DashboardResponseDTO(BaseModel):
    cars: CarStatsDTO
    test_drives: BookingStatsDTO


class CarMetadataResponseDTO(BaseModel):
    """Listing pre-fill suggested by the image classifier. Values are unverified."""

    make: str
    model: str
    year: int | float | str
    color: str
    body_type: str
    price: int | float | str
    mileage: int | float | str
    fuel_type: str
    transmission: str
    description: str
    confidence: float | str


class ImageSearchResponseDTO(BaseModel):
    make: str | None
    body_type: str | None
    color: str | None
    confidence: float | None


class AddCarRequestDTO(BaseModel):
    """New inventory entry. Images must already be uploaded; send their public URLs."""

    make: str = Field(max_length=50, examples=["Mazda"])
    model: str = Field(max_length=50, examples=["CX-5"])
    year: int = Field(examples=[2022])
    price: str = Field(
        description="Decimal as string",
        examples=["27500.00"],
        pattern=r"^-?\d+(\.\d{1,2})?$",
    )
    mileage: int = Field(default=0, examples=[8000])
    color: str = Field(default="", max_length=30, examples=["Red"])
    fuel_type: str = Field(default="", max_length=20, examples=["Gasoline"])
    transmission: str = Field(default="", max_length=20, examples=["Automatic"])
    body_type: str = Field(default="", max_length=30, examples=["SUV"])
    seats: int | None = Field(default=None, examples=[5])
    description: str = ""
    status: str = Field(
        default="AVAILABLE",
        description="AVAILABLE, UNAVAILABLE or SOLD",
        examples=["AVAILABLE"],
    )
    featured: bool = False
    images: list[str] = Field(
        description="Public URLs of the uploaded pictures, first one is the cover",
        examples=[["https://cdn.example/cars/cx5/front.jpg"]],
    )
