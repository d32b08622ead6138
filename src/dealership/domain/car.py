from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from dealership.domain.errors import ValidationError


class CarStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    UNAVAILABLE = "UNAVAILABLE"
    SOLD = "SOLD"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_car_status(value: str | CarStatus) -> CarStatus:
    try:
        return CarStatus(value)
    except ValueError:
        raise ValidationError(
            errors=[
                {
                    "field": "status",
                    "message": f"Must be one of {[s.value for s in CarStatus]}",
                    "code": "INVALID_STATUS",
                }
            ]
        )


@dataclass(frozen=True, slots=True)
class NewCar:
    """
    Fields of an inventory entry before it is stored.

    ``images`` are public URLs of pictures already uploaded to object storage.
    """

    make: str
    model: str
    year: int
    price: Decimal
    images: tuple[str, ...]
    mileage: int = 0
    color: str = ""
    fuel_type: str = ""
    transmission: str = ""
    body_type: str = ""
    seats: int | None = None
    description: str = ""
    status: str | CarStatus = CarStatus.AVAILABLE
    featured: bool = False

    def validate(self) -> None:
        """
        Raises:
            ValidationError: Listing every invalid field
        """
        errors = []

        def reject(field_name: str, message: str, code: str) -> None:
            errors.append({"field": field_name, "message": message, "code": code})

        for name in ("make", "model"):
            if not getattr(self, name).strip():
                reject(name, "Must not be blank", "REQUIRED")
        if not self.price.is_finite() or self.price < 0:
            reject("price", "Must be a non-negative amount", "OUT_OF_RANGE")
        if self.mileage < 0:
            reject("mileage", "Must not be negative", "OUT_OF_RANGE")
        if self.seats is not None and self.seats < 1:
            reject("seats", "Must be at least 1", "OUT_OF_RANGE")
        if self.status not in {s.value for s in CarStatus}:
            reject("status", f"Must be one of {[s.value for s in CarStatus]}", "INVALID_STATUS")

        if not self.images:
            reject("images", "At least one image is required", "REQUIRED")
        elif not all(url.startswith(("https://", "http://")) for url in self.images):
            reject("images", "Must be absolute http(s) URLs", "INVALID_URL")

        if errors:
            raise ValidationError(errors=errors)


@dataclass(frozen=True)
class Car:
    id: str
    make: str
    model: str
    year: int
    price: Decimal
    mileage: int = 0
    color: str = ""
    fuel_type: str = ""
    transmission: str = ""
    body_type: str = ""
    seats: int | None = None
    description: str = ""
    status: CarStatus = CarStatus.AVAILABLE
    featured: bool = False
    images: tuple[str, ...] = ()
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True, slots=True)
class CatalogItem:
    """A car as seen by a particular caller."""

    car: Car
    wishlisted: bool = False


@dataclass(frozen=True, slots=True)
class PriceRange:
    min: Decimal
    max: Decimal


@dataclass(frozen=True, slots=True)
class InventoryEntry:
    """Minimal projection of a car used for read-side aggregation."""

    id: str
    status: CarStatus
    featured: bool
