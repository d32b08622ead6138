"""Catalog search filters and the facet filter compiler.

A ``SearchFilters`` is what the caller asked for. A ``CarPredicate`` is what the
store adapter executes: every blank facet removed, defaults applied, and the
public-search status constraint always present.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from dealership.domain.car import CarStatus
from dealership.domain.errors import ValidationError


class FilterValidationError(ValidationError):
    """Raised when filter parameters are invalid."""

    pass


@dataclass(frozen=True, slots=True)
class SearchFilters:
    search: str | None = None
    make: str | None = None
    body_type: str | None = None
    fuel_type: str | None = None
    transmission: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    sort_by: str = "newest"
    page: int = 1
    limit: int = 6

    def validate(self) -> None:
        """
        Validate filter parameters.

        A max_price below min_price is NOT an error: the predicate simply
        matches nothing.

        Raises:
            FilterValidationError: If filter parameters are invalid
        """
        for name in ("min_price", "max_price"):
            value = getattr(self, name)
            if value is None:
                continue
            # Guardrails: prevent float leakage past boundary
            if not isinstance(value, Decimal):
                raise FilterValidationError(
                    f"{name} must be Decimal or None (no floats past the boundary)",
                    field=name,
                )
            if value.is_nan():
                raise FilterValidationError(f"{name} must be a number", field=name)
            if value < 0:
                raise FilterValidationError(f"{name} must be >= 0", field=name)

        if self.min_price is not None and not self.min_price.is_finite():
            raise FilterValidationError("min_price must be finite", field="min_price")


@dataclass(frozen=True, slots=True)
class CarPredicate:
    """Normalized conjunction consumed by catalog store adapters.

    - status: equality (always AVAILABLE for public search)
    - text: case-insensitive substring on make OR model OR color
    - make/body_type/fuel_type/transmission: case-insensitive equality
    - price_min <= price (<= price_max when price_max is set)
    - featured: equality when not None
    """

    status: CarStatus | None = CarStatus.AVAILABLE
    text: str | None = None
    make: str | None = None
    body_type: str | None = None
    fuel_type: str | None = None
    transmission: str | None = None
    price_min: Decimal = Decimal("0")
    price_max: Decimal | None = None
    featured: bool | None = None


def _facet(value: str | None) -> str | None:
    # Blank means "not provided", never "match the empty string"
    if value is None:
        return None
    value = value.strip()
    return value or None


def compile_filters(filters: SearchFilters) -> CarPredicate:
    """Compile validated search filters into a store predicate."""
    price_max = filters.max_price
    if price_max is not None and not price_max.is_finite():
        price_max = None

    return CarPredicate(
        status=CarStatus.AVAILABLE,
        text=_facet(filters.search),
        make=_facet(filters.make),
        body_type=_facet(filters.body_type),
        fuel_type=_facet(filters.fuel_type),
        transmission=_facet(filters.transmission),
        price_min=filters.min_price if filters.min_price is not None else Decimal("0"),
        price_max=price_max,
    )
