"""Validation of untrusted car metadata produced by the image classifier.

Validation returns a tagged result instead of raising, so callers can tell
"ask the classifier again" apart from "fall back to manual entry":

    result = validate_car_metadata(raw)
    if isinstance(result, ValidatedMetadata):
        prefill(result.value)
    else:
        show_manual_form(result.error)

Only structure and presence are checked. Year ranges, confidence bounds and
similar semantics are left to whoever reads the confidence score.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from dealership.domain.errors import DomainError, ValidationError
from dealership.domain.search import SearchFilters

T = TypeVar("T")

# Wire names, in the order reported back to callers
REQUIRED_CAR_FIELDS: tuple[str, ...] = (
    "make",
    "model",
    "year",
    "color",
    "bodyType",
    "price",
    "mileage",
    "fuelType",
    "transmission",
    "description",
    "confidence",
)

_CODE_FENCE = re.compile(r"```(?:json)?\n?")


class MalformedPayloadError(DomainError):
    """Classifier output is not a single structured object."""

    error_code: str = "MALFORMED_PAYLOAD"

    def __init__(self, message: str = "AI response is not a JSON object", **context: Any) -> None:
        super().__init__(message, **context)


class MissingFieldsError(DomainError):
    """Classifier output lacks required fields (or has them empty)."""

    error_code: str = "MISSING_FIELDS"

    def __init__(self, missing_fields: list[str]) -> None:
        self.missing_fields = missing_fields
        super().__init__(
            f"AI response missing fields: {', '.join(missing_fields)}",
            missing_fields=missing_fields,
        )


@dataclass(frozen=True, slots=True)
class AIExtractedCarMetadata:
    make: str
    model: str
    year: int | str
    color: str
    body_type: str
    price: int | float | str
    mileage: int | float | str
    fuel_type: str
    transmission: str
    description: str
    confidence: float | str


@dataclass(frozen=True, slots=True)
class ImageSearchHints:
    make: str | None = None
    body_type: str | None = None
    color: str | None = None
    confidence: float | None = None

    def to_search_filters(self) -> SearchFilters:
        return SearchFilters(make=self.make, body_type=self.body_type, search=self.color)


@dataclass(frozen=True)
class ValidatedMetadata(Generic[T]):
    value: T


@dataclass(frozen=True)
class PayloadRejected:
    error: MalformedPayloadError | MissingFieldsError


def parse_payload(raw: Any) -> dict[str, Any]:
    """
    Parse classifier output into a single JSON object.

    Accepts an already-decoded mapping, or text optionally wrapped in
    markdown code fences.

    Raises:
        MalformedPayloadError: If the payload is not exactly one JSON object
    """
    if isinstance(raw, Mapping):
        return dict(raw)
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            raise MalformedPayloadError("AI response is not valid UTF-8")
    if not isinstance(raw, str):
        raise MalformedPayloadError(payload_type=type(raw).__name__)

    text = _CODE_FENCE.sub("", raw).strip()
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedPayloadError("AI response is not valid JSON", reason=exc.msg)

    if not isinstance(parsed, dict):
        raise MalformedPayloadError(payload_type=type(parsed).__name__)
    return parsed


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, dict)):
        return not value
    return False


def validate_car_metadata(raw: Any) -> ValidatedMetadata[AIExtractedCarMetadata] | PayloadRejected:
    try:
        payload = parse_payload(raw)
    except MalformedPayloadError as exc:
        return PayloadRejected(exc)

    missing = [name for name in REQUIRED_CAR_FIELDS if _is_blank(payload.get(name))]
    if missing:
        return PayloadRejected(MissingFieldsError(missing))

    return ValidatedMetadata(
        AIExtractedCarMetadata(
            make=str(payload["make"]),
            model=str(payload["model"]),
            year=payload["year"],
            color=str(payload["color"]),
            body_type=str(payload["bodyType"]),
            price=payload["price"],
            mileage=payload["mileage"],
            fuel_type=str(payload["fuelType"]),
            transmission=str(payload["transmission"]),
            description=str(payload["description"]),
            confidence=payload["confidence"],
        )
    )


def validate_search_hints(raw: Any) -> ValidatedMetadata[ImageSearchHints] | PayloadRejected:
    """Image-search hints are all optional; only the object shape is enforced."""
    try:
        payload = parse_payload(raw)
    except MalformedPayloadError as exc:
        return PayloadRejected(exc)

    def text(name: str) -> str | None:
        value = payload.get(name)
        return None if _is_blank(value) else str(value).strip()

    confidence = payload.get("confidence")
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        confidence = None

    return ValidatedMetadata(
        ImageSearchHints(
            make=text("make"),
            body_type=text("bodyType"),
            color=text("color"),
            confidence=float(confidence) if confidence is not None else None,
        )
    )


ALLOWED_IMAGE_TYPES = frozenset({"image/jpeg", "image/png", "image/webp"})
MAX_IMAGE_BYTES = 5 * 1024 * 1024


def validate_image_upload(image: bytes, mime_type: str) -> None:
    """
    Raises:
        ValidationError: If the image is empty, too large, or of an unsupported type
    """
    if mime_type not in ALLOWED_IMAGE_TYPES:
        raise ValidationError(
            errors=[
                {
                    "field": "image",
                    "message": f"Must be one of {sorted(ALLOWED_IMAGE_TYPES)}",
                    "code": "UNSUPPORTED_MEDIA_TYPE",
                }
            ]
        )
    if not image:
        raise ValidationError(
            errors=[{"field": "image", "message": "Must not be empty", "code": "EMPTY_FILE"}]
        )
    if len(image) > MAX_IMAGE_BYTES:
        raise ValidationError(
            errors=[
                {
                    "field": "image",
                    "message": f"Must be at most {MAX_IMAGE_BYTES} bytes",
                    "code": "FILE_TOO_LARGE",
                }
            ]
        )
