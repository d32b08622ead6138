"""Tests for validation of classifier output and image uploads."""

from __future__ import annotations

import json
from typing import Any

import pytest

from dealership.domain.ai_metadata import (
    MAX_IMAGE_BYTES,
    REQUIRED_CAR_FIELDS,
    AIExtractedCarMetadata,
    ImageSearchHints,
    MalformedPayloadError,
    MissingFieldsError,
    PayloadRejected,
    ValidatedMetadata,
    parse_payload,
    validate_car_metadata,
    validate_image_upload,
    validate_search_hints,
)
from dealership.domain.errors import ValidationError


@pytest.fixture
def complete_payload() -> dict[str, Any]:
    return {
        "make": "Toyota",
        "model": "Camry",
        "year": 2021,
        "color": "Silver",
        "bodyType": "Sedan",
        "price": 24000,
        "mileage": 30000,
        "fuelType": "Gasoline",
        "transmission": "Automatic",
        "description": "Clean midsize sedan",
        "confidence": 0.87,
    }


# ==============================================================================
# parse_payload
# ==============================================================================


def test_parses_plain_json_text(complete_payload: dict[str, Any]) -> None:
    assert parse_payload(json.dumps(complete_payload)) == complete_payload


def test_strips_markdown_code_fences() -> None:
    raw = '```json\n{"make": "Ford"}\n```'

    assert parse_payload(raw) == {"make": "Ford"}


def test_accepts_mapping_and_bytes() -> None:
    assert parse_payload({"make": "Ford"}) == {"make": "Ford"}
    assert parse_payload(b'{"make": "Ford"}') == {"make": "Ford"}


@pytest.mark.parametrize("raw", ["not json", "[1, 2]", '"text"', "42", None, 3.5])
def test_rejects_anything_but_one_object(raw: Any) -> None:
    with pytest.raises(MalformedPayloadError):
        parse_payload(raw)


# ==============================================================================
# validate_car_metadata
# ==============================================================================


def test_complete_payload_is_validated(complete_payload: dict[str, Any]) -> None:
    result = validate_car_metadata(json.dumps(complete_payload))

    assert isinstance(result, ValidatedMetadata)
    assert result.value == AIExtractedCarMetadata(
        make="Toyota",
        model="Camry",
        year=2021,
        color="Silver",
        body_type="Sedan",
        price=24000,
        mileage=30000,
        fuel_type="Gasoline",
        transmission="Automatic",
        description="Clean midsize sedan",
        confidence=0.87,
    )


def test_missing_field_is_named(complete_payload: dict[str, Any]) -> None:
    del complete_payload["confidence"]

    result = validate_car_metadata(complete_payload)

    assert isinstance(result, PayloadRejected)
    assert isinstance(result.error, MissingFieldsError)
    assert result.error.missing_fields == ["confidence"]


def test_blank_values_count_as_missing_in_canonical_order(
    complete_payload: dict[str, Any],
) -> None:
    complete_payload.update({"description": "  ", "make": None, "year": ""})

    result = validate_car_metadata(complete_payload)

    assert isinstance(result, PayloadRejected)
    assert result.error.to_dict()["missing_fields"] == ["make", "year", "description"]


def test_zero_is_present(complete_payload: dict[str, Any]) -> None:
    complete_payload.update({"mileage": 0, "confidence": 0})

    assert isinstance(validate_car_metadata(complete_payload), ValidatedMetadata)


def test_empty_object_reports_every_field() -> None:
    result = validate_car_metadata("{}")

    assert isinstance(result, PayloadRejected)
    assert result.error.missing_fields == list(REQUIRED_CAR_FIELDS)  # type: ignore[union-attr]


def test_malformed_text_is_rejected_not_raised() -> None:
    result = validate_car_metadata("Sorry, I can't see a car here.")

    assert isinstance(result, PayloadRejected)
    assert result.error.error_code == "MALFORMED_PAYLOAD"


# ==============================================================================
# validate_search_hints
# ==============================================================================


def test_search_hints_are_all_optional() -> None:
    result = validate_search_hints('{"make": "Honda", "bodyType": "", "confidence": "high"}')

    assert isinstance(result, ValidatedMetadata)
    assert result.value == ImageSearchHints(make="Honda", body_type=None, color=None, confidence=None)


def test_search_hints_map_to_filters() -> None:
    filters = ImageSearchHints(make="Honda", body_type="SUV", color="Red").to_search_filters()

    assert (filters.make, filters.body_type, filters.search) == ("Honda", "SUV", "Red")


def test_search_hints_reject_non_objects() -> None:
    assert isinstance(validate_search_hints("[]"), PayloadRejected)


# ==============================================================================
# validate_image_upload
# ==============================================================================


@pytest.mark.parametrize(
    ("image", "mime_type", "code"),
    [
        (b"gif", "image/gif", "UNSUPPORTED_MEDIA_TYPE"),
        (b"", "image/png", "EMPTY_FILE"),
        (b"x" * (MAX_IMAGE_BYTES + 1), "image/jpeg", "FILE_TOO_LARGE"),
    ],
)
def test_rejects_bad_uploads(image: bytes, mime_type: str, code: str) -> None:
    with pytest.raises(ValidationError) as exc_info:
        validate_image_upload(image, mime_type)

    assert exc_info.value.errors[0]["code"] == code  # type: ignore[index]


@pytest.mark.parametrize("mime_type", ["image/jpeg", "image/png", "image/webp"])
def test_accepts_supported_images(mime_type: str) -> None:
    validate_image_upload(b"\x89PNG...", mime_type)
