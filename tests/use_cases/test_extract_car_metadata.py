"""Tests for ExtractCarMetadata and SuggestSearchFromImage."""

from __future__ import annotations

import json
from unittest.mock import Mock

import pytest

from dealership.domain.ai_metadata import (
    MissingFieldsError,
    PayloadRejected,
    ValidatedMetadata,
)
from dealership.domain.errors import CollaboratorError, ForbiddenError, ValidationError
from dealership.domain.identity import Identity
from dealership.ports.car_image_classifier import CarImageClassifier
from dealership.use_cases.extract_car_metadata import (
    ExtractCarMetadata,
    ImageRequest,
    SuggestSearchFromImage,
)

ADMIN = Identity("staff", is_admin=True)
IMAGE = b"\xff\xd8\xff\xe0fake-jpeg"

CLASSIFIER_REPLY = {
    "make": "Honda",
    "model": "Civic",
    "year": 2019,
    "color": "Blue",
    "bodyType": "Sedan",
    "price": "18000",
    "mileage": "45000",
    "fuelType": "Gasoline",
    "transmission": "CVT",
    "description": "Well kept compact sedan",
    "confidence": 0.9,
}


@pytest.fixture()
def classifier() -> Mock:
    return Mock(spec=CarImageClassifier)


# ==============================================================================
# ExtractCarMetadata
# ==============================================================================


def test_extract_returns_validated_metadata(classifier: Mock) -> None:
    classifier.extract_car_details.return_value = "```json\n" + json.dumps(CLASSIFIER_REPLY) + "\n```"

    result = ExtractCarMetadata(classifier).execute(
        ImageRequest(image=IMAGE, mime_type="image/jpeg", caller=ADMIN)
    )

    assert isinstance(result, ValidatedMetadata)
    assert result.value.model == "Civic"
    assert result.value.body_type == "Sedan"
    classifier.extract_car_details.assert_called_once_with(IMAGE, "image/jpeg")


def test_extract_reports_missing_fields(classifier: Mock) -> None:
    reply = {**CLASSIFIER_REPLY, "year": None}
    classifier.extract_car_details.return_value = json.dumps(reply)

    result = ExtractCarMetadata(classifier).execute(
        ImageRequest(image=IMAGE, mime_type="image/jpeg", caller=ADMIN)
    )

    assert isinstance(result, PayloadRejected)
    assert isinstance(result.error, MissingFieldsError)
    assert result.error.missing_fields == ["year"]


def test_extract_is_admin_only(classifier: Mock) -> None:
    with pytest.raises(ForbiddenError):
        ExtractCarMetadata(classifier).execute(
            ImageRequest(image=IMAGE, mime_type="image/jpeg", caller=Identity("user-1"))
        )

    classifier.extract_car_details.assert_not_called()


def test_extract_rejects_unsupported_upload_before_calling_classifier(classifier: Mock) -> None:
    with pytest.raises(ValidationError):
        ExtractCarMetadata(classifier).execute(
            ImageRequest(image=IMAGE, mime_type="application/pdf", caller=ADMIN)
        )

    classifier.extract_car_details.assert_not_called()


def test_extract_propagates_classifier_outage(classifier: Mock) -> None:
    classifier.extract_car_details.side_effect = CollaboratorError("Image classifier")

    with pytest.raises(CollaboratorError):
        ExtractCarMetadata(classifier).execute(
            ImageRequest(image=IMAGE, mime_type="image/jpeg", caller=ADMIN)
        )


# ==============================================================================
# SuggestSearchFromImage
# ==============================================================================


def test_suggest_is_public(classifier: Mock) -> None:
    classifier.extract_search_hints.return_value = (
        '{"make": "Jeep", "bodyType": "SUV", "color": "Green", "confidence": 0.7}'
    )

    result = SuggestSearchFromImage(classifier).execute(
        ImageRequest(image=IMAGE, mime_type="image/webp")
    )

    assert isinstance(result, ValidatedMetadata)
    filters = result.value.to_search_filters()
    assert (filters.make, filters.body_type, filters.search) == ("Jeep", "SUV", "Green")


def test_suggest_rejects_malformed_reply(classifier: Mock) -> None:
    classifier.extract_search_hints.return_value = "I think it's a Jeep."

    result = SuggestSearchFromImage(classifier).execute(
        ImageRequest(image=IMAGE, mime_type="image/png")
    )

    assert isinstance(result, PayloadRejected)
    assert result.error.error_code == "MALFORMED_PAYLOAD"
