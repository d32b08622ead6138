"""AI-assisted flows: listing pre-fill and search-by-image.

Classifier outages raise CollaboratorError. Bad classifier output is not an
exception here; it comes back as PayloadRejected for the caller to act on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from dealership.domain.ai_metadata import (
    AIExtractedCarMetadata,
    ImageSearchHints,
    PayloadRejected,
    ValidatedMetadata,
    validate_car_metadata,
    validate_image_upload,
    validate_search_hints,
)
from dealership.domain.identity import Identity, require_admin
from dealership.ports.car_image_classifier import CarImageClassifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ImageRequest:
    image: bytes
    mime_type: str
    caller: Identity | None = None


class ExtractCarMetadata:
    """Pre-fill a new listing from a photo. Admin only."""

    def __init__(self, classifier: CarImageClassifier) -> None:
        self._classifier = classifier

    def execute(
        self, request: ImageRequest
    ) -> ValidatedMetadata[AIExtractedCarMetadata] | PayloadRejected:
        require_admin(request.caller)
        validate_image_upload(request.image, request.mime_type)

        raw = self._classifier.extract_car_details(request.image, request.mime_type)
        result = validate_car_metadata(raw)

        if isinstance(result, PayloadRejected):
            logger.warning(
                "AI car metadata rejected",
                extra={"code": result.error.error_code, "context": result.error.context},
            )
        return result


class SuggestSearchFromImage:
    """Turn a photo into search filter suggestions. Public."""

    def __init__(self, classifier: CarImageClassifier) -> None:
        self._classifier = classifier

    def execute(self, request: ImageRequest) -> ValidatedMetadata[ImageSearchHints] | PayloadRejected:
        validate_image_upload(request.image, request.mime_type)

        raw = self._classifier.extract_search_hints(request.image, request.mime_type)
        result = validate_search_hints(raw)

        if isinstance(result, PayloadRejected):
            logger.warning("AI search hints rejected", extra={"code": result.error.error_code})
        return result
