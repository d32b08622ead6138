"""OpenAI vision adapter for CarImageClassifier."""

from __future__ import annotations

import base64
import logging
from typing import Optional

from openai import OpenAI, OpenAIError

from dealership.domain.errors import CollaboratorError
from dealership.infra.ai.config import openai_api_key, openai_model, openai_timeout_seconds
from dealership.ports.car_image_classifier import CarImageClassifier

logger = logging.getLogger(__name__)

CAR_DETAILS_PROMPT = """
Analyze this car image and extract the following information:
1. Make (manufacturer)
2. Model
3. Year (approximately)
4. Color
5. Body type (SUV, Sedan, Hatchback, etc.)
6. Mileage
7. Fuel type (your best guess)
8. Transmission type (your best guess)
9. Price (your best guess)
10. Short description to be added to a car listing

Format your response as a clean JSON object with these fields:
{
    "make": "",
    "model": "",
    "year": 0000,
    "color": "",
    "price": "",
    "mileage": "",
    "bodyType": "",
    "fuelType": "",
    "transmission": "",
    "description": "",
    "confidence": 0.0
}

For confidence, provide a value between 0 and 1 representing how confident
you are in your overall identification.
Only respond with the JSON object, nothing else.
"""

SEARCH_HINTS_PROMPT = """
Analyze this car image and extract the following information for a search query:
1. Make (manufacturer)
2. Body type (SUV, Sedan, Hatchback, etc.)
3. Color

Format your response as a clean JSON object with these fields:
{
    "make": "",
    "bodyType": "",
    "color": "",
    "confidence": 0.0
}

For confidence, provide a value between 0 and 1 representing how confident
you are in your overall identification.
Only respond with the JSON object, nothing else.
"""


class OpenAICarImageClassifier(CarImageClassifier):
    """Sends the image inline as a base64 data URL and returns the raw reply text."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        client: Optional[OpenAI] = None,
    ) -> None:
        self._model = model or openai_model()
        self._client = client or OpenAI(
            api_key=api_key or openai_api_key(),
            timeout=timeout_seconds or openai_timeout_seconds(),
            max_retries=1,
        )

    def extract_car_details(self, image: bytes, mime_type: str) -> str:
        return self._ask(CAR_DETAILS_PROMPT, image, mime_type)

    def extract_search_hints(self, image: bytes, mime_type: str) -> str:
        return self._ask(SEARCH_HINTS_PROMPT, image, mime_type)

    def _ask(self, prompt: str, image: bytes, mime_type: str) -> str:
        data_url = f"data:{mime_type};base64,{base64.b64encode(image).decode('ascii')}"
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": prompt},
                            {"type": "image_url", "image_url": {"url": data_url}},
                        ],
                    }
                ],
                temperature=0,
            )
        except OpenAIError as exc:
            logger.error(
                "Image classifier call failed",
                extra={"model": self._model, "error_type": type(exc).__name__},
            )
            raise CollaboratorError("Image classifier") from exc

        if not response.choices or not response.choices[0].message.content:
            raise CollaboratorError("Image classifier", "Image classifier returned an empty reply")

        return response.choices[0].message.content
