"""Port for the generative-AI image classifier.

Output is free-form text and must be treated as untrusted input.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class CarImageClassifier(ABC):
    @abstractmethod
    def extract_car_details(self, image: bytes, mime_type: str) -> str:
        """
        Describe a car for a listing (make, model, year, price, ...).

        Raises:
            CollaboratorError: If the classifier call fails
        """
        ...

    @abstractmethod
    def extract_search_hints(self, image: bytes, mime_type: str) -> str:
        """
        Describe a car for a catalog search (make, bodyType, color).

        Raises:
            CollaboratorError: If the classifier call fails
        """
        ...
