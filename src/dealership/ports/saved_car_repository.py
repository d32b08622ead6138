from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Collection


class SavedCarRepository(ABC):
    """Port for the (user, car) wishlist relation."""

    @abstractmethod
    def exists(self, user_id: str, car_id: str) -> bool: ...

    @abstractmethod
    def toggle(self, user_id: str, car_id: str) -> bool:
        """Delete the pair if present, insert it otherwise. Returns the new state."""
        ...

    @abstractmethod
    def saved_among(self, user_id: str, car_ids: Collection[str]) -> set[str]:
        """Which of ``car_ids`` the user has saved, in one lookup."""
        ...

    @abstractmethod
    def list_car_ids(self, user_id: str) -> list[str]:
        """Saved car ids, most recently saved first."""
        ...
