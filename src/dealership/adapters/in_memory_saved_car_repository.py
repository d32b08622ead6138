from __future__ import annotations

import itertools
import threading
from collections.abc import Collection

from dealership.ports.saved_car_repository import SavedCarRepository


class InMemorySavedCarRepository(SavedCarRepository):
    """Canonical contract implementation for tests. Last toggle wins."""

    def __init__(self, saved: list[tuple[str, str]] | None = None) -> None:
        self._sequence = itertools.count()
        self._saved: dict[tuple[str, str], int] = {
            pair: next(self._sequence) for pair in saved or []
        }
        self._lock = threading.Lock()

    def exists(self, user_id: str, car_id: str) -> bool:
        return (user_id, car_id) in self._saved

    def toggle(self, user_id: str, car_id: str) -> bool:
        key = (user_id, car_id)
        with self._lock:
            if key in self._saved:
                del self._saved[key]
                return False
            self._saved[key] = next(self._sequence)
            return True

    def saved_among(self, user_id: str, car_ids: Collection[str]) -> set[str]:
        return {car_id for car_id in car_ids if (user_id, car_id) in self._saved}

    def list_car_ids(self, user_id: str) -> list[str]:
        mine = [(seq, car_id) for (user, car_id), seq in self._saved.items() if user == user_id]
        return [car_id for _, car_id in sorted(mine, reverse=True)]
