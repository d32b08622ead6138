"""PostgreSQL implementation of SavedCarRepository."""

from __future__ import annotations

from collections.abc import Collection
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.orm import Session

from dealership.infra.db.errors import store_call
from dealership.infra.db.models.saved_car import SavedCarRow
from dealership.ports.saved_car_repository import SavedCarRepository


class PostgresSavedCarRepository(SavedCarRepository):
    """
    Wishlist rows keyed by (user_id, car_id).

    ``toggle`` is DELETE-then-INSERT ... ON CONFLICT DO NOTHING, so two racing
    toggles settle on whichever statement commits last.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def exists(self, user_id: str, car_id: str) -> bool:
        with store_call("saved_cars.exists"):
            return self._session.get(SavedCarRow, (user_id, UUID(car_id))) is not None

    def toggle(self, user_id: str, car_id: str) -> bool:
        key = UUID(car_id)
        with store_call("saved_cars.toggle"):
            removed = self._session.execute(
                delete(SavedCarRow).where(SavedCarRow.user_id == user_id, SavedCarRow.car_id == key)
            )
            if removed.rowcount:
                return False
            self._session.execute(
                insert(SavedCarRow).values(user_id=user_id, car_id=key).on_conflict_do_nothing()
            )
        return True

    def saved_among(self, user_id: str, car_ids: Collection[str]) -> set[str]:
        keys = [UUID(car_id) for car_id in car_ids]
        if not keys:
            return set()
        query = select(SavedCarRow.car_id).where(
            SavedCarRow.user_id == user_id, SavedCarRow.car_id.in_(keys)
        )
        with store_call("saved_cars.saved_among"):
            return {str(car_id) for car_id in self._session.execute(query).scalars().all()}

    def list_car_ids(self, user_id: str) -> list[str]:
        query = (
            select(SavedCarRow.car_id)
            .where(SavedCarRow.user_id == user_id)
            .order_by(SavedCarRow.saved_at.desc())
        )
        with store_call("saved_cars.list"):
            return [str(car_id) for car_id in self._session.execute(query).scalars().all()]
