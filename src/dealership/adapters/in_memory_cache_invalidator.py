from __future__ import annotations

from collections.abc import Iterable

from dealership.ports.cache_invalidator import CacheInvalidator


class InMemoryCacheInvalidator(CacheInvalidator):
    """Records every notification; used by tests to assert what went stale."""

    def __init__(self) -> None:
        self.notifications: list[frozenset[str]] = []

    def invalidate(self, views: Iterable[str]) -> None:
        self.notifications.append(frozenset(views))

    @property
    def invalidated(self) -> set[str]:
        return set().union(*self.notifications)
