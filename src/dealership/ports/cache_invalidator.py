from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable


class CacheInvalidator(ABC):
    """
    Port told which views a mutation made stale.

    Use cases call ``invalidate`` right after staging their write, which is
    before the surrounding unit of work commits. Implementations that reach
    readers must therefore wait for the commit (see
    AfterCommitCacheInvalidator) or accept briefly serving pre-commit data.
    """

    @abstractmethod
    def invalidate(self, views: Iterable[str]) -> None: ...
