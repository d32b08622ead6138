"""Cache invalidation published as structured log events.

Page caches live in the web tier; this service only declares which views
went stale and leaves the refresh to whoever tails these events.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from dealership.ports.cache_invalidator import CacheInvalidator

logger = logging.getLogger(__name__)


class LoggingCacheInvalidator(CacheInvalidator):
    def invalidate(self, views: Iterable[str]) -> None:
        logger.info("Views invalidated", extra={"views": sorted(views)})
