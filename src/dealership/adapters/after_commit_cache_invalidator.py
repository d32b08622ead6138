"""Cache invalidation deferred to the end of the request's transaction.

Use cases report stale views as soon as their write is staged, which is
before the session commits. Publishing at that point would let a reader
refill the cache from the old rows, so views are held here and released
only once COMMIT has succeeded.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy import event
from sqlalchemy.orm import Session, SessionTransaction

from dealership.ports.cache_invalidator import CacheInvalidator

logger = logging.getLogger(__name__)


class AfterCommitCacheInvalidator(CacheInvalidator):
    """
    Buffers views for one session and forwards them to ``target`` after commit.

    Views collected during the transaction reach the target as a single
    notification. A rolled back transaction drops them.
    """

    def __init__(self, session: Session, target: CacheInvalidator) -> None:
        self._target = target
        self._pending: set[str] = set()
        event.listen(session, "after_commit", self._publish)
        event.listen(session, "after_transaction_end", self._discard)

    def invalidate(self, views: Iterable[str]) -> None:
        self._pending.update(views)

    def _publish(self, session: Session) -> None:
        # Releasing a SAVEPOINT also fires after_commit
        if session.in_nested_transaction() or not self._pending:
            return
        views, self._pending = frozenset(self._pending), set()
        self._target.invalidate(views)

    def _discard(self, session: Session, transaction: SessionTransaction) -> None:
        if transaction.parent is not None or not self._pending:
            return
        logger.info(
            "Invalidations dropped with rolled back transaction",
            extra={"views": sorted(self._pending)},
        )
        self._pending.clear()
