"""Translation of SQLAlchemy connectivity failures into domain errors."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError, TimeoutError

from dealership.domain.errors import CollaboratorError

logger = logging.getLogger(__name__)


@contextmanager
def store_call(operation: str) -> Iterator[None]:
    """
    Surface store outages as CollaboratorError.

    IntegrityError is re-raised untouched; adapters decide what a constraint
    violation means in their domain.
    """
    try:
        yield
    except IntegrityError:
        raise
    except (OperationalError, TimeoutError, DBAPIError) as exc:
        logger.error(
            "Store call failed",
            extra={"operation": operation, "error_type": type(exc).__name__},
        )
        raise CollaboratorError("Database", operation=operation) from exc
