"""Process-wide logging setup for the API."""

import logging
import os

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str | None = None) -> logging.Logger:
    """
    Attach a console handler to the "dealership" logger.

    Args:
        level: Level name (e.g. "DEBUG"); defaults to LOG_LEVEL or INFO

    Safe to call more than once: the handler is only added the first time.
    """
    logger = logging.getLogger("dealership")
    logger.setLevel((level or os.getenv("LOG_LEVEL") or "INFO").upper())

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    return logger
