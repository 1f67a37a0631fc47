"""
Logging setup for the garden planning engine.

Modules log through ``logging.getLogger(__name__)``. The library itself only
attaches a NullHandler; applications call configure_logging() to see output.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_ROOT_LOGGER_NAME = "gardenplan"

logging.getLogger(_ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach a stream handler to the package logger and set its level.

    Idempotent: repeated calls update the level without stacking handlers.
    """
    logger = logging.getLogger(_ROOT_LOGGER_NAME)
    logger.setLevel(level)
    if not any(getattr(h, "_gardenplan_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        handler._gardenplan_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
