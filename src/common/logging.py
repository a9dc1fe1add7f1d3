"""
Logging helpers for the `pagination` logger namespace.
Modules log parse, resolution and paging decisions under `LOGGER_NAME`; applications that want
those records on stderr call `configure_logging` once at startup.
"""

from __future__ import annotations

import logging

from src.common.settings import get_settings

LOGGER_NAME = "pagination"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_HANDLER: logging.Handler | None = None


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def configure_logging(*, level: str | None = None) -> logging.Logger:
    """Set the namespace level and attach a single stream handler.

    The level defaults to `LOG_LEVEL` from settings. Repeated calls only
    update the level; the handler is attached once.
    """

    global _HANDLER

    logger = get_logger()
    level_name = (level or get_settings().LOG_LEVEL).upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    if _HANDLER is None:
        _HANDLER = logging.StreamHandler()
        _HANDLER.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(_HANDLER)
    return logger
