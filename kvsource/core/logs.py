from __future__ import annotations

import logging

from kvsource.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_ROOT_LOGGER = "kvsource"


def _resolve_level(level: str | int | None) -> int:
    if isinstance(level, int):
        return level
    name = str(level or settings.LOG_LEVEL or "").strip().upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str | int | None = None) -> logging.Logger:
    logger = logging.getLogger(_ROOT_LOGGER)
    logger.setLevel(_resolve_level(level))
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
