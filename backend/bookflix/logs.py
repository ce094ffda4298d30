"""Logging helper shared by the API, the migration runner and the loaders."""
from __future__ import annotations

import logging
import threading

from bookflix import config

_LOCK = threading.Lock()
_FORMAT = "[bookflix] %(asctime)s %(levelname)s %(name)s %(message)s"


def get_logger(name: str = "bookflix") -> logging.Logger:
    with _LOCK:
        logger = logging.getLogger(name)
        level = getattr(logging, config.log_level_name(), logging.INFO)
        logger.setLevel(level)
        if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(_FORMAT))
            logger.addHandler(handler)
        logger.propagate = False
        return logger


__all__ = ["get_logger"]
