"""Logger shared by every BoundPercentiles instance.

Each estimator grabs this logger at construction and only ever emits DEBUG
records: the bucket layout when it is built, each value dropped for falling
outside the bounds, and each query with p outside [0, 100]. The level stays
at WARNING unless the embedding application lowers it, so the insert and
query paths pay nothing more than an isEnabledFor check.
"""
from __future__ import annotations

import logging
from typing import Optional

LOGGER_NAME = "boundpercentiles"

_LOGGER: Optional[logging.Logger] = None


def get_logger() -> logging.Logger:
    global _LOGGER
    if _LOGGER is None:
        logger = logging.getLogger(LOGGER_NAME)
        # Only add a handler if the application hasn't configured logging.
        if not logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter("[%(name)s] %(levelname)s: %(message)s")
            handler.setFormatter(formatter)
            logger.addHandler(handler)
        logger.setLevel(logging.WARNING)
        _LOGGER = logger
    return _LOGGER

__all__ = ["LOGGER_NAME", "get_logger"]
