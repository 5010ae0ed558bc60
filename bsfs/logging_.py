"""Logging helpers for the bSFS modules."""

from __future__ import annotations

import logging
from typing import Optional, Union

PACKAGE_LOGGER = "bsfs"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Attach a concise formatter to the root logger unless one is already set.

    ``level`` may be a :mod:`logging` constant or its name (``"DEBUG"``).
    """

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level {level!r}")

    if logging.getLogger().handlers:
        # An embedding pipeline owns the handlers; only adjust our own level.
        logging.getLogger(PACKAGE_LOGGER).setLevel(level)
        return

    logging.basicConfig(level=level, format=LOG_FORMAT)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the ``bsfs`` namespace."""

    configure_logging()
    if not name:
        return logging.getLogger(PACKAGE_LOGGER)
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


__all__ = ["PACKAGE_LOGGER", "LOG_FORMAT", "configure_logging", "get_logger"]
