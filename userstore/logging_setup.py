"""stderr logging for the bootstrap script.

Attaches a single StreamHandler to the ``userstore`` logger; calling
``configure_logging`` again only adjusts the level.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class _BootstrapStreamHandler(logging.StreamHandler):  # marker type for idempotent install
    pass


def configure_logging(level: str | int = "INFO", stream: TextIO | None = None) -> logging.Logger:
    logger = logging.getLogger("userstore")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)
    # Avoid duplicate attachment if invoked twice
    if not any(isinstance(h, _BootstrapStreamHandler) for h in logger.handlers):
        h = _BootstrapStreamHandler(stream or sys.stderr)
        h.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(h)
    return logger


__all__ = ["LOG_FORMAT", "configure_logging"]
