"""Logging setup for FitQuest.

Service modules log through ``logging.getLogger(__name__)``; this only
wires a handler onto the package logger for the CLI.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Point the ``fitquest`` logger at the current stderr.

    Calling it again swaps the handler instead of stacking a second one.
    """
    logger = logging.getLogger("fitquest")
    logger.setLevel(level)
    for handler in [h for h in logger.handlers if getattr(h, "_fitquest", False)]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._fitquest = True
    logger.addHandler(handler)
    return logger
