"""
Logging setup for the command-line front end.

Log records go to stderr so command output on stdout stays clean.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = "%(levelname)s | %(name)s | %(message)s"


def configure_logging(verbose: bool = False, stream: Optional[TextIO] = None) -> logging.Handler:
    """
    Attach a console handler to the package logger.

    Args:
        verbose: Show DEBUG records instead of WARNING and above.
        stream: Destination, defaults to stderr.

    Returns:
        The attached handler (for later removal).
    """
    logger = logging.getLogger("result_portal")
    for existing in list(logger.handlers):
        if getattr(existing, "_portal_console", False):
            logger.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._portal_console = True  # type: ignore[attr-defined]
    level = logging.DEBUG if verbose else logging.WARNING
    handler.setLevel(level)
    logger.setLevel(level)
    logger.addHandler(handler)
    return handler
