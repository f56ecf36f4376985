#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Logging setup — one stream handler on the package logger.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging

_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


# -----------------------------------------------------------------------------

def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a handler to the ``iwdispatch`` logger (idempotent)."""
    logger = logging.getLogger("iwdispatch")
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    if not any(getattr(h, "_iwdispatch", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._iwdispatch = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger


# -----------------------------------------------------------------------------
