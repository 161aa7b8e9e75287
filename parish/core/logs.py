"""Logging bootstrap shared by the public and admin apps."""

from __future__ import annotations

import logging

from .config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured = False


def configure_logging() -> None:
    """Install the root handler once, at the level given by LOG_LEVEL."""
    global _configured
    if _configured:
        return
    level = getattr(logging, get_settings().log_level, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    _configured = True
