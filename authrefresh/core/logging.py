"""
Logging setup for applications embedding the token refresh helpers.

httpx logs every request line at INFO; those lines are held back to WARNING
unless the application asks for DEBUG output.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

from authrefresh.core.config import get_settings

_CHATTY_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: Optional[Union[str, int]] = None) -> None:
    """Configure root logging; ``level`` defaults to ``APP_LOG_LEVEL``."""
    if level is None:
        level = get_settings().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )
    transport_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)


__all__ = ["configure_logging"]
