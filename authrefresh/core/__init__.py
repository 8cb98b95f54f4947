"""Configuration and logging setup."""

from .config import AppSettings, RefreshSettings, SecuritySettings, get_settings
from .logging import configure_logging

__all__ = [
    "AppSettings",
    "RefreshSettings",
    "SecuritySettings",
    "configure_logging",
    "get_settings",
]
