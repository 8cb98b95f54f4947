"""Expose storage backends and the refresh endpoint client."""

from .memory_store import MemoryBackend
from .refresh_client import RefreshEndpointClient
from .sqlite_store import SQLiteBackend

__all__ = [
    "MemoryBackend",
    "RefreshEndpointClient",
    "SQLiteBackend",
]
