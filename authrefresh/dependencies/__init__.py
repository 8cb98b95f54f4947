"""Expose dependency helpers."""

from .clients import (
    get_backend,
    get_credential_store,
    get_http_auth,
    get_refresh_client,
    get_refresh_coordinator,
    get_token_cipher_service,
)

__all__ = [
    "get_backend",
    "get_credential_store",
    "get_http_auth",
    "get_refresh_client",
    "get_refresh_coordinator",
    "get_token_cipher_service",
]
