"""
Factory functions providing shared, settings-driven instances.
"""

from functools import lru_cache

from authrefresh.clients import MemoryBackend, RefreshEndpointClient, SQLiteBackend
from authrefresh.core.config import get_settings
from authrefresh.services import (
    CredentialStore,
    KeyValueBackend,
    RefreshingAuth,
    StatusCodeRejection,
    TokenCipherService,
    TokenRefreshCoordinator,
)


@lru_cache()
def _settings():
    """Internal helper to cache settings for the factories."""
    return get_settings()


@lru_cache()
def get_backend() -> KeyValueBackend:
    """Provide the SQLite backend when a path is configured, else an in-memory one."""
    settings = _settings()
    if settings.db_path:
        return SQLiteBackend(settings.db_path)
    return MemoryBackend()


@lru_cache()
def get_token_cipher_service() -> TokenCipherService | None:
    """Provide the at-rest cipher when an encryption secret is configured."""
    security = _settings().security
    if not security.token_encryption_secret:
        return None
    return TokenCipherService(
        secret=security.token_encryption_secret,
        previous_secrets=security.previous_encryption_secrets,
    )


@lru_cache()
def get_credential_store() -> CredentialStore:
    """Provide the shared credential store."""
    return CredentialStore(
        get_backend(),
        storage_key=_settings().refresh.storage_key,
        cipher=get_token_cipher_service(),
    )


@lru_cache()
def get_refresh_coordinator() -> TokenRefreshCoordinator:
    """Create the process-wide refresh coordinator."""
    refresh = _settings().refresh
    return TokenRefreshCoordinator(
        get_credential_store(),
        expire_margin_seconds=refresh.expire_margin_seconds,
        is_rejection=StatusCodeRejection(refresh.rejection_status_codes),
    )


@lru_cache()
def get_refresh_client() -> RefreshEndpointClient:
    """Provide the refresh endpoint client; requires ``AUTHREFRESH_REFRESH_URL``."""
    return RefreshEndpointClient(_settings().refresh)


def get_http_auth() -> RefreshingAuth:
    """Build an httpx auth hook using the configured refresh endpoint."""
    refresh = _settings().refresh
    return RefreshingAuth(
        get_refresh_coordinator(),
        get_refresh_client().exchange,
        header_name=refresh.header_name,
        header_prefix=refresh.header_prefix,
    )


__all__ = [
    "get_backend",
    "get_credential_store",
    "get_http_auth",
    "get_refresh_client",
    "get_refresh_coordinator",
    "get_token_cipher_service",
]
