"""Service layer exports."""

from .credential_store import CredentialStore, KeyValueBackend
from .expiration import expires_in, get_expiration, is_expired
from .http_auth import RefreshingAuth
from .refresh_coordinator import (
    StatusCodeRejection,
    TokenRefreshCoordinator,
    extract_status_code,
    normalize_exchange_result,
)
from .token_cipher import TokenCipherService

__all__ = [
    "CredentialStore",
    "KeyValueBackend",
    "RefreshingAuth",
    "StatusCodeRejection",
    "TokenCipherService",
    "TokenRefreshCoordinator",
    "expires_in",
    "extract_status_code",
    "get_expiration",
    "is_expired",
    "normalize_exchange_result",
]
