"""
Client-side access token renewal with single-flight refresh coordination.
"""

from authrefresh.errors import (
    CredentialsRejectedError,
    ExchangeTransportError,
    InvalidRefreshResponseError,
    NoSessionError,
    TokenRefreshError,
)
from authrefresh.models import CredentialPair
from authrefresh.services import (
    CredentialStore,
    RefreshingAuth,
    StatusCodeRejection,
    TokenRefreshCoordinator,
    is_expired,
)

__version__ = "0.1.0"

__all__ = [
    "CredentialPair",
    "CredentialStore",
    "CredentialsRejectedError",
    "ExchangeTransportError",
    "InvalidRefreshResponseError",
    "NoSessionError",
    "RefreshingAuth",
    "StatusCodeRejection",
    "TokenRefreshCoordinator",
    "TokenRefreshError",
    "is_expired",
]
