"""Errors raised while keeping the access token fresh."""

from __future__ import annotations

from typing import Optional


class TokenRefreshError(Exception):
    """Base class for token refresh failures."""


class NoSessionError(TokenRefreshError):
    """Raised when no credential pair is stored."""


class InvalidRefreshResponseError(TokenRefreshError):
    """Raised when the exchange function returns an unusable value."""

    def __init__(
        self,
        message: str = "exchange must either return a string or an object with an access_token",
    ) -> None:
        super().__init__(message)


class CredentialsRejectedError(TokenRefreshError):
    """Raised when the refresh token itself was rejected; storage has been cleared."""

    def __init__(self, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        if status_code is None:
            message = "Refresh token rejected on token refresh; clearing both auth tokens"
        else:
            message = f"Got {status_code} on token refresh; clearing both auth tokens"
        super().__init__(message)


class ExchangeTransportError(TokenRefreshError):
    """Raised by the refresh endpoint client when the exchange call fails."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


__all__ = [
    "CredentialsRejectedError",
    "ExchangeTransportError",
    "InvalidRefreshResponseError",
    "NoSessionError",
    "TokenRefreshError",
]
