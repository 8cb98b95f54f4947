"""
Persistence of the single access/refresh token pair.

The pair is serialized as ``{"accessToken": ..., "refreshToken": ...}`` under
one storage key, so a write either replaces both tokens or neither.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from pydantic import ValidationError

from authrefresh.core.config import DEFAULT_STORAGE_KEY
from authrefresh.errors import NoSessionError
from authrefresh.models import CredentialPair
from authrefresh.services.token_cipher import TokenCipherService

logger = logging.getLogger(__name__)


class KeyValueBackend(Protocol):
    """Minimal string storage the credential store writes through."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class CredentialStore:
    """Load, save and clear the stored credential pair."""

    def __init__(
        self,
        backend: KeyValueBackend,
        *,
        storage_key: str = DEFAULT_STORAGE_KEY,
        cipher: Optional[TokenCipherService] = None,
    ) -> None:
        self._backend = backend
        self._key = storage_key
        self._cipher = cipher

    @property
    def storage_key(self) -> str:
        return self._key

    def load(self) -> Optional[CredentialPair]:
        """Return the stored pair, or ``None`` when missing or unreadable."""
        raw = self._backend.get(self._key)
        if raw is None:
            return None
        stored = raw
        if self._cipher is not None:
            try:
                raw = self._cipher.decrypt(raw)
            except ValueError:
                logger.warning("Stored credentials under %r could not be decrypted.", self._key)
                return None
        try:
            pair = CredentialPair.model_validate_json(raw)
        except ValidationError:
            logger.warning("Stored credentials under %r are malformed; ignoring.", self._key)
            return None
        if self._cipher is not None and not self._cipher.is_current(stored):
            logger.info("Re-encrypting stored credentials under the current secret.")
            self.save(pair)
        return pair

    def save(self, pair: CredentialPair) -> None:
        serialized = pair.to_json()
        if self._cipher is not None:
            serialized = self._cipher.encrypt(serialized)
        self._backend.set(self._key, serialized)

    def clear(self) -> None:
        self._backend.delete(self._key)

    def is_logged_in(self) -> bool:
        return self.load() is not None

    def get_access_token(self) -> Optional[str]:
        pair = self.load()
        return pair.access_token if pair else None

    def get_refresh_token(self) -> Optional[str]:
        pair = self.load()
        return pair.refresh_token if pair else None

    def set_access_token(self, token: str) -> None:
        """Replace only the access token of the stored pair."""
        pair = self._require()
        self.save(pair.model_copy(update={"access_token": token}))

    def set_refresh_token(self, token: str) -> None:
        """Replace only the refresh token of the stored pair."""
        pair = self._require()
        self.save(pair.model_copy(update={"refresh_token": token}))

    def _require(self) -> CredentialPair:
        pair = self.load()
        if pair is None:
            raise NoSessionError(
                "Unable to update tokens since no tokens are currently stored."
            )
        return pair


__all__ = ["CredentialStore", "KeyValueBackend"]
