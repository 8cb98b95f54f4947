"""
At-rest encryption for the serialized credential pair.

Keys are derived from configured secrets. The first secret encrypts; older
secrets stay readable so a stored pair survives a secret rotation and can be
re-encrypted under the current key.
"""

from __future__ import annotations

import base64
import hashlib
from typing import Iterable

from cryptography.fernet import Fernet, InvalidToken, MultiFernet


def _derive_fernet(secret: str) -> Fernet:
    digest = hashlib.sha256(secret.encode("utf-8")).digest()
    return Fernet(base64.urlsafe_b64encode(digest))


class TokenCipherService:
    """Fernet encryption keyed by ``secret``, with ``previous_secrets`` accepted for reading."""

    def __init__(self, *, secret: str, previous_secrets: Iterable[str] = ()) -> None:
        if not secret:
            raise ValueError("Token encryption secret must be provided.")
        self._current = _derive_fernet(secret)
        self._keys = MultiFernet(
            [self._current, *(_derive_fernet(old) for old in previous_secrets if old)]
        )

    def encrypt(self, plaintext: str) -> str:
        return self._current.encrypt(plaintext.encode("utf-8")).decode("utf-8")

    def decrypt(self, ciphertext: str) -> str:
        """Decrypt with any known key; ``ValueError`` when none of them produced ``ciphertext``."""
        try:
            plaintext = self._keys.decrypt(ciphertext.encode("utf-8"))
        except InvalidToken as exc:
            raise ValueError(
                "Failed to decrypt stored credentials; invalid ciphertext provided."
            ) from exc
        return plaintext.decode("utf-8")

    def is_current(self, ciphertext: str) -> bool:
        """Whether ``ciphertext`` was encrypted with the current secret."""
        try:
            self._current.decrypt(ciphertext.encode("utf-8"))
        except InvalidToken:
            return False
        return True


__all__ = ["TokenCipherService"]
