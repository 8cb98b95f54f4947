try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from authrefresh.services.token_cipher import TokenCipherService


def test_token_cipher_hides_plaintext() -> None:
    cipher = TokenCipherService(secret="super-secret-key")
    plaintext = '{"accessToken": "a", "refreshToken": "r"}'

    encrypted = cipher.encrypt(plaintext)

    assert encrypted != plaintext
    assert cipher.decrypt(encrypted) == plaintext


def test_token_cipher_rejects_bad_ciphertext() -> None:
    cipher = TokenCipherService(secret="another-secret")

    with pytest.raises(ValueError):
        cipher.decrypt("not-valid")


def test_token_cipher_rejects_foreign_key() -> None:
    encrypted = TokenCipherService(secret="one").encrypt("payload")

    with pytest.raises(ValueError):
        TokenCipherService(secret="two").decrypt(encrypted)


def test_token_cipher_requires_secret() -> None:
    with pytest.raises(ValueError):
        TokenCipherService(secret="")


def test_previous_secret_stays_readable() -> None:
    old = TokenCipherService(secret="retired").encrypt("payload")
    cipher = TokenCipherService(secret="current", previous_secrets=["retired"])

    assert cipher.decrypt(old) == "payload"
    assert cipher.is_current(old) is False
    assert cipher.is_current(cipher.encrypt("payload")) is True
