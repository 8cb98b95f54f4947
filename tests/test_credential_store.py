try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import json

import pytest

from authrefresh.clients import MemoryBackend, SQLiteBackend
from authrefresh.errors import NoSessionError
from authrefresh.models import CredentialPair
from authrefresh.services import CredentialStore, TokenCipherService


def test_save_writes_camel_case_json(store: CredentialStore, backend: MemoryBackend) -> None:
    store.save(CredentialPair(access_token="access", refresh_token="refresh"))

    assert json.loads(backend.get("auth-tokens")) == {
        "accessToken": "access",
        "refreshToken": "refresh",
    }
    assert store.load() == CredentialPair(access_token="access", refresh_token="refresh")
    assert store.is_logged_in() is True


def test_load_without_stored_tokens_returns_none(store: CredentialStore) -> None:
    assert store.load() is None
    assert store.is_logged_in() is False
    assert store.get_access_token() is None
    assert store.get_refresh_token() is None


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "[]",
        '{"accessToken": "only-access"}',
        '{"accessToken": 1, "refreshToken": "refresh"}',
    ],
)
def test_malformed_stored_state_means_no_session(backend: MemoryBackend, raw: str) -> None:
    backend.set("auth-tokens", raw)

    assert CredentialStore(backend).load() is None


def test_clear_is_idempotent(store: CredentialStore) -> None:
    store.save(CredentialPair(access_token="access", refresh_token="refresh"))

    store.clear()
    store.clear()

    assert store.load() is None


def test_set_access_token_keeps_refresh_token(store: CredentialStore) -> None:
    store.save(CredentialPair(access_token="access", refresh_token="refresh"))

    store.set_access_token("new-access")
    store.set_refresh_token("new-refresh")

    assert store.get_access_token() == "new-access"
    assert store.get_refresh_token() == "new-refresh"


def test_set_access_token_without_session_raises(store: CredentialStore) -> None:
    with pytest.raises(NoSessionError):
        store.set_access_token("new-access")


def test_custom_storage_key(backend: MemoryBackend) -> None:
    store = CredentialStore(backend, storage_key="auth-tokens-production")
    store.save(CredentialPair(access_token="access", refresh_token="refresh"))

    assert backend.get("auth-tokens") is None
    assert backend.get("auth-tokens-production") is not None


def test_encrypted_store_round_trip(backend: MemoryBackend) -> None:
    store = CredentialStore(backend, cipher=TokenCipherService(secret="secret"))
    store.save(CredentialPair(access_token="access", refresh_token="refresh"))

    assert "access" not in backend.get("auth-tokens")
    assert store.load() == CredentialPair(access_token="access", refresh_token="refresh")


def test_encrypted_store_ignores_undecryptable_value(backend: MemoryBackend) -> None:
    backend.set("auth-tokens", '{"accessToken": "a", "refreshToken": "r"}')
    store = CredentialStore(backend, cipher=TokenCipherService(secret="secret"))

    assert store.load() is None


def test_sqlite_backend_persists_between_instances(tmp_path) -> None:
    db_path = tmp_path / "nested" / "tokens.db"
    CredentialStore(SQLiteBackend(str(db_path))).save(
        CredentialPair(access_token="access", refresh_token="refresh")
    )

    reopened = CredentialStore(SQLiteBackend(str(db_path)))
    assert reopened.load() == CredentialPair(access_token="access", refresh_token="refresh")

    reopened.save(CredentialPair(access_token="access-2", refresh_token="refresh-2"))
    assert reopened.get_access_token() == "access-2"

    reopened.clear()
    reopened.clear()
    assert reopened.load() is None


def test_sqlite_backend_rejects_empty_key(tmp_path) -> None:
    backend = SQLiteBackend(str(tmp_path / "tokens.db"))

    with pytest.raises(ValueError):
        backend.set("", "value")


def test_load_re_encrypts_under_current_secret(backend: MemoryBackend) -> None:
    CredentialStore(backend, cipher=TokenCipherService(secret="retired")).save(
        CredentialPair(access_token="access", refresh_token="refresh")
    )
    rotated = TokenCipherService(secret="current", previous_secrets=["retired"])

    pair = CredentialStore(backend, cipher=rotated).load()

    assert pair == CredentialPair(access_token="access", refresh_token="refresh")
    assert rotated.is_current(backend.get("auth-tokens")) is True
    assert CredentialStore(backend, cipher=TokenCipherService(secret="current")).load() == pair
