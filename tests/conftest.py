"""Pytest configuration shared across the suite."""

from __future__ import annotations

import time
from typing import Callable, Optional

import jwt
import pytest

from authrefresh.clients import MemoryBackend
from authrefresh.services import CredentialStore

SIGNING_KEY = "test-signing-key-with-at-least-32-bytes"


def make_token(expires_in: Optional[float] = None, **claims) -> str:
    """Sign a throwaway JWT; ``expires_in`` is relative to now, omitted means no ``exp``."""
    payload = {"data": "foobar", **claims}
    if expires_in is not None:
        payload["exp"] = int(time.time() + expires_in)
    return jwt.encode(payload, SIGNING_KEY, algorithm="HS256")


@pytest.fixture
def token_factory() -> Callable[..., str]:
    return make_token


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def store(backend: MemoryBackend) -> CredentialStore:
    return CredentialStore(backend)
