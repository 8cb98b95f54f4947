"""
Expiration checks for JWT access tokens.

The payload is decoded without verifying the signature: the remote service is
the only party that needs to trust the token, the client merely wants to know
when to renew it.
"""

from __future__ import annotations

import time
from typing import Optional, Union

import jwt

DEFAULT_EXPIRE_MARGIN_SECONDS = 10


def get_expiration(token: str) -> Optional[Union[int, float]]:
    """Return the ``exp`` claim of ``token`` as stored, or ``None`` if it cannot be read."""
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError:
        return None
    exp = claims.get("exp")
    if isinstance(exp, bool) or not isinstance(exp, (int, float)):
        return None
    return exp


def expires_in(token: str, now: Optional[float] = None) -> Optional[float]:
    """Seconds until ``token`` expires; negative once it has expired."""
    exp = get_expiration(token)
    if exp is None:
        return None
    current = time.time() if now is None else now
    return exp - current


def is_expired(
    token: str,
    margin_seconds: float = DEFAULT_EXPIRE_MARGIN_SECONDS,
    now: Optional[float] = None,
) -> bool:
    """
    Whether ``token`` is expired or expires within ``margin_seconds``.

    Tokens without a readable expiration are reported as expired so that they
    get replaced by a renewed token.
    """
    exp = get_expiration(token)
    if exp is None:
        return True
    current = time.time() if now is None else now
    return current + margin_seconds >= exp


__all__ = [
    "DEFAULT_EXPIRE_MARGIN_SECONDS",
    "expires_in",
    "get_expiration",
    "is_expired",
]
