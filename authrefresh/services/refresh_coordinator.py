"""
Single-flight renewal of the stored access token.

Every outbound request asks the coordinator for a usable access token. While
the stored token is fresh it is returned straight away; once it is stale the
first caller starts a renewal episode and every caller arriving before that
episode finishes awaits the same outcome, so the exchange function runs once
per episode no matter how many requests are waiting.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import Mapping
from http import HTTPStatus
from typing import Any, Awaitable, Callable, Iterable, Optional, Union

from authrefresh.errors import (
    CredentialsRejectedError,
    InvalidRefreshResponseError,
    NoSessionError,
)
from authrefresh.models import CredentialPair
from authrefresh.services.credential_store import CredentialStore
from authrefresh.services.expiration import (
    DEFAULT_EXPIRE_MARGIN_SECONDS,
    expires_in,
    is_expired,
)

logger = logging.getLogger(__name__)

ExchangeResult = Union[str, Mapping[str, Any], CredentialPair]
ExchangeFn = Callable[[str], Union[ExchangeResult, Awaitable[ExchangeResult]]]
RejectionPredicate = Callable[[BaseException], bool]

DEFAULT_REJECTION_STATUS_CODES = (
    HTTPStatus.UNAUTHORIZED,
    HTTPStatus.UNPROCESSABLE_ENTITY,
)


def extract_status_code(exc: BaseException) -> Optional[int]:
    """Read an HTTP status carried by ``exc`` (``status_code`` or ``response.status_code``)."""
    status = getattr(exc, "status_code", None)
    if status is None:
        response = getattr(exc, "response", None)
        status = getattr(response, "status_code", None)
    if isinstance(status, bool) or not isinstance(status, int):
        return None
    return int(status)


class StatusCodeRejection:
    """Treat exchange failures carrying one of ``status_codes`` as a rejected refresh token."""

    def __init__(self, status_codes: Iterable[int] = DEFAULT_REJECTION_STATUS_CODES) -> None:
        self.status_codes = frozenset(int(code) for code in status_codes)

    def __call__(self, exc: BaseException) -> bool:
        return extract_status_code(exc) in self.status_codes


def _read_field(result: Any, name: str, alias: str) -> Any:
    if isinstance(result, Mapping):
        return result[name] if name in result else result.get(alias)
    value = getattr(result, name, None)
    return getattr(result, alias, None) if value is None else value


def normalize_exchange_result(result: ExchangeResult, current: CredentialPair) -> CredentialPair:
    """
    Merge an exchange result into ``current``; the refresh token is kept unless replaced.

    Besides a bare access token string, mappings and objects are accepted with
    either the ``access_token``/``refresh_token`` names or the stored
    ``accessToken``/``refreshToken`` ones.
    """
    if isinstance(result, str):
        return current.model_copy(update={"access_token": result})

    access_token = _read_field(result, "access_token", "accessToken")
    refresh_token = _read_field(result, "refresh_token", "refreshToken")

    if not isinstance(access_token, str):
        raise InvalidRefreshResponseError()
    if refresh_token is not None and not isinstance(refresh_token, str):
        raise InvalidRefreshResponseError(
            "exchange returned a refresh_token that is not a string"
        )
    update = {"access_token": access_token}
    if refresh_token:
        update["refresh_token"] = refresh_token
    return current.model_copy(update=update)


class TokenRefreshCoordinator:
    """Decide when to renew the access token and make sure renewals never overlap."""

    def __init__(
        self,
        store: CredentialStore,
        *,
        expire_margin_seconds: float = DEFAULT_EXPIRE_MARGIN_SECONDS,
        is_rejection: Optional[RejectionPredicate] = None,
        now: Optional[Callable[[], float]] = None,
    ) -> None:
        self._store = store
        self._margin = expire_margin_seconds
        self._is_rejection = is_rejection or StatusCodeRejection()
        self._now = now or time.time
        self._episode: Optional[asyncio.Task[str]] = None

    @property
    def store(self) -> CredentialStore:
        return self._store

    @property
    def refresh_in_flight(self) -> bool:
        return self._episode is not None

    async def ensure_fresh(self, exchange: ExchangeFn, *, force_renew: bool = False) -> str:
        """Return a usable access token, renewing it first when needed."""
        pair = self._store.load()
        if pair is None:
            raise NoSessionError("No auth tokens are stored; log in first.")
        return await self.ensure_fresh_for(pair, exchange, force_renew=force_renew)

    async def ensure_fresh_for(
        self,
        pair: CredentialPair,
        exchange: ExchangeFn,
        *,
        force_renew: bool = False,
    ) -> str:
        """Same as :meth:`ensure_fresh` for a pair the caller already loaded."""
        now = self._now()
        if not force_renew and not is_expired(pair.access_token, self._margin, now=now):
            return pair.access_token

        episode = self._episode
        if episode is None:
            logger.debug(
                "Renewing access token (forced=%s, expires_in=%s).",
                force_renew,
                expires_in(pair.access_token, now=now),
            )
            episode = asyncio.ensure_future(self._renew(pair, exchange))
            episode.add_done_callback(self._episode_finished)
            self._episode = episode
        else:
            logger.debug("Joining in-flight access token renewal.")

        # A waiter being cancelled must not cancel the renewal other callers share.
        return await asyncio.shield(episode)

    async def _renew(self, pair: CredentialPair, exchange: ExchangeFn) -> str:
        try:
            try:
                result = exchange(pair.refresh_token)
                if inspect.isawaitable(result):
                    result = await result
            except Exception as exc:
                if self._is_rejection(exc):
                    status_code = extract_status_code(exc)
                    logger.warning(
                        "Refresh token rejected with status %s; clearing stored tokens.",
                        status_code,
                    )
                    self._store.clear()
                    raise CredentialsRejectedError(status_code) from exc
                logger.warning("Access token renewal failed: %s", exc)
                raise

            renewed = normalize_exchange_result(result, pair)
            self._store.save(renewed)
            logger.info(
                "Access token renewed (refresh token %s).",
                "rotated" if renewed.refresh_token != pair.refresh_token else "kept",
            )
            return renewed.access_token
        finally:
            if self._episode is asyncio.current_task():
                self._episode = None

    def _episode_finished(self, episode: asyncio.Task[str]) -> None:
        if self._episode is episode:
            self._episode = None
        # Mark the outcome as retrieved in case every waiter was cancelled.
        if not episode.cancelled():
            episode.exception()


__all__ = [
    "DEFAULT_REJECTION_STATUS_CODES",
    "ExchangeFn",
    "RejectionPredicate",
    "StatusCodeRejection",
    "TokenRefreshCoordinator",
    "extract_status_code",
    "normalize_exchange_result",
]
