"""
httpx authentication hook backed by the refresh coordinator.

Attach :class:`RefreshingAuth` to an ``httpx.AsyncClient`` to get a fresh
access token on every request and a single renew-and-retry when the remote
service answers with 401.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import AsyncGenerator, Iterable

import httpx

from authrefresh.services.refresh_coordinator import ExchangeFn, TokenRefreshCoordinator

logger = logging.getLogger(__name__)


class RefreshingAuth(httpx.Auth):
    """Authorize requests with the stored access token, renewing it when needed."""

    def __init__(
        self,
        coordinator: TokenRefreshCoordinator,
        exchange: ExchangeFn,
        *,
        header_name: str = "Authorization",
        header_prefix: str = "Bearer ",
        retry_status_codes: Iterable[int] = (HTTPStatus.UNAUTHORIZED,),
    ) -> None:
        self._coordinator = coordinator
        self._exchange = exchange
        self.header_name = header_name
        self.header_prefix = header_prefix
        self.retry_status_codes = frozenset(int(code) for code in retry_status_codes)

    def sync_auth_flow(self, request: httpx.Request):
        raise RuntimeError("RefreshingAuth can only be used with httpx.AsyncClient.")

    async def async_auth_flow(
        self, request: httpx.Request
    ) -> AsyncGenerator[httpx.Request, httpx.Response]:
        sent_token = await self._coordinator.ensure_fresh(self._exchange)
        self._authorize(request, sent_token)
        response = yield request

        if response.status_code not in self.retry_status_codes:
            return

        pair = self._coordinator.store.load()
        if pair is None:
            logger.warning("Got %s and no tokens are stored; not retrying.", response.status_code)
            return

        if pair.access_token != sent_token:
            # Another request renewed the token while this one was in flight.
            token = pair.access_token
        else:
            try:
                token = await self._coordinator.ensure_fresh_for(
                    pair, self._exchange, force_renew=True
                )
            except Exception as exc:
                logger.warning(
                    "Token renewal after %s failed; returning the original response: %s",
                    response.status_code,
                    exc,
                )
                return

        logger.debug("Retrying %s %s with a renewed access token.", request.method, request.url)
        self._authorize(request, token)
        yield request

    def _authorize(self, request: httpx.Request, token: str) -> None:
        request.headers[self.header_name] = f"{self.header_prefix}{token}"


__all__ = ["RefreshingAuth"]
