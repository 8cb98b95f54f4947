"""
HTTP client for a refresh-token endpoint.

``RefreshEndpointClient.exchange`` can be handed to the refresh coordinator as
its exchange function.
"""

from __future__ import annotations

from typing import Dict, Optional

import httpx

from authrefresh.core.config import RefreshSettings
from authrefresh.errors import ExchangeTransportError
from authrefresh.utils.http import RetryConfig, request_with_retry


class RefreshEndpointClient:
    """Exchange a refresh token for new tokens at ``settings.refresh_url``."""

    def __init__(
        self,
        settings: RefreshSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if settings.refresh_url is None:
            raise ValueError("A refresh_url must be configured to use the refresh client.")
        self._url = str(settings.refresh_url)
        self._timeout = settings.request_timeout_seconds
        self._retry = RetryConfig(
            attempts=settings.retry_attempts,
            backoff_seconds=settings.retry_backoff_seconds,
        )
        self._transport = transport

    async def exchange(self, refresh_token: str) -> Dict[str, Optional[str]]:
        """
        Post the refresh token and return the new tokens.

        Returns a mapping with ``access_token`` and, when the endpoint rotated
        it, ``refresh_token``.
        """
        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport
        ) as client:
            try:
                response = await request_with_retry(
                    client.post,
                    self._url,
                    json={"refresh": refresh_token},
                    retry_config=self._retry,
                )
            except httpx.TransportError as exc:
                raise ExchangeTransportError(f"Token refresh request failed: {exc}") from exc

        if response.is_error:
            raise ExchangeTransportError(
                f"Token refresh returned {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ExchangeTransportError("Token refresh returned a non-JSON body.") from exc

        access_token = payload.get("access") if isinstance(payload, dict) else None
        if not access_token:
            raise ExchangeTransportError("Incomplete refresh payload returned by the token endpoint.")

        return {
            "access_token": access_token,
            "refresh_token": payload.get("refresh"),
        }


__all__ = ["RefreshEndpointClient"]
