"""Asyncio client credentials flow.

:class:`AsyncTokenFlows` mirrors :class:`~tokenflows.flows.TokenFlows`
on top of :class:`httpx.AsyncClient`. Cancelling the awaiting task aborts
the in-flight request; the :class:`asyncio.CancelledError` propagates to the
caller and the response is never parsed.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import httpx

from tokenflows.exceptions import NetworkError, ResponseParseError
from tokenflows.flows.base import BaseTokenFlows
from tokenflows.httpclient import AsyncHTTPClient, default_async_http_client, default_tls_config
from tokenflows.models import ClientOptions, Identity, RequestOptions
from tokenflows.output import debug


class AsyncTokenFlows(BaseTokenFlows):
    """Asyncio token flows of one service identity.

    Args:
        identity: Credentials and base URL of the identity service.
        options: Client options. ``options.http_client`` must be an
            :class:`httpx.AsyncClient` (or compatible) when given.

    Raises:
        ConfigError: If the TLS context for a certificate-based identity
            cannot be built.

    Example::

        async with AsyncTokenFlows(identity) as flows:
            token = await flows.client_credentials()
    """

    def __init__(self, identity: Identity, options: Optional[ClientOptions] = None) -> None:
        super().__init__(identity, options)
        self._owns_client = self._options.http_client is None
        if self._owns_client:
            tls_config = default_tls_config(identity, self._options.min_tls_version)
            self._client: AsyncHTTPClient = default_async_http_client(
                tls_config,
                timeout=self._options.timeout,
                max_idle_connections=self._options.max_idle_connections,
            )
        else:
            self._client = self._options.http_client

    async def __aenter__(self) -> AsyncTokenFlows:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if it was built by this object."""
        if self._owns_client:
            await self._client.aclose()

    async def client_credentials(
        self,
        customer_tenant_url: Optional[str] = None,
        options: Optional[RequestOptions] = None,
    ) -> str:
        """Run the client credentials flow (:rfc:`6749` section 4.4).

        Behaves like :meth:`TokenFlows.client_credentials
        <tokenflows.flows.TokenFlows.client_credentials>`, including the
        forced ``grant_type``.
        """
        request = self._build_request(self._client, customer_tenant_url, options)
        url = str(request.url)
        try:
            response = await self._client.send(request)
        except httpx.DecodingError as exc:
            raise ResponseParseError(f"error parsing response from {url}: {exc}", url=url) from exc
        except httpx.RequestError as exc:
            raise NetworkError(f"request to '{url}' failed: {exc}", url=url) from exc
        except asyncio.CancelledError:
            debug(f"Request to {url} cancelled")
            raise
        return self._read_token(url, response)
