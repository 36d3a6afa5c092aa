"""Blocking client credentials flow.

This module provides :class:`TokenFlows`, set up once per identity and
reused for every token request. It wraps an :class:`httpx.Client` -- built
from the identity unless one is supplied -- and performs exactly one
request attempt per call.

See Also:
    :class:`~tokenflows.flows.async_flows.AsyncTokenFlows` for the
    equivalent asyncio implementation.
"""

from __future__ import annotations

from typing import Optional

import httpx

from tokenflows.exceptions import NetworkError, ResponseParseError
from tokenflows.flows.base import BaseTokenFlows
from tokenflows.httpclient import HTTPClient, default_http_client, default_tls_config
from tokenflows.models import ClientOptions, Identity, RequestOptions


class TokenFlows(BaseTokenFlows):
    """Token flows of one service identity against its identity service.

    The object holds no per-call state and may be shared between threads.
    Used as a context manager it closes the HTTP client on exit, but only
    when it built that client itself.

    Args:
        identity: Credentials and base URL of the identity service.
        options: Client options. When ``options.http_client`` is ``None``, a
            default client with a 10 second timeout is built, using a mutual
            TLS context for certificate-based identities.

    Raises:
        ConfigError: If the TLS context for a certificate-based identity
            cannot be built.

    Example::

        with TokenFlows(identity) as flows:
            token = flows.client_credentials("https://custom.accounts.example.com")
    """

    def __init__(self, identity: Identity, options: Optional[ClientOptions] = None) -> None:
        super().__init__(identity, options)
        self._owns_client = self._options.http_client is None
        if self._owns_client:
            tls_config = default_tls_config(identity, self._options.min_tls_version)
            self._client: HTTPClient = default_http_client(
                tls_config,
                timeout=self._options.timeout,
                max_idle_connections=self._options.max_idle_connections,
            )
        else:
            self._client = self._options.http_client

    def __enter__(self) -> TokenFlows:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client if it was built by this object."""
        if self._owns_client:
            self._client.close()

    def client_credentials(
        self,
        customer_tenant_url: Optional[str] = None,
        options: Optional[RequestOptions] = None,
    ) -> str:
        """Run the client credentials flow (:rfc:`6749` section 4.4).

        The token is issued to the service itself rather than to an end
        user, for service-to-service calls without principal propagation.

        Note:
            ``grant_type`` is always sent as ``client_credentials``, even
            when ``options.params`` sets a different value.

        Args:
            customer_tenant_url: Tenant base URL like
                ``"https://custom.accounts.example.com"``. Its host replaces
                the identity's host for this call only. ``None`` uses the
                identity's own token endpoint.
            options: Extra form parameters and an optional per-call timeout.

        Returns:
            The non-empty access token string.

        Raises:
            URLResolutionError: If *customer_tenant_url* is not a usable URL.
            NetworkError: On DNS, connection or timeout failures.
            RequestFailedError: If the endpoint answers with a non-200 status.
            ResponseParseError: If the response body cannot be decoded or is
                not a JSON object.
            MissingAccessTokenError: If the response has no ``access_token``.
        """
        request = self._build_request(self._client, customer_tenant_url, options)
        url = str(request.url)
        try:
            response = self._client.send(request)
        except httpx.DecodingError as exc:
            raise ResponseParseError(f"error parsing response from {url}: {exc}", url=url) from exc
        except httpx.RequestError as exc:
            raise NetworkError(f"request to '{url}' failed: {exc}", url=url) from exc
        return self._read_token(url, response)
