"""HTTP transport setup for the token flows.

Provides the mutual TLS configuration for certificate-based identities,
factories for ready-to-use :mod:`httpx` clients, and the protocols a
caller-supplied client has to satisfy.

Classes:
    :class:`HTTPClient` -- blocking capability, satisfied by :class:`httpx.Client`.
    :class:`AsyncHTTPClient` -- asyncio capability, satisfied by
    :class:`httpx.AsyncClient`.

Example::

    from tokenflows.httpclient import default_http_client, default_tls_config

    client = default_http_client(default_tls_config(identity))
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import httpx

from tokenflows.httpclient.factory import default_async_http_client, default_http_client
from tokenflows.httpclient.tls import default_tls_config


@runtime_checkable
class HTTPClient(Protocol):
    """Anything that can build and send an :class:`httpx.Request`.

    Implementations must honour the request's timeout and must not retry
    or mutate the request.
    """

    def build_request(self, method: str, url: Any, **kwargs: Any) -> httpx.Request: ...

    def send(self, request: httpx.Request, **kwargs: Any) -> httpx.Response: ...


@runtime_checkable
class AsyncHTTPClient(Protocol):
    """Asyncio counterpart of :class:`HTTPClient`."""

    def build_request(self, method: str, url: Any, **kwargs: Any) -> httpx.Request: ...

    async def send(self, request: httpx.Request, **kwargs: Any) -> httpx.Response: ...


__all__ = [
    "AsyncHTTPClient",
    "HTTPClient",
    "default_async_http_client",
    "default_http_client",
    "default_tls_config",
]
