"""Factories for the default HTTP clients used by the token flows.

Every client gets a bounded timeout. When a mutual TLS context is present
it is attached to the transport and idle keep-alive connections are capped
so repeated token requests do not grow the pool unbounded.
"""

from __future__ import annotations

import ssl
from typing import Any, Optional

import httpx

from tokenflows.config import DEFAULT_MAX_IDLE_CONNECTIONS, DEFAULT_TIMEOUT


def _client_kwargs(
    tls_config: Optional[ssl.SSLContext],
    timeout: float,
    max_idle_connections: int,
) -> dict[str, Any]:
    kwargs: dict[str, Any] = {"timeout": httpx.Timeout(timeout)}
    if tls_config is not None:
        kwargs["verify"] = tls_config
        kwargs["limits"] = httpx.Limits(max_keepalive_connections=max_idle_connections)
    return kwargs


def default_http_client(
    tls_config: Optional[ssl.SSLContext] = None,
    timeout: float = DEFAULT_TIMEOUT,
    max_idle_connections: int = DEFAULT_MAX_IDLE_CONNECTIONS,
) -> httpx.Client:
    """Return a blocking :class:`httpx.Client` for token requests.

    Args:
        tls_config: Mutual TLS context from
            :func:`~tokenflows.httpclient.tls.default_tls_config`, or
            ``None`` for the default transport.
        timeout: Timeout in seconds applied to every request.
        max_idle_connections: Keep-alive cap, applied only with a TLS
            context.
    """
    return httpx.Client(**_client_kwargs(tls_config, timeout, max_idle_connections))


def default_async_http_client(
    tls_config: Optional[ssl.SSLContext] = None,
    timeout: float = DEFAULT_TIMEOUT,
    max_idle_connections: int = DEFAULT_MAX_IDLE_CONNECTIONS,
) -> httpx.AsyncClient:
    """Return an :class:`httpx.AsyncClient` configured like :func:`default_http_client`."""
    return httpx.AsyncClient(**_client_kwargs(tls_config, timeout, max_idle_connections))
