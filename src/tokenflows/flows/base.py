"""Shared request and response handling for the token flows.

:class:`BaseTokenFlows` holds everything about a client credentials
exchange that does not depend on whether the HTTP client blocks or awaits:
endpoint resolution, form parameter assembly, request construction and
validation of the token response. :class:`~tokenflows.flows.TokenFlows`
and :class:`~tokenflows.flows.AsyncTokenFlows` add the actual send.
"""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import urlsplit

import httpx
from pydantic import ValidationError

from tokenflows.config import (
    CLIENT_ID_PARAMETER,
    CLIENT_SECRET_PARAMETER,
    FORM_CONTENT_TYPE,
    GRANT_TYPE_CLIENT_CREDENTIALS,
    GRANT_TYPE_PARAMETER,
    TOKEN_ENDPOINT,
)
from tokenflows.exceptions import (
    MissingAccessTokenError,
    RequestFailedError,
    ResponseParseError,
    URLResolutionError,
)
from tokenflows.models import ClientOptions, Identity, RequestOptions, TokenResponse
from tokenflows.output import debug, warning

_INVALID_HOST_CHARS = frozenset(' \t\r\n\f\v\\<>%"{}|^`')


class BaseTokenFlows:
    """Identity-bound state and protocol logic shared by both flow clients.

    Args:
        identity: Credentials and base URL of the identity service.
        options: Client options. ``options.http_client`` is used as is when
            given; subclasses build a default client otherwise.
    """

    def __init__(self, identity: Identity, options: Optional[ClientOptions] = None) -> None:
        self._identity = identity
        self._options = options or ClientOptions()
        self._token_url = identity.url + TOKEN_ENDPOINT

    @property
    def identity(self) -> Identity:
        return self._identity

    @property
    def token_url(self) -> str:
        """Default token endpoint, derived from the identity's base URL."""
        return self._token_url

    # ------------------------------------------------------------------ #
    # Request side
    # ------------------------------------------------------------------ #

    def resolve_token_url(self, customer_tenant_url: Optional[str] = None) -> str:
        """Return the token endpoint for *customer_tenant_url*.

        Only the host (and port) of the tenant URL is kept; the scheme is
        always ``https`` and the path is always the token endpoint. Without
        a tenant URL (``None``) the identity's own endpoint is used.

        Args:
            customer_tenant_url: Tenant base URL such as
                ``"https://custom.accounts.example.com"``, or ``None``.

        Raises:
            URLResolutionError: If the value has no scheme or cannot be
                parsed into a URL with a host.
        """
        if customer_tenant_url is None:
            return self._token_url

        reason = "missing host"
        try:
            parts = urlsplit(customer_tenant_url)
            parts.port  # rejects non-numeric and out of range ports
            invalid = sorted(set(parts.netloc) & _INVALID_HOST_CHARS)
            if invalid:
                raise ValueError(f"invalid character {invalid[0]!r} in host")
            host = parts.netloc.rpartition("@")[2]
        except ValueError as exc:
            reason = str(exc)
            host = ""

        if host:
            return f"https://{host}{TOKEN_ENDPOINT}"
        if not customer_tenant_url.startswith("http"):
            raise URLResolutionError(
                f"customer tenant url '{customer_tenant_url}' is not a valid url: "
                "Trying to parse a hostname without a scheme is invalid",
                url=customer_tenant_url,
            )
        raise URLResolutionError(
            f"customer tenant url '{customer_tenant_url}' can't be parsed: {reason}",
            url=customer_tenant_url,
        )

    def build_params(self, options: Optional[RequestOptions] = None) -> dict[str, str]:
        """Assemble the form parameters of a client credentials request.

        ``client_secret`` is only sent when the identity has one; certificate
        identities authenticate through the TLS handshake instead. Caller
        params are applied next and win over the defaults. ``grant_type`` is
        set last and always equals ``client_credentials``.
        """
        data: dict[str, str] = {CLIENT_ID_PARAMETER: self._identity.client_id}
        if self._identity.client_secret:
            data[CLIENT_SECRET_PARAMETER] = self._identity.client_secret
        if options is not None:
            requested_grant = options.params.get(GRANT_TYPE_PARAMETER)
            if requested_grant not in (None, GRANT_TYPE_CLIENT_CREDENTIALS):
                warning(
                    f"Ignoring grant_type '{requested_grant}': "
                    f"grant_type is always '{GRANT_TYPE_CLIENT_CREDENTIALS}'"
                )
            data.update(options.params)
        data[GRANT_TYPE_PARAMETER] = GRANT_TYPE_CLIENT_CREDENTIALS
        return data

    def _build_request(
        self,
        client: Any,
        customer_tenant_url: Optional[str],
        options: Optional[RequestOptions],
    ) -> httpx.Request:
        target_url = self.resolve_token_url(customer_tenant_url)
        kwargs: dict[str, Any] = {
            "data": self.build_params(options),
            "headers": {"Content-Type": FORM_CONTENT_TYPE, "Accept": "application/json"},
        }
        if options is not None and options.timeout is not None:
            kwargs["timeout"] = options.timeout
        debug(f"POST {target_url} (client_id={self._identity.client_id})")
        return client.build_request("POST", target_url, **kwargs)

    # ------------------------------------------------------------------ #
    # Response side
    # ------------------------------------------------------------------ #

    def _read_token(self, url: str, response: httpx.Response) -> str:
        """Validate a token endpoint response and return its access token."""
        debug(f"HTTP {response.status_code} from {url}")
        if response.status_code != httpx.codes.OK:
            raise RequestFailedError(url, response.status_code, response.text)

        try:
            token_response = TokenResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise ResponseParseError(f"error parsing response from {url}: {exc}", url=url) from exc

        if not token_response.access_token:
            raise MissingAccessTokenError(
                "error parsing requested client credentials token: "
                "no 'access_token' property provided",
                url=url,
            )
        return token_response.access_token
