"""tokenflows -- OAuth2 client-credentials tokens for service identities.

This package exchanges a service identity's credentials for an access token
at the identity service's ``/oauth2/token`` endpoint. Identities
authenticate either with a shared client secret or with an X.509
certificate/key pair over mutual TLS.

Typical usage::

    from tokenflows import Identity, SecretCredential, TokenFlows

    identity = Identity(
        url="https://tenant.accounts.example.com",
        client_id="my-service",
        credential=SecretCredential(client_secret="s3cr3t"),
    )
    with TokenFlows(identity) as flows:
        token = flows.client_credentials()

Modules:
    models: Pydantic models for identities and request options.
    config: Named defaults (timeout, pool size, TLS version, endpoint).
    exceptions: Exception hierarchy with exit-code mapping.
    httpclient: TLS configuration and HTTP client factory.
    flows: Blocking and asyncio token flow clients.
    app: Typer command line entry point.
"""

__version__ = "0.1.0"

from tokenflows.exceptions import (  # noqa: E402
    ConfigError,
    MissingAccessTokenError,
    NetworkError,
    RequestFailedError,
    ResponseError,
    ResponseParseError,
    TokenFlowsError,
    URLResolutionError,
)
from tokenflows.flows import AsyncTokenFlows, TokenFlows  # noqa: E402
from tokenflows.models import (  # noqa: E402
    CertificateCredential,
    ClientOptions,
    Identity,
    RequestOptions,
    SecretCredential,
)

__all__ = [
    "AsyncTokenFlows",
    "CertificateCredential",
    "ClientOptions",
    "ConfigError",
    "Identity",
    "MissingAccessTokenError",
    "NetworkError",
    "RequestFailedError",
    "RequestOptions",
    "ResponseError",
    "ResponseParseError",
    "SecretCredential",
    "TokenFlows",
    "TokenFlowsError",
    "URLResolutionError",
]
