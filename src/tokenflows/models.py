"""Pydantic models shared across the tokenflows modules.

**Identity models** -- the read-only service identity handed in by the
caller:
    :class:`SecretCredential`, :class:`CertificateCredential` and
    :class:`Identity`. The credential is a discriminated union on ``kind``,
    so an identity always carries exactly one credential form.

**Option models** -- per-client and per-call knobs:
    :class:`ClientOptions` and :class:`RequestOptions`.

**Wire models** -- decoded server payloads:
    :class:`TokenResponse`.

All models use Pydantic v2. Identity and option models are frozen.
"""

from __future__ import annotations

import ssl
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from tokenflows.config import (
    DEFAULT_MAX_IDLE_CONNECTIONS,
    DEFAULT_MIN_TLS_VERSION,
    DEFAULT_TIMEOUT,
)


# --- Identity ---


class SecretCredential(BaseModel):
    """Shared-secret credential sent as ``client_secret`` in the token request.

    An empty secret is accepted; it is simply never sent.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["secret"] = "secret"
    client_secret: SecretStr = Field(default=SecretStr(""))


class CertificateCredential(BaseModel):
    """X.509 certificate and private key, both PEM encoded.

    The pair authenticates the client during the TLS handshake, so no
    ``client_secret`` is sent with certificate-based identities.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["certificate"] = "certificate"
    certificate: str = Field(description="PEM encoded client certificate")
    key: SecretStr = Field(description="PEM encoded private key")

    @field_validator("certificate")
    @classmethod
    def _certificate_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("certificate must not be empty")
        return value

    @field_validator("key")
    @classmethod
    def _key_not_blank(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("key must not be empty")
        return value


Credential = Annotated[
    Union[SecretCredential, CertificateCredential],
    Field(discriminator="kind"),
]


class Identity(BaseModel):
    """Service identity used to authenticate against the identity service.

    Example::

        Identity(
            url="https://tenant.accounts.example.com",
            client_id="my-service",
            credential=CertificateCredential(certificate=cert_pem, key=key_pem),
        )
    """

    model_config = ConfigDict(frozen=True)

    url: str = Field(min_length=1, description="Base URL of the identity service")
    client_id: str = Field(min_length=1)
    credential: Credential

    @field_validator("url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    def is_certificate_based(self) -> bool:
        return isinstance(self.credential, CertificateCredential)

    @property
    def client_secret(self) -> str:
        """The shared secret, or ``""`` for certificate-based identities."""
        if isinstance(self.credential, SecretCredential):
            return self.credential.client_secret.get_secret_value()
        return ""

    @property
    def certificate(self) -> str:
        if isinstance(self.credential, CertificateCredential):
            return self.credential.certificate
        return ""

    @property
    def key(self) -> str:
        if isinstance(self.credential, CertificateCredential):
            return self.credential.key.get_secret_value()
        return ""


# --- Options ---


class ClientOptions(BaseModel):
    """Configuration of the HTTP client used by a token flows object.

    When ``http_client`` is ``None`` a default client is built from the
    identity using the remaining fields. A supplied client is used
    unchanged and the remaining fields are ignored; the caller is then
    responsible for its TLS setup.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    http_client: Optional[Any] = None
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    max_idle_connections: int = Field(default=DEFAULT_MAX_IDLE_CONNECTIONS, ge=0)
    min_tls_version: ssl.TLSVersion = DEFAULT_MIN_TLS_VERSION


class RequestOptions(BaseModel):
    """Per-call options for a token request.

    ``params`` are added to the form payload after the base parameters, so
    they may overwrite ``client_id`` or ``client_secret``. ``grant_type`` is
    always reset to ``client_credentials`` afterwards.

    ``timeout`` bounds this single call in seconds, overriding the client's
    own timeout.
    """

    model_config = ConfigDict(frozen=True)

    params: dict[str, str] = Field(default_factory=dict)
    timeout: Optional[float] = Field(default=None, gt=0)


# --- Wire ---


class TokenResponse(BaseModel):
    """Decoded token endpoint response. Fields other than ``access_token`` are ignored."""

    model_config = ConfigDict(extra="ignore")

    access_token: Optional[str] = None
