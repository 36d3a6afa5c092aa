"""Tests for the identity and option models."""

from __future__ import annotations

import ssl

import pytest
from pydantic import ValidationError

from tokenflows.models import (
    CertificateCredential,
    ClientOptions,
    Identity,
    RequestOptions,
    SecretCredential,
    TokenResponse,
)


class TestIdentity:
    def test_secret_identity(self, secret_identity: Identity) -> None:
        assert not secret_identity.is_certificate_based()
        assert secret_identity.client_secret == "s3cr3t"
        assert secret_identity.certificate == ""
        assert secret_identity.key == ""

    def test_certificate_identity(self, cert_identity: Identity, pem_pair: tuple[str, str]) -> None:
        certificate, key = pem_pair
        assert cert_identity.is_certificate_based()
        assert cert_identity.client_secret == ""
        assert cert_identity.certificate == certificate
        assert cert_identity.key == key

    def test_credential_discriminated_by_kind(self, pem_pair: tuple[str, str]) -> None:
        certificate, key = pem_pair
        identity = Identity.model_validate(
            {
                "url": "https://auth.example.com",
                "client_id": "svc",
                "credential": {"kind": "certificate", "certificate": certificate, "key": key},
            }
        )
        assert isinstance(identity.credential, CertificateCredential)

    def test_unknown_credential_kind_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Identity.model_validate(
                {
                    "url": "https://auth.example.com",
                    "client_id": "svc",
                    "credential": {"kind": "password", "client_secret": "x"},
                }
            )

    def test_trailing_slash_stripped(self) -> None:
        identity = Identity(
            url="https://auth.example.com/",
            client_id="svc",
            credential=SecretCredential(client_secret="x"),
        )
        assert identity.url == "https://auth.example.com"

    def test_empty_client_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Identity(url="https://auth.example.com", client_id="", credential=SecretCredential())

    def test_frozen(self, secret_identity: Identity) -> None:
        with pytest.raises(ValidationError):
            secret_identity.client_id = "other"  # type: ignore[misc]

    def test_secret_hidden_in_repr(self, secret_identity: Identity) -> None:
        assert "s3cr3t" not in repr(secret_identity)


class TestCertificateCredential:
    def test_blank_certificate_rejected(self, pem_pair: tuple[str, str]) -> None:
        with pytest.raises(ValidationError, match="certificate must not be empty"):
            CertificateCredential(certificate="  ", key=pem_pair[1])

    def test_blank_key_rejected(self, pem_pair: tuple[str, str]) -> None:
        with pytest.raises(ValidationError, match="key must not be empty"):
            CertificateCredential(certificate=pem_pair[0], key="")


class TestOptions:
    def test_client_option_defaults(self) -> None:
        options = ClientOptions()
        assert options.http_client is None
        assert options.timeout == 10.0
        assert options.max_idle_connections == 50
        assert options.min_tls_version == ssl.TLSVersion.TLSv1_2

    def test_client_options_reject_non_positive_timeout(self) -> None:
        with pytest.raises(ValidationError):
            ClientOptions(timeout=0)

    def test_request_option_defaults(self) -> None:
        options = RequestOptions()
        assert options.params == {}
        assert options.timeout is None

    def test_request_options_reject_non_positive_timeout(self) -> None:
        with pytest.raises(ValidationError):
            RequestOptions(timeout=-1)


class TestTokenResponse:
    def test_extra_fields_ignored(self) -> None:
        response = TokenResponse.model_validate(
            {"access_token": "abc", "token_type": "bearer", "expires_in": 3600}
        )
        assert response.access_token == "abc"

    def test_missing_token_is_none(self) -> None:
        assert TokenResponse.model_validate({}).access_token is None
