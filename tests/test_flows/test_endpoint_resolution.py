"""Tests for endpoint resolution and parameter assembly, without any HTTP."""

from __future__ import annotations

import pytest

from tokenflows.exceptions import URLResolutionError
from tokenflows.flows.base import BaseTokenFlows
from tokenflows.models import Identity, RequestOptions


class TestResolveTokenURL:
    def test_none_uses_identity_endpoint(self, secret_identity: Identity) -> None:
        flows = BaseTokenFlows(secret_identity)
        assert flows.resolve_token_url(None) == flows.token_url

    def test_empty_string_rejected(self, secret_identity: Identity) -> None:
        flows = BaseTokenFlows(secret_identity)
        with pytest.raises(URLResolutionError, match="is not a valid url"):
            flows.resolve_token_url("")

    def test_backslash_before_userinfo_rejected(self, secret_identity: Identity) -> None:
        flows = BaseTokenFlows(secret_identity)
        with pytest.raises(URLResolutionError, match="invalid character"):
            flows.resolve_token_url("https://evil.example.com\\@custom.example.com")

    def test_scheme_relative_url_accepted(self, secret_identity: Identity) -> None:
        flows = BaseTokenFlows(secret_identity)
        assert flows.resolve_token_url("//custom.example.com") == (
            "https://custom.example.com/oauth2/token"
        )

    def test_error_names_offending_value(self, secret_identity: Identity) -> None:
        flows = BaseTokenFlows(secret_identity)
        with pytest.raises(URLResolutionError) as exc_info:
            flows.resolve_token_url("custom.example.com")

        assert "'custom.example.com'" in str(exc_info.value)
        assert "without a scheme" in str(exc_info.value)


class TestBuildParams:
    def test_grant_type_set_last(self, secret_identity: Identity) -> None:
        params = BaseTokenFlows(secret_identity).build_params(
            RequestOptions(params={"resource": "urn:api"})
        )
        assert list(params) == ["client_id", "client_secret", "resource", "grant_type"]

    def test_without_options(self, cert_identity: Identity) -> None:
        params = BaseTokenFlows(cert_identity).build_params()
        assert params == {"client_id": "my-service", "grant_type": "client_credentials"}
