"""Shared test fixtures for tokenflows.

Provides self-signed PEM material generated with :mod:`cryptography` and
ready-made identities for both credential forms. The global output
manager is reset after every test.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from tokenflows.models import CertificateCredential, Identity, SecretCredential
from tokenflows.output import OutputManager, reset_output, set_output

IDENTITY_URL = "https://tenant.accounts.example.com"


def _private_key_pem(key: ec.EllipticCurvePrivateKey) -> str:
    return key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode("ascii")


def _self_signed(common_name: str) -> tuple[str, str]:
    """Return a (certificate, key) PEM pair for a one-day self-signed CA."""
    key = ec.generate_private_key(ec.SECP256R1())
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now = datetime.now(timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(hours=1))
        .not_valid_after(now + timedelta(days=1))
        .add_extension(x509.BasicConstraints(ca=True, path_length=None), critical=True)
        .sign(key, hashes.SHA256())
    )
    return cert.public_bytes(serialization.Encoding.PEM).decode("ascii"), _private_key_pem(key)


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests():
    """Install a colourless manager and drop it after each test."""
    set_output(OutputManager(no_color=True))
    yield
    reset_output()


# ---------------------------------------------------------------------------
# PEM material and identities
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def pem_pair() -> tuple[str, str]:
    return _self_signed("my-service")


@pytest.fixture(scope="session")
def other_key_pem() -> str:
    return _private_key_pem(ec.generate_private_key(ec.SECP256R1()))


@pytest.fixture
def secret_identity() -> Identity:
    return Identity(
        url=IDENTITY_URL,
        client_id="my-service",
        credential=SecretCredential(client_secret="s3cr3t"),
    )


@pytest.fixture
def cert_identity(pem_pair: tuple[str, str]) -> Identity:
    certificate, key = pem_pair
    return Identity(
        url=IDENTITY_URL,
        client_id="my-service",
        credential=CertificateCredential(certificate=certificate, key=key),
    )


