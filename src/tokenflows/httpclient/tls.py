"""Mutual TLS configuration for certificate-based identities.

:func:`default_tls_config` turns the PEM certificate and key of an
:class:`~tokenflows.models.Identity` into a client-side
:class:`ssl.SSLContext`:

1. the certificate/key pair becomes the client certificate presented in the
   handshake,
2. the platform's default trusted roots are loaded,
3. the identity's own certificate is added to that trust store so servers
   issued by the same authority validate,
4. the minimum protocol version is raised to TLS 1.2.

Secret-based identities need no special transport, so ``None`` is returned
for them. Each failure is reported as a distinct
:class:`~tokenflows.exceptions.ConfigError`; a partially configured
context is never returned.
"""

from __future__ import annotations

import os
import ssl
import tempfile
from pathlib import Path
from typing import Optional

from tokenflows.config import DEFAULT_MIN_TLS_VERSION
from tokenflows.exceptions import ConfigError
from tokenflows.models import Identity
from tokenflows.output import debug


def default_tls_config(
    identity: Identity,
    min_version: ssl.TLSVersion = DEFAULT_MIN_TLS_VERSION,
) -> Optional[ssl.SSLContext]:
    """Build the mutual TLS context for *identity*.

    Args:
        identity: The service identity. Only certificate-based identities
            produce a context.
        min_version: Lowest accepted TLS protocol version.

    Returns:
        A ready :class:`ssl.SSLContext`, or ``None`` when the identity
        authenticates with a client secret.

    Raises:
        ConfigError: If the key pair is malformed, the platform trust
            store cannot be loaded, or the certificate cannot be added to it.
    """
    if not identity.is_certificate_based():
        return None

    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    try:
        _load_key_pair(context, identity.certificate, identity.key)
    except (ssl.SSLError, OSError, ValueError) as exc:
        raise ConfigError(f"error creating x509 key pair for default TLS config: {exc}") from exc

    try:
        context.load_default_certs(ssl.Purpose.SERVER_AUTH)
    except (ssl.SSLError, OSError) as exc:
        raise ConfigError(f"error setting up cert pool for default TLS config: {exc}") from exc

    try:
        context.load_verify_locations(cadata=identity.certificate)
    except (ssl.SSLError, ValueError) as exc:
        raise ConfigError(f"error adding certs to pool for default TLS config: {exc}") from exc

    context.minimum_version = min_version
    debug(f"Mutual TLS configured for client '{identity.client_id}' (min {min_version.name})")
    return context


def _load_key_pair(context: ssl.SSLContext, certificate: str, key: str) -> None:
    """Load a PEM certificate/key pair into *context*.

    :meth:`ssl.SSLContext.load_cert_chain` only reads from files, so the
    PEM text is written to a private temporary directory that is removed
    as soon as the pair is loaded.
    """
    with tempfile.TemporaryDirectory(prefix="tokenflows-") as tmp_dir:
        cert_path = Path(tmp_dir) / "client.crt"
        key_path = Path(tmp_dir) / "client.key"
        cert_path.write_text(certificate, encoding="utf-8")
        fd = os.open(key_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(key)
        context.load_cert_chain(
            certfile=str(cert_path), keyfile=str(key_path), password=_refuse_password
        )


def _refuse_password() -> bytes:
    # Called by OpenSSL only for encrypted keys; never prompt on the terminal.
    raise ValueError("encrypted private keys are not supported")
