"""Named defaults for the token flows and their HTTP transport.

These are plain module constants. Per-client overrides go through
:class:`~tokenflows.models.ClientOptions`; nothing here is mutated at
runtime.
"""

from __future__ import annotations

import ssl

TOKEN_ENDPOINT = "/oauth2/token"  # noqa: S105
"""Path of the token endpoint relative to the identity service base URL."""

DEFAULT_TIMEOUT = 10.0
"""Request timeout in seconds for clients built by the factory."""

DEFAULT_MAX_IDLE_CONNECTIONS = 50
"""Keep-alive connection cap for clients using a mutual TLS context."""

DEFAULT_MIN_TLS_VERSION = ssl.TLSVersion.TLSv1_2
"""Lowest TLS protocol version accepted for mutual TLS connections."""

# --- Token request parameters ---

CLIENT_ID_PARAMETER = "client_id"
CLIENT_SECRET_PARAMETER = "client_secret"  # noqa: S105
GRANT_TYPE_PARAMETER = "grant_type"
GRANT_TYPE_CLIENT_CREDENTIALS = "client_credentials"

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
