"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~tokenflows.exceptions.TokenFlowsError` subclass.
Shell wrappers can inspect the exit code of ``tokenflows token`` to
determine the failure class without parsing stderr.

Example::

    $ tokenflows token --url https://auth.example.com --client-id svc
    $ echo $?
    3   # EXIT_REQUEST_FAILED -- the token endpoint rejected the request
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred, including TLS configuration errors."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or an unusable tenant URL."""

EXIT_REQUEST_FAILED = 3
"""The token endpoint answered with a non-200 status code."""

EXIT_INVALID_RESPONSE = 5
"""The token endpoint answered 200 but the body held no usable token."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""
