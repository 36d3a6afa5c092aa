"""Exception hierarchy for tokenflows.

All exceptions inherit from :class:`TokenFlowsError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`tokenflows.exit_codes`. Library callers branch on the exception type;
the command line entry point in :func:`tokenflows.app.main` catches
``TokenFlowsError`` and exits with the matching code.

Subclass hierarchy::

    TokenFlowsError             (exit 1)
    +-- ConfigError             (exit 1)
    +-- InvalidUsageError       (exit 2)
    +-- URLResolutionError      (exit 2)
    +-- NetworkError            (exit 6)
    +-- RequestFailedError      (exit 3)
    +-- ResponseError           (exit 5)
        +-- ResponseParseError
        +-- MissingAccessTokenError
"""

from __future__ import annotations

from tokenflows.exit_codes import (
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_RESPONSE,
    EXIT_INVALID_USAGE,
    EXIT_REQUEST_FAILED,
)


class TokenFlowsError(Exception):
    """Base exception for all tokenflows errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(TokenFlowsError):
    """Raised when TLS material is malformed or the trust store is unavailable."""

    exit_code = EXIT_GENERIC_FAILURE


class InvalidUsageError(TokenFlowsError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class URLResolutionError(TokenFlowsError):
    """Raised when a customer tenant URL is not a usable absolute URL.

    Attributes:
        url: The offending tenant URL as supplied by the caller.
    """

    exit_code = EXIT_INVALID_USAGE

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


class NetworkError(TokenFlowsError):
    """Raised on transport-level failures (timeout, DNS resolution, connection refused).

    Attributes:
        url: The token endpoint the request was sent to.
    """

    exit_code = EXIT_CONNECTION_ERROR

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


class RequestFailedError(TokenFlowsError):
    """Raised when the token endpoint answers with a status other than 200.

    The full response body is kept for diagnostics.

    Attributes:
        url: The token endpoint the request was sent to.
        status_code: HTTP status code of the response.
        body: Raw response body text.
    """

    exit_code = EXIT_REQUEST_FAILED

    def __init__(self, url: str, status_code: int, body: str):
        super().__init__(
            f"request to '{url}' failed with status code '{status_code}' "
            f"and payload: '{body}'"
        )
        self.url = url
        self.status_code = status_code
        self.body = body


class ResponseError(TokenFlowsError):
    """Base for successful responses that do not yield a usable token.

    Attributes:
        url: The token endpoint the response came from.
    """

    exit_code = EXIT_INVALID_RESPONSE

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


class ResponseParseError(ResponseError):
    """Raised when the token response body is not a JSON object."""


class MissingAccessTokenError(ResponseError):
    """Raised when the token response has no (or an empty) ``access_token``."""
