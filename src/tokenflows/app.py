"""Typer application and CLI entry point for tokenflows.

The ``tokenflows token`` command builds an
:class:`~tokenflows.models.Identity` from flags and PEM files, runs the
client credentials flow once and prints the access token to stdout.
Diagnostics go to stderr, so the token can be captured directly::

    TOKEN=$(tokenflows token --url https://auth.example.com \\
        --client-id my-service --cert-file svc.crt --key-file svc.key)

Failures exit with the code of the raised
:class:`~tokenflows.exceptions.TokenFlowsError` (see
:mod:`tokenflows.exit_codes`).
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from tokenflows import __version__
from tokenflows.exceptions import InvalidUsageError, TokenFlowsError
from tokenflows.exit_codes import EXIT_INVALID_USAGE
from tokenflows.flows import TokenFlows
from tokenflows.models import (
    CertificateCredential,
    ClientOptions,
    Identity,
    RequestOptions,
    SecretCredential,
)
from tokenflows.output import OutputFormat, OutputManager, error, get_output, set_output


app = typer.Typer(
    name="tokenflows",
    help="Fetch OAuth2 client credentials tokens for service identities.",
    no_args_is_help=True,
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"tokenflows {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Initialise the global output manager from the CLI flags."""
    set_output(
        OutputManager(
            format=OutputFormat.JSON if json_output else OutputFormat.PLAIN,
            no_color=no_color,
            verbose=verbose,
        )
    )


@app.command("token")
def token_command(
    url: str = typer.Option(..., "--url", help="Base URL of the identity service."),
    client_id: str = typer.Option(..., "--client-id", help="Client identifier."),
    client_secret: Optional[str] = typer.Option(
        None, "--client-secret", help="Client secret (secret-based identities)."
    ),
    cert_file: Optional[Path] = typer.Option(
        None, "--cert-file", exists=True, dir_okay=False, help="PEM client certificate."
    ),
    key_file: Optional[Path] = typer.Option(
        None, "--key-file", exists=True, dir_okay=False, help="PEM private key."
    ),
    tenant_url: Optional[str] = typer.Option(
        None, "--tenant-url", help="Customer tenant URL whose host receives the request."
    ),
    param: Optional[list[str]] = typer.Option(
        None,
        "--param",
        "-P",
        help="Extra form parameter as name=value. Repeatable. grant_type is always client_credentials.",
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", min=0.001, help="Timeout for this request in seconds."
    ),
) -> None:
    """Request an access token with the client credentials grant."""
    try:
        identity = _build_identity(url, client_id, client_secret, cert_file, key_file)
        request_options = RequestOptions(params=_parse_params(param or []), timeout=timeout)
        with TokenFlows(identity, ClientOptions()) as flows:
            token = flows.client_credentials(tenant_url, request_options)
    except ValidationError as exc:
        error(f"Invalid identity: {exc}")
        raise typer.Exit(code=EXIT_INVALID_USAGE) from None
    except TokenFlowsError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    get_output().format_response({"access_token": token})


def _build_identity(
    url: str,
    client_id: str,
    client_secret: Optional[str],
    cert_file: Optional[Path],
    key_file: Optional[Path],
) -> Identity:
    """Assemble an identity from exactly one credential form."""
    if (cert_file is None) != (key_file is None):
        raise InvalidUsageError("--cert-file and --key-file must be given together")
    if cert_file is not None and key_file is not None:
        if client_secret:
            raise InvalidUsageError("--client-secret cannot be combined with --cert-file")
        credential: CertificateCredential | SecretCredential = CertificateCredential(
            certificate=cert_file.read_text(encoding="utf-8"),
            key=key_file.read_text(encoding="utf-8"),
        )
    else:
        credential = SecretCredential(client_secret=client_secret or "")
    return Identity(url=url, client_id=client_id, credential=credential)


def _parse_params(values: list[str]) -> dict[str, str]:
    """Parse repeated ``name=value`` flags into a dict (last one wins)."""
    params: dict[str, str] = {}
    for item in values:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise InvalidUsageError(f"Invalid --param '{item}': expected name=value")
        params[name] = value
    return params


def main() -> None:
    """CLI entry point invoked by the ``tokenflows`` console script."""
    try:
        app()
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
