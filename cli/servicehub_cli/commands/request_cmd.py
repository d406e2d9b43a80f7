from __future__ import annotations

import json
from typing import Any

import typer

from servicehub_client import ConfigurationError, ServerError, SetupError, Success, TransportError

from .. import console
from ..config import load_config
from ..http import make_client

EXIT_SERVER_ERROR = 2
EXIT_TRANSPORT_ERROR = 3
EXIT_SETUP_ERROR = 4


def _parse_headers(values: list[str]) -> dict[str, str]:
    headers: dict[str, str] = {}
    for raw in values:
        name, sep, value = raw.partition(":")
        if not sep or not name.strip():
            console.err(f"Invalid header {raw!r}; expected 'Name: value'.")
            raise typer.Exit(code=EXIT_SETUP_ERROR)
        headers[name.strip()] = value.strip()
    return headers


def _parse_body(data: str | None) -> Any:
    if data is None:
        return None
    try:
        return json.loads(data)
    except ValueError as e:
        console.err(f"--data is not valid JSON: {e}")
        raise typer.Exit(code=EXIT_SETUP_ERROR)


def _print_body(body: Any) -> None:
    if body is None:
        return
    if isinstance(body, (dict, list)):
        console.print_json(body)
    else:
        console.print(str(body), markup=False)


def request(
    method: str = typer.Argument(..., help="HTTP method, e.g. GET or POST."),
    path: str = typer.Argument(..., help="Path relative to the base URL, e.g. /api/services."),
    data: str | None = typer.Option(None, "--data", "-d", help="JSON request body."),
    header: list[str] | None = typer.Option(None, "--header", "-H", help="Extra header, 'Name: value'. Repeatable."),
    base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
    strict: bool | None = typer.Option(
        None,
        "--strict/--advisory",
        help="Clear the stored session on 401 (strict) or leave it alone (advisory).",
    ),
    timeout_ms: int | None = typer.Option(None, "--timeout-ms", help="Request timeout in milliseconds."),
):
    """Send one authenticated request and print the result."""
    headers = _parse_headers(header or [])
    body = _parse_body(data)
    policy = None if strict is None else ("strict" if strict else "advisory")

    cfg = load_config()
    try:
        client = make_client(cfg, base_url_override=base_url, session_policy=policy, timeout_ms=timeout_ms)
    except ConfigurationError as e:
        console.err(str(e))
        raise typer.Exit(code=EXIT_SETUP_ERROR)
    try:
        outcome = client.request(method, path, json_body=body, headers=headers)
    finally:
        client.close()

    if isinstance(outcome, Success):
        _print_body(outcome.body)
        return
    if isinstance(outcome, ServerError):
        console.err(f"{method.upper()} {path} failed with {outcome.status}: {outcome.message}")
        _print_body(outcome.body)
        raise typer.Exit(code=EXIT_SERVER_ERROR)
    if isinstance(outcome, TransportError):
        console.err(f"No response received for {method.upper()} {path}: {outcome.message}")
        raise typer.Exit(code=EXIT_TRANSPORT_ERROR)
    if isinstance(outcome, SetupError):
        console.err(f"Error setting up request: {outcome.message}")
        raise typer.Exit(code=EXIT_SETUP_ERROR)
