from __future__ import annotations

import time
from datetime import datetime, timezone

import typer

from servicehub_client import ConfigurationError, ServerError, Success, TransportError

from ..config import load_config
from ..console import err, ok, print_json, warn
from ..http import make_client


def _emit(level: str, msg: str, *, json_mode: bool) -> None:
    if json_mode:
        return
    if level == "ok":
        ok(msg)
    elif level == "warn":
        warn(msg)
    else:
        err(msg)


def health(
        path: str = typer.Option("/health", "--path", help="Health endpoint path."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
        json_output: bool = typer.Option(False, "--json", help="Output JSON only."),
) -> None:
    """Check that the API answers."""
    cfg = load_config()
    try:
        client = make_client(cfg, base_url_override=base_url, session_policy="advisory")
    except ConfigurationError as e:
        err(str(e))
        raise typer.Exit(code=2)

    result: dict[str, object] = {
        "checked_at": datetime.now(timezone.utc).isoformat(),
        "base_url": client.config.base_url,
        "path": path,
        "ok": False,
        "status": None,
        "elapsed_ms": None,
        "error": None,
    }
    started = time.monotonic()
    try:
        outcome = client.get(path)
    finally:
        client.close()
    result["elapsed_ms"] = int((time.monotonic() - started) * 1000)

    if isinstance(outcome, Success):
        result.update({"ok": True, "status": outcome.status})
        _emit("ok", f"API reachable at {client.config.base_url} ({outcome.status}, {result['elapsed_ms']} ms).",
              json_mode=json_output)
    elif isinstance(outcome, ServerError):
        result.update({"status": outcome.status, "error": outcome.message})
        _emit("warn", f"API answered {outcome.status}: {outcome.message}", json_mode=json_output)
    elif isinstance(outcome, TransportError):
        result["error"] = outcome.message or "no response"
        _emit("err", f"API unreachable at {client.config.base_url}: {result['error']}", json_mode=json_output)
    else:
        result["error"] = outcome.message
        _emit("err", f"Health check could not be sent: {outcome.message}", json_mode=json_output)

    if json_output:
        print_json(result)
    if not result["ok"]:
        raise typer.Exit(code=1)
