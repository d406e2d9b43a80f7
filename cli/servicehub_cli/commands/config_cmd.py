from __future__ import annotations

import typer

from servicehub_client import ConfigurationError, SessionPolicy
from servicehub_client.factory import resolve_config

from .. import console
from ..config import load_config, normalize_base_url, save_config

app = typer.Typer(help="Show or change client settings.")


@app.command("show")
def show() -> None:
    cfg = load_config()
    try:
        effective = resolve_config(
            base_url=cfg.base_url or None,
            timeout_ms=cfg.timeout_ms,
            session_policy=cfg.session_policy,
        )
    except ConfigurationError as e:
        console.err(str(e))
        raise typer.Exit(code=2)
    console.print(
        f"base_url={effective.base_url} timeout_ms={effective.timeout_ms} "
        f"session_policy={effective.session_policy.value} verbose_logging={effective.verbose_logging}",
        markup=False,
    )


@app.command("set")
def set_values(
        base_url: str | None = typer.Option(None, "--base-url", help="API base URL."),
        timeout_ms: int | None = typer.Option(None, "--timeout-ms", help="Request timeout in milliseconds."),
        session_policy: str | None = typer.Option(None, "--session-policy", help="strict or advisory."),
) -> None:
    cfg = load_config()
    if base_url is not None:
        cfg.base_url = normalize_base_url(base_url)
    if timeout_ms is not None:
        cfg.timeout_ms = timeout_ms
    if session_policy is not None:
        cfg.session_policy = session_policy.strip().lower()

    try:
        resolve_config(
            base_url=cfg.base_url or None,
            timeout_ms=cfg.timeout_ms,
            session_policy=cfg.session_policy,
            environ={},
        )
    except ConfigurationError as e:
        console.err(str(e))
        raise typer.Exit(code=2)

    cfg.session_policy = SessionPolicy(cfg.session_policy).value
    save_config(cfg)
    console.ok("Config updated.")
