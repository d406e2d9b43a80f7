from __future__ import annotations

import typer

from .commands import auth_cmd, config_cmd, health_cmd, request_cmd
from .logging_ import setup_logging


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="servicehub",
        help="servicehub API client",
        no_args_is_help=True,
    )

    app.add_typer(auth_cmd.app, name="auth")
    app.add_typer(config_cmd.app, name="config")
    app.command("whoami")(auth_cmd.whoami_impl)
    app.command("request")(request_cmd.request)
    app.command("health")(health_cmd.health)

    @app.callback()
    def _main(
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
    ):
        setup_logging(verbose)

    return app


app = _build_app()
