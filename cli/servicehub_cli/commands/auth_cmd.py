from __future__ import annotations

import json

import typer

from servicehub_client import ApiError, NetworkError, RequestSetupError
from servicehub_client.session import TOKEN_KEY, USER_KEY

from .. import console
from ..config import load_config
from ..http import make_client
from ..session_store import FileSessionStore

app = typer.Typer(help="Auth commands.")


@app.command("login")
def login(
    email: str = typer.Option(..., "--email", prompt=True, help="Account email."),
    password: str = typer.Option(..., "--password", prompt=True, hide_input=True, help="Account password."),
    base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    cfg = load_config()
    store = FileSessionStore()
    client = make_client(cfg, base_url_override=base_url, session_store=store)
    try:
        data = client.request_json("POST", "/signin", json_body={"email": email, "password": password})
    except (ApiError, NetworkError, RequestSetupError) as e:
        console.err(f"Login failed: {e}")
        raise typer.Exit(code=2)
    finally:
        client.close()

    token = data.get("token") if isinstance(data, dict) else None
    if not isinstance(token, str) or not token:
        console.err("Login failed: server returned no token.")
        raise typer.Exit(code=2)

    store.set(TOKEN_KEY, token)
    user = data.get("user")
    if isinstance(user, dict):
        store.set(USER_KEY, json.dumps(user, ensure_ascii=False))
    else:
        store.remove(USER_KEY)
    console.ok(f"Login successful. Session saved to {store.path}.")


@app.command("logout", help="Clear the stored token and cached user.")
def logout():
    store = FileSessionStore()
    store.remove(TOKEN_KEY)
    store.remove(USER_KEY)
    console.ok("Session cleared.")


def whoami_impl():
    store = FileSessionStore()
    raw = store.get(USER_KEY)
    if not raw:
        console.err("Not logged in.")
        raise typer.Exit(code=1)
    try:
        user = json.loads(raw)
    except ValueError:
        console.err("Cached user record is unreadable; log in again.")
        raise typer.Exit(code=1)
    console.print_json(user)


app.command("whoami", help="Show the cached user record.")(whoami_impl)
