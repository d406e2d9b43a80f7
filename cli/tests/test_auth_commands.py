from __future__ import annotations

import json

import httpx
from typer.testing import CliRunner

from servicehub_cli import main
from servicehub_cli.session_store import FileSessionStore
from servicehub_client.session import TOKEN_KEY, USER_KEY

runner = CliRunner()


def test_login_stores_token_and_user(fake_api) -> None:
    seen: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(
            200,
            json={
                "message": "Sign-in successful",
                "token": "jwt-token-value",
                "user": {"id": 5, "email": "ana@example.test", "role": "vendor"},
            },
        )

    fake_api(handler)
    result = runner.invoke(
        main.app,
        ["auth", "login", "--email", "ana@example.test", "--password", "pw", "--base-url", "http://api.test"],
    )

    assert result.exit_code == 0, result.output
    assert seen == [{"email": "ana@example.test", "password": "pw"}]
    store = FileSessionStore()
    assert store.get(TOKEN_KEY) == "jwt-token-value"
    assert json.loads(store.get(USER_KEY))["role"] == "vendor"


def test_login_failure_exit_code(fake_api) -> None:
    fake_api(lambda request: httpx.Response(400, json={"message": "Invalid credentials"}))
    result = runner.invoke(
        main.app,
        ["auth", "login", "--email", "a@b.test", "--password", "bad", "--base-url", "http://api.test"],
    )
    assert result.exit_code == 2
    assert "Invalid credentials" in result.output
    assert FileSessionStore().get(TOKEN_KEY) is None


def test_logout_clears_session() -> None:
    store = FileSessionStore()
    store.set(TOKEN_KEY, "t")
    store.set(USER_KEY, "{}")
    result = runner.invoke(main.app, ["auth", "logout"])
    assert result.exit_code == 0
    assert store.get(TOKEN_KEY) is None
    assert store.get(USER_KEY) is None


def test_whoami_prints_cached_user() -> None:
    FileSessionStore().set(USER_KEY, json.dumps({"id": 5, "fullName": "Ana"}))
    result = runner.invoke(main.app, ["whoami"])
    assert result.exit_code == 0
    assert '"fullName": "Ana"' in result.output


def test_whoami_without_session() -> None:
    result = runner.invoke(main.app, ["auth", "whoami"])
    assert result.exit_code == 1
    assert "Not logged in" in result.output
