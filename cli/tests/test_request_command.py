from __future__ import annotations

import json

import httpx
from typer.testing import CliRunner

from servicehub_cli import main
from servicehub_cli.session_store import FileSessionStore
from servicehub_client.session import TOKEN_KEY, USER_KEY

runner = CliRunner()


def test_request_success_prints_body(fake_api) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"message": "ok"})

    fake_api(handler)
    FileSessionStore().set(TOKEN_KEY, "abc123xyz789")

    result = runner.invoke(main.app, ["request", "GET", "/api/test", "--base-url", "http://api.test"])

    assert result.exit_code == 0, result.output
    assert '"message": "ok"' in result.output
    assert seen[0].headers["Authorization"] == "Bearer abc123xyz789"
    assert seen[0].url == httpx.URL("http://api.test/api/test")


def test_request_sends_json_body_and_headers(fake_api) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"id": 12})

    fake_api(handler)
    result = runner.invoke(
        main.app,
        ["request", "post", "/reviews", "-d", '{"rating": 4}', "-H", "X-Trace: t-1", "--base-url", "http://api.test"],
    )

    assert result.exit_code == 0, result.output
    assert seen[0].method == "POST"
    assert json.loads(seen[0].content) == {"rating": 4}
    assert seen[0].headers["x-trace"] == "t-1"
    assert "authorization" not in seen[0].headers


def test_request_server_error_exit_code(fake_api) -> None:
    fake_api(lambda request: httpx.Response(404, json={"message": "Service not found"}))
    result = runner.invoke(main.app, ["request", "GET", "/services/9", "--base-url", "http://api.test"])
    assert result.exit_code == 2
    assert "Service not found" in result.output


def test_request_strict_401_clears_session(fake_api) -> None:
    store = FileSessionStore()
    store.set(TOKEN_KEY, "expired")
    store.set(USER_KEY, '{"id": 1}')
    fake_api(lambda request: httpx.Response(401, json={"message": "Token expired"}))

    result = runner.invoke(main.app, ["request", "GET", "/api/bookings", "--strict", "--base-url", "http://api.test"])

    assert result.exit_code == 2
    assert "auth login" in result.output
    assert store.get(TOKEN_KEY) is None
    assert store.get(USER_KEY) is None


def test_request_advisory_401_keeps_session(fake_api) -> None:
    store = FileSessionStore()
    store.set(TOKEN_KEY, "expired")
    fake_api(lambda request: httpx.Response(401))

    result = runner.invoke(main.app, ["request", "GET", "/api/bookings", "--advisory", "--base-url", "http://api.test"])

    assert result.exit_code == 2
    assert store.get(TOKEN_KEY) == "expired"


def test_request_transport_error_exit_code(fake_api) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    fake_api(handler)
    result = runner.invoke(main.app, ["request", "GET", "/x", "--base-url", "http://api.test"])
    assert result.exit_code == 3
    assert "No response received" in result.output


def test_request_rejects_bad_json(fake_api) -> None:
    fake_api(lambda request: httpx.Response(200))
    result = runner.invoke(main.app, ["request", "POST", "/x", "-d", "{not json", "--base-url", "http://api.test"])
    assert result.exit_code == 4


def test_request_rejects_invalid_base_url() -> None:
    result = runner.invoke(main.app, ["request", "GET", "/x", "--base-url", "http://bad host"])
    assert result.exit_code == 4


def test_request_rejects_zero_timeout(fake_api) -> None:
    seen: list[httpx.Request] = []
    fake_api(lambda request: seen.append(request) or httpx.Response(200))
    result = runner.invoke(main.app, ["request", "GET", "/x", "--timeout-ms", "0", "--base-url", "http://api.test"])
    assert result.exit_code == 4
    assert seen == []
