from __future__ import annotations

import functools

import httpx
import pytest

from servicehub_cli import config, http
from servicehub_client import factory


@pytest.fixture(autouse=True)
def config_home(tmp_path, monkeypatch):
    def _config_dir(_: str) -> str:
        return str(tmp_path)

    monkeypatch.setattr(config, "user_config_dir", _config_dir)
    monkeypatch.delenv(factory.ENV_BASE_URL, raising=False)
    monkeypatch.delenv(factory.ENV_MODE, raising=False)
    return tmp_path


@pytest.fixture
def fake_api(monkeypatch):
    """Route every client built by the CLI through the given handler."""

    def _install(handler):
        monkeypatch.setattr(
            http,
            "build_client",
            functools.partial(factory.build_client, transport=httpx.MockTransport(handler)),
        )

    return _install
