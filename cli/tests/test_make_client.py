from __future__ import annotations

import pytest

from servicehub_cli import config, http, logging_
from servicehub_cli.session_store import FileSessionStore
from servicehub_client import ConfigurationError, SessionPolicy


def test_make_client_uses_saved_config() -> None:
    cfg = config.AppConfig(base_url="http://api.test", timeout_ms=2500, session_policy="strict")
    client = http.make_client(cfg, base_url_override=None)
    try:
        assert client.config.base_url == "http://api.test"
        assert client.config.timeout_ms == 2500
        assert client.config.session_policy is SessionPolicy.STRICT
        assert isinstance(client.session_store, FileSessionStore)
    finally:
        client.close()


def test_make_client_normalizes_base_url_override() -> None:
    client = http.make_client(config.default_config(), base_url_override="example.com/")
    try:
        assert client.config.base_url == "https://example.com"
    finally:
        client.close()


def test_make_client_falls_back_to_environment(monkeypatch) -> None:
    monkeypatch.setenv("SERVICEHUB_API_BASE_URL", "http://env.test:5000")
    client = http.make_client(config.default_config(), base_url_override=None)
    try:
        assert client.config.base_url == "http://env.test:5000"
    finally:
        client.close()


def test_make_client_explicit_policy_overrides_config() -> None:
    cfg = config.AppConfig(session_policy="strict")
    client = http.make_client(cfg, base_url_override=None, session_policy="advisory")
    try:
        assert client.config.session_policy is SessionPolicy.ADVISORY
    finally:
        client.close()


def test_make_client_verbose_flag(monkeypatch) -> None:
    monkeypatch.setitem(logging_._STATE, "verbose", True)
    client = http.make_client(config.default_config(), base_url_override=None)
    try:
        assert client.config.verbose_logging is True
    finally:
        client.close()


def test_make_client_rejects_invalid_url() -> None:
    with pytest.raises(ConfigurationError):
        http.make_client(config.default_config(), base_url_override="http://bad host")


def test_make_client_explicit_verbose_overrides_flag() -> None:
    client = http.make_client(config.default_config(), base_url_override=None, verbose=True)
    try:
        assert client.config.verbose_logging is True
    finally:
        client.close()


def test_make_client_zero_timeout_is_not_replaced_by_config() -> None:
    cfg = config.AppConfig(timeout_ms=2500)
    with pytest.raises(ConfigurationError):
        http.make_client(cfg, base_url_override=None, timeout_ms=0)
