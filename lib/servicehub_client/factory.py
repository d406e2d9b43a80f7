from __future__ import annotations

import os
from typing import Any, Callable, Mapping
from urllib.parse import urlsplit

import httpx

from .client import AsyncServiceHubClient, ServiceHubClient
from .config_types import ClientConfig, SessionPolicy
from .errors import ConfigurationError
from .session import SessionStore

ENV_BASE_URL = "SERVICEHUB_API_BASE_URL"
ENV_MODE = "SERVICEHUB_ENV"
DEVELOPMENT_MODE = "development"

DEFAULT_BASE_URL = "http://localhost:5000"
DEFAULT_TIMEOUT_MS = 10000
EXTENDED_TIMEOUT_MS = 30000

_DEFAULT_CLIENT: ServiceHubClient | None = None


def _validate_base_url(value: str) -> str:
    if any(ch.isspace() for ch in value):
        raise ConfigurationError(f"base_url is not a valid absolute URL: {value!r}")
    try:
        parts = urlsplit(value)
        parts.port  # non-numeric or out-of-range ports raise ValueError here
    except ValueError as e:
        raise ConfigurationError(f"base_url is not a valid absolute URL: {value!r}") from e
    if parts.scheme.lower() not in {"http", "https"} or not parts.hostname:
        raise ConfigurationError(f"base_url is not a valid absolute URL: {value!r}")
    return value.rstrip("/")


def _validate_timeout(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"timeout_ms must be a positive integer, got {value!r}")
    if value <= 0:
        raise ConfigurationError(f"timeout_ms must be a positive integer, got {value!r}")
    return value


def _parse_policy(value: SessionPolicy | str) -> SessionPolicy:
    if isinstance(value, SessionPolicy):
        return value
    try:
        return SessionPolicy(str(value).strip().lower())
    except ValueError as e:
        raise ConfigurationError(f"unknown session policy: {value!r}") from e


def resolve_config(
        *,
        base_url: str | None = None,
        timeout_ms: int | None = None,
        session_policy: SessionPolicy | str | None = None,
        verbose_logging: bool | None = None,
        environ: Mapping[str, str] | None = None,
) -> ClientConfig:
    """Fill in whatever the caller left out from the environment and defaults.

    base_url: explicit -> $SERVICEHUB_API_BASE_URL -> http://localhost:5000
    verbose_logging: explicit -> $SERVICEHUB_ENV == "development"
    """
    env = os.environ if environ is None else environ

    raw_url = (base_url or "").strip() or (env.get(ENV_BASE_URL) or "").strip() or DEFAULT_BASE_URL
    if verbose_logging is None:
        verbose_logging = (env.get(ENV_MODE) or "").strip().lower() == DEVELOPMENT_MODE

    return ClientConfig(
        base_url=_validate_base_url(raw_url),
        timeout_ms=_validate_timeout(DEFAULT_TIMEOUT_MS if timeout_ms is None else timeout_ms),
        session_policy=_parse_policy(SessionPolicy.ADVISORY if session_policy is None else session_policy),
        verbose_logging=bool(verbose_logging),
    )


def build_client(
        *,
        base_url: str | None = None,
        timeout_ms: int | None = None,
        session_policy: SessionPolicy | str | None = None,
        verbose_logging: bool | None = None,
        session_store: SessionStore | None = None,
        on_unauthenticated: Callable[[], None] | None = None,
        transport: httpx.BaseTransport | None = None,
        environ: Mapping[str, str] | None = None,
) -> ServiceHubClient:
    cfg = resolve_config(
        base_url=base_url,
        timeout_ms=timeout_ms,
        session_policy=session_policy,
        verbose_logging=verbose_logging,
        environ=environ,
    )
    return ServiceHubClient(
        cfg,
        session_store=session_store,
        on_unauthenticated=on_unauthenticated,
        transport=transport,
    )


def build_async_client(
        *,
        base_url: str | None = None,
        timeout_ms: int | None = None,
        session_policy: SessionPolicy | str | None = None,
        verbose_logging: bool | None = None,
        session_store: SessionStore | None = None,
        on_unauthenticated: Callable[[], None] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        environ: Mapping[str, str] | None = None,
) -> AsyncServiceHubClient:
    cfg = resolve_config(
        base_url=base_url,
        timeout_ms=timeout_ms,
        session_policy=session_policy,
        verbose_logging=verbose_logging,
        environ=environ,
    )
    return AsyncServiceHubClient(
        cfg,
        session_store=session_store,
        on_unauthenticated=on_unauthenticated,
        transport=transport,
    )


def default_client(**overrides: Any) -> ServiceHubClient:
    """Process-wide client, built on first use. Later overrides are ignored."""
    global _DEFAULT_CLIENT
    if _DEFAULT_CLIENT is None:
        _DEFAULT_CLIENT = build_client(**overrides)
    return _DEFAULT_CLIENT


def reset_default_client() -> None:
    global _DEFAULT_CLIENT
    if _DEFAULT_CLIENT is not None:
        _DEFAULT_CLIENT.close()
    _DEFAULT_CLIENT = None
