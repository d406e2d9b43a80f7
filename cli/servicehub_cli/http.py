from __future__ import annotations

from servicehub_client import ServiceHubClient, SessionStore, build_client

from . import console
from .config import AppConfig, normalize_base_url
from .logging_ import verbose_enabled
from .session_store import FileSessionStore


def _prompt_login() -> None:
    console.warn("Session expired. Run `servicehub auth login`.")


def make_client(
    cfg: AppConfig,
    *,
    base_url_override: str | None,
    session_policy: str | None = None,
    timeout_ms: int | None = None,
    verbose: bool | None = None,
    session_store: SessionStore | None = None,
) -> ServiceHubClient:
    base_url = normalize_base_url(base_url_override or cfg.base_url) or None
    if verbose is None:
        verbose = verbose_enabled()
    return build_client(
        base_url=base_url,
        timeout_ms=timeout_ms if timeout_ms is not None else cfg.timeout_ms,
        session_policy=session_policy or cfg.session_policy,
        verbose_logging=True if verbose else None,
        session_store=session_store if session_store is not None else FileSessionStore(),
        on_unauthenticated=_prompt_login,
    )
