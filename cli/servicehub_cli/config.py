from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from typing import Any

import tomli_w
from platformdirs import user_config_dir

from servicehub_client import SessionPolicy
from servicehub_client.factory import DEFAULT_TIMEOUT_MS

APP_NAME = "servicehub"
CONFIG_FILENAME = "config.toml"


@dataclass
class AppConfig:
    base_url: str = ""
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    session_policy: str = SessionPolicy.ADVISORY.value


def config_dir() -> str:
    return user_config_dir(APP_NAME)


def config_path() -> str:
    return f"{config_dir()}/{CONFIG_FILENAME}"


def default_config() -> AppConfig:
    return AppConfig()


def normalize_base_url(raw: str | None) -> str:
    value = (raw or "").strip()
    if not value:
        return ""
    value = value.rstrip("/")
    lowered = value.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return value

    host = value.split("/", 1)[0]
    host = host.split(":", 1)[0].lower()
    if host in {"localhost", "127.0.0.1", "0.0.0.0"}:
        scheme = "http://"
    else:
        scheme = "https://"
    return f"{scheme}{value}"


def normalize_session_policy(raw: str | None) -> str:
    value = (raw or "").strip().lower()
    try:
        return SessionPolicy(value).value
    except ValueError:
        return SessionPolicy.ADVISORY.value


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    data: dict[str, Any] = {
        "timeout_ms": cfg.timeout_ms,
        "session_policy": cfg.session_policy,
    }
    if cfg.base_url:
        data["base_url"] = cfg.base_url
    return data


def from_toml(data: dict[str, Any]) -> AppConfig:
    cfg = default_config()
    cfg.base_url = normalize_base_url(str(data.get("base_url") or ""))
    timeout_raw = data.get("timeout_ms")
    if isinstance(timeout_raw, int) and not isinstance(timeout_raw, bool) and timeout_raw > 0:
        cfg.timeout_ms = timeout_raw
    cfg.session_policy = normalize_session_policy(str(data.get("session_policy") or ""))
    return cfg


def load_config() -> AppConfig:
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return from_toml(data)
    except FileNotFoundError:
        return default_config()


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    ensure_parent_dir(path)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(to_toml(cfg)).encode("utf-8"))
    os.chmod(path, 0o600)
    return path
