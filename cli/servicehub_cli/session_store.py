from __future__ import annotations

import os
import tomllib
from pathlib import Path

import tomli_w

from .config import config_dir

SESSION_FILENAME = "session.toml"


def session_path() -> Path:
    return Path(config_dir()).expanduser() / SESSION_FILENAME


class FileSessionStore:
    """Session keys persisted in a 0600 TOML file next to config.toml."""

    def __init__(self, path: Path | None = None):
        self._path = path or session_path()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        with self._path.open("rb") as f:
            data = tomllib.load(f)
        session = data.get("session") if isinstance(data, dict) else None
        if not isinstance(session, dict):
            return {}
        return {str(k): v for k, v in session.items() if isinstance(v, str)}

    def _write(self, values: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_bytes(tomli_w.dumps({"session": values}).encode("utf-8"))
        os.chmod(self._path, 0o600)

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        values = self._load()
        values[key] = value
        self._write(values)

    def remove(self, key: str) -> None:
        values = self._load()
        if key not in values:
            return
        del values[key]
        self._write(values)
