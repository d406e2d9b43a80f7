from __future__ import annotations

import os
import stat

from servicehub_cli.session_store import FileSessionStore, session_path
from servicehub_client.session import TOKEN_KEY, USER_KEY


def test_missing_file_reads_as_empty() -> None:
    store = FileSessionStore()
    assert store.get(TOKEN_KEY) is None


def test_set_get_remove(config_home) -> None:
    store = FileSessionStore()
    store.set(TOKEN_KEY, "abc123xyz789")
    store.set(USER_KEY, '{"id": 3}')

    assert store.path == session_path()
    assert store.path.parent == config_home
    assert stat.S_IMODE(os.stat(store.path).st_mode) == 0o600
    assert FileSessionStore().get(TOKEN_KEY) == "abc123xyz789"

    store.remove(TOKEN_KEY)
    assert store.get(TOKEN_KEY) is None
    assert store.get(USER_KEY) == '{"id": 3}'


def test_remove_absent_key_is_noop(tmp_path) -> None:
    store = FileSessionStore(tmp_path / "nested" / "session.toml")
    store.remove(TOKEN_KEY)
    store.remove(TOKEN_KEY)
    assert not store.path.exists()
