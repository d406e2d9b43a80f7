from __future__ import annotations

from typing import Any, Callable, Mapping

import httpx

from .config_types import ClientConfig
from .outcomes import Outcome, unwrap
from .session import MemorySessionStore, SessionStore
from .transport import AsyncTransport, Transport


class ServiceHubClient:
    def __init__(
            self,
            cfg: ClientConfig,
            *,
            session_store: SessionStore | None = None,
            on_unauthenticated: Callable[[], None] | None = None,
            transport: httpx.BaseTransport | None = None,
    ):
        self._cfg = cfg
        self._store = session_store if session_store is not None else MemorySessionStore()
        self._t = Transport(cfg, store=self._store, on_unauthenticated=on_unauthenticated, transport=transport)

    @property
    def config(self) -> ClientConfig:
        return self._cfg

    @property
    def session_store(self) -> SessionStore:
        return self._store

    def close(self) -> None:
        self._t.close()

    def __enter__(self) -> "ServiceHubClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def request(
            self,
            method: str,
            path: str,
            *,
            json_body: Any | None = None,
            headers: Mapping[str, str] | None = None,
    ) -> Outcome:
        return self._t.request(method, path, json_body=json_body, headers=headers)

    def request_json(
            self,
            method: str,
            path: str,
            *,
            json_body: Any | None = None,
            headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Like request(), but returns the body and raises ApiError/NetworkError on failure."""
        return unwrap(self.request(method, path, json_body=json_body, headers=headers))

    def get(self, path: str, *, headers: Mapping[str, str] | None = None) -> Outcome:
        return self.request("GET", path, headers=headers)

    def delete(self, path: str, *, headers: Mapping[str, str] | None = None) -> Outcome:
        return self.request("DELETE", path, headers=headers)

    def post(self, path: str, json_body: Any | None = None, *, headers: Mapping[str, str] | None = None) -> Outcome:
        return self.request("POST", path, json_body=json_body, headers=headers)

    def put(self, path: str, json_body: Any | None = None, *, headers: Mapping[str, str] | None = None) -> Outcome:
        return self.request("PUT", path, json_body=json_body, headers=headers)

    def patch(self, path: str, json_body: Any | None = None, *, headers: Mapping[str, str] | None = None) -> Outcome:
        return self.request("PATCH", path, json_body=json_body, headers=headers)


class AsyncServiceHubClient:
    def __init__(
            self,
            cfg: ClientConfig,
            *,
            session_store: SessionStore | None = None,
            on_unauthenticated: Callable[[], None] | None = None,
            transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._cfg = cfg
        self._store = session_store if session_store is not None else MemorySessionStore()
        self._t = AsyncTransport(cfg, store=self._store, on_unauthenticated=on_unauthenticated, transport=transport)

    @property
    def config(self) -> ClientConfig:
        return self._cfg

    @property
    def session_store(self) -> SessionStore:
        return self._store

    async def aclose(self) -> None:
        await self._t.aclose()

    async def __aenter__(self) -> "AsyncServiceHubClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def request(
            self,
            method: str,
            path: str,
            *,
            json_body: Any | None = None,
            headers: Mapping[str, str] | None = None,
    ) -> Outcome:
        return await self._t.request(method, path, json_body=json_body, headers=headers)

    async def request_json(
            self,
            method: str,
            path: str,
            *,
            json_body: Any | None = None,
            headers: Mapping[str, str] | None = None,
    ) -> Any:
        return unwrap(await self.request(method, path, json_body=json_body, headers=headers))

    async def get(self, path: str, *, headers: Mapping[str, str] | None = None) -> Outcome:
        return await self.request("GET", path, headers=headers)

    async def delete(self, path: str, *, headers: Mapping[str, str] | None = None) -> Outcome:
        return await self.request("DELETE", path, headers=headers)

    async def post(self, path: str, json_body: Any | None = None, *, headers: Mapping[str, str] | None = None) -> Outcome:
        return await self.request("POST", path, json_body=json_body, headers=headers)

    async def put(self, path: str, json_body: Any | None = None, *, headers: Mapping[str, str] | None = None) -> Outcome:
        return await self.request("PUT", path, json_body=json_body, headers=headers)

    async def patch(self, path: str, json_body: Any | None = None, *, headers: Mapping[str, str] | None = None) -> Outcome:
        return await self.request("PATCH", path, json_body=json_body, headers=headers)
