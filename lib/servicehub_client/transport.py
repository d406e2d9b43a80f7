from __future__ import annotations

import asyncio
import time
from typing import Any, Callable, Mapping

import httpx

from .config_types import ClientConfig
from .interceptors import OutgoingRequest, RequestInterceptor, ResponseInterceptor
from .outcomes import Outcome
from .session import SessionStore

USER_AGENT = "servicehub-client/0.1.0"

# Raised while assembling a request (headers, JSON body, URL), before anything is sent.
# UnicodeEncodeError from non-ASCII header values is a ValueError.
_SETUP_ERRORS = (TypeError, ValueError, httpx.InvalidURL)


def _outgoing(method: str, path: str, json_body: Any, headers: Mapping[str, str] | None) -> OutgoingRequest:
    return OutgoingRequest(method=method.upper(), url=path, headers=httpx.Headers(headers or {}), body=json_body)


def _build(client: httpx.Client | httpx.AsyncClient, req: OutgoingRequest) -> httpx.Request:
    if req.body is None:
        return client.build_request(req.method, req.url, headers=req.headers)
    return client.build_request(req.method, req.url, headers=req.headers, json=req.body)


class _Pipeline:
    def __init__(
            self,
            cfg: ClientConfig,
            store: SessionStore | None,
            on_unauthenticated: Callable[[], None] | None,
    ):
        self._cfg = cfg
        self._store = store
        self._prepare = RequestInterceptor(cfg)
        self._classify = ResponseInterceptor(cfg, store, on_unauthenticated=on_unauthenticated)

    def prepare(self, req: OutgoingRequest) -> OutgoingRequest:
        return self._prepare.prepare(req, self._store)

    def classify(self, req: OutgoingRequest, attempt: httpx.Response | BaseException) -> Outcome:
        return self._classify.classify(req, attempt)

    def _setup(
            self,
            client: httpx.Client | httpx.AsyncClient,
            method: str,
            path: str,
            json_body: Any,
            headers: Mapping[str, str] | None,
    ) -> tuple[OutgoingRequest, httpx.Request | BaseException]:
        req = OutgoingRequest(method=str(method).upper(), url=path)
        try:
            req = self.prepare(_outgoing(method, path, json_body, headers))
            return req, _build(client, req)
        except _SETUP_ERRORS as e:
            return req, e


class Transport(_Pipeline):
    def __init__(
            self,
            cfg: ClientConfig,
            *,
            store: SessionStore | None = None,
            on_unauthenticated: Callable[[], None] | None = None,
            transport: httpx.BaseTransport | None = None,
    ):
        super().__init__(cfg, store, on_unauthenticated)
        self._client = httpx.Client(
            base_url=cfg.base_url.rstrip("/"),
            timeout=cfg.timeout_s,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def request(
            self,
            method: str,
            path: str,
            *,
            json_body: Any | None = None,
            headers: Mapping[str, str] | None = None,
    ) -> Outcome:
        req, http_request = self._setup(self._client, method, path, json_body, headers)
        if isinstance(http_request, BaseException):
            return self.classify(req, http_request)
        try:
            r = self._send_within_deadline(http_request)
        except httpx.RequestError as e:
            return self.classify(req, e)
        return self.classify(req, r)

    def _send_within_deadline(self, http_request: httpx.Request) -> httpx.Response:
        """Send and buffer the body, giving up once timeout_s has elapsed overall.

        httpx timeouts apply per phase, so a slowly trickling body would
        otherwise never expire.
        """
        deadline = time.monotonic() + self._cfg.timeout_s
        r = self._client.send(http_request, stream=True)
        try:
            if r.is_stream_consumed:
                # body was buffered by the transport already
                r.read()
                return r
            chunks: list[bytes] = []
            for chunk in r.iter_raw():
                chunks.append(chunk)
                if time.monotonic() > deadline:
                    raise httpx.ReadTimeout(
                        f"response not complete within {self._cfg.timeout_ms} ms",
                        request=http_request,
                    )
            if time.monotonic() > deadline:
                raise httpx.ReadTimeout(
                    f"response not complete within {self._cfg.timeout_ms} ms",
                    request=http_request,
                )
        finally:
            r.close()
        buffered = httpx.Response(
            r.status_code,
            headers=r.headers,
            stream=httpx.ByteStream(b"".join(chunks)),
            request=r.request,
            extensions=r.extensions,
            history=r.history,
        )
        buffered.read()
        return buffered


class AsyncTransport(_Pipeline):
    def __init__(
            self,
            cfg: ClientConfig,
            *,
            store: SessionStore | None = None,
            on_unauthenticated: Callable[[], None] | None = None,
            transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(cfg, store, on_unauthenticated)
        self._client = httpx.AsyncClient(
            base_url=cfg.base_url.rstrip("/"),
            timeout=cfg.timeout_s,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
            self,
            method: str,
            path: str,
            *,
            json_body: Any | None = None,
            headers: Mapping[str, str] | None = None,
    ) -> Outcome:
        req, http_request = self._setup(self._client, method, path, json_body, headers)
        if isinstance(http_request, BaseException):
            return self.classify(req, http_request)
        try:
            # httpx timeouts are per phase; this bounds the whole exchange.
            r = await asyncio.wait_for(self._client.send(http_request), timeout=self._cfg.timeout_s)
        except (httpx.RequestError, TimeoutError) as e:
            return self.classify(req, e)
        return self.classify(req, r)
