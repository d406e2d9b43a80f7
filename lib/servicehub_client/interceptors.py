"""Request preparation and response classification.

Neither interceptor keeps per-request state, so one instance of each serves any
number of in-flight requests.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

import httpx

from .config_types import ClientConfig, SessionPolicy
from .errors_utils import server_message
from .outcomes import Outcome, ServerError, SetupError, Success, TransportError
from .session import SessionStore, invalidate_session, read_token

log = logging.getLogger(__name__)

TOKEN_PREVIEW_CHARS = 10
TRUNCATION_MARKER = "..."


@dataclass
class OutgoingRequest:
    method: str
    url: str
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    body: Any = None

    def copy(self) -> "OutgoingRequest":
        return OutgoingRequest(
            method=self.method,
            url=self.url,
            headers=httpx.Headers(self.headers),
            body=self.body,
        )


def token_preview(token: str | None) -> str:
    if not token:
        return "none"
    keep = TOKEN_PREVIEW_CHARS if len(token) > TOKEN_PREVIEW_CHARS else len(token) // 2
    return f"{token[:keep]}{TRUNCATION_MARKER}"


def _response_body(r: httpx.Response) -> Any:
    try:
        return r.json()
    except ValueError:
        return r.text or None


class RequestInterceptor:
    def __init__(self, cfg: ClientConfig):
        self._cfg = cfg

    def prepare(self, req: OutgoingRequest, store: SessionStore | None) -> OutgoingRequest:
        """Attach the current bearer token, or strip Authorization when there is none.

        The token is read on every call so rotation between requests is seen.
        Never raises: an unreadable store means an unauthenticated request.
        """
        out = req.copy()
        token = read_token(store)
        if token:
            out.headers["Authorization"] = f"Bearer {token}"
        elif "authorization" in out.headers:
            del out.headers["authorization"]

        if self._cfg.verbose_logging:
            log.info(
                "request %s %s",
                out.method,
                out.url,
                extra={
                    "method": out.method,
                    "url": out.url,
                    "has_token": bool(token),
                    "token_preview": token_preview(token),
                },
            )
        return out


class ResponseInterceptor:
    def __init__(
            self,
            cfg: ClientConfig,
            store: SessionStore | None,
            *,
            on_unauthenticated: Callable[[], None] | None = None,
    ):
        self._cfg = cfg
        self._store = store
        self._on_unauthenticated = on_unauthenticated

    def classify(self, req: OutgoingRequest, attempt: httpx.Response | BaseException) -> Outcome:
        if isinstance(attempt, httpx.Response):
            return self._classify_response(req, attempt)
        if isinstance(attempt, (httpx.RequestError, TimeoutError)):
            return self._classify_transport_failure(req, attempt)
        return self._classify_setup_failure(req, attempt)

    def _classify_response(self, req: OutgoingRequest, r: httpx.Response) -> Outcome:
        body = _response_body(r)
        headers = dict(r.headers)
        if 200 <= r.status_code < 400:
            if self._cfg.verbose_logging:
                log.info(
                    "response %s %s -> %s",
                    req.method,
                    req.url,
                    r.status_code,
                    extra={"method": req.method, "url": req.url, "status": r.status_code},
                )
            return Success(status=r.status_code, headers=headers, body=body)

        message = server_message(body, r.status_code)
        outcome = ServerError(status=r.status_code, headers=headers, body=body, message=message)
        if self._cfg.verbose_logging:
            level = logging.WARNING if r.status_code == 401 else logging.ERROR
            log.log(
                level,
                "error response %s %s -> %s: %s",
                req.method,
                req.url,
                r.status_code,
                message,
                extra={"method": req.method, "url": req.url, "status": r.status_code, "error_message": message},
            )
        if r.status_code == 401 and self._cfg.session_policy is SessionPolicy.STRICT:
            self._handle_unauthenticated()
        return outcome

    def _handle_unauthenticated(self) -> None:
        invalidate_session(self._store)
        if self._on_unauthenticated is None:
            return
        try:
            self._on_unauthenticated()
        except Exception:
            log.exception("on_unauthenticated callback failed")

    def _classify_transport_failure(self, req: OutgoingRequest, exc: BaseException) -> Outcome:
        message = str(exc) or type(exc).__name__
        if self._cfg.verbose_logging:
            log.error(
                "no response received for %s %s: %s",
                req.method,
                req.url,
                message,
                extra={"method": req.method, "url": req.url, "error_message": message},
            )
        return TransportError(method=req.method, url=req.url, message=message)

    def _classify_setup_failure(self, req: OutgoingRequest, exc: BaseException) -> Outcome:
        message = str(exc) or type(exc).__name__
        if self._cfg.verbose_logging:
            log.error(
                "error setting up request %s %s: %s",
                req.method,
                req.url,
                message,
                extra={"method": req.method, "url": req.url, "error_message": message},
            )
        return SetupError(message=message, method=req.method, url=req.url)
