"""Tagged results of a single request attempt.

Every attempt ends in exactly one of these. Server and transport failures are
returned, not raised; callers that prefer exceptions pass the outcome through
:func:`unwrap`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from .errors import ApiError, AuthError, NetworkError, RequestSetupError
from .errors_utils import error_details


@dataclass(frozen=True)
class Success:
    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class ServerError:
    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True)
class TransportError:
    method: str = ""
    url: str = ""
    message: str = ""

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True)
class SetupError:
    message: str
    method: str = ""
    url: str = ""

    @property
    def ok(self) -> bool:
        return False


Outcome = Union[Success, ServerError, TransportError, SetupError]


def unwrap(outcome: Outcome) -> Any:
    """Return the body of a Success or raise the matching client error."""
    if isinstance(outcome, Success):
        return outcome.body
    if isinstance(outcome, ServerError):
        msg = outcome.message or f"request failed with {outcome.status}"
        details = error_details(outcome.body)
        if outcome.status in (401, 403):
            raise AuthError(outcome.status, msg, details)
        raise ApiError(outcome.status, msg, details)
    if isinstance(outcome, TransportError):
        raise NetworkError(outcome.message or f"{outcome.method} {outcome.url}: no response received")
    if isinstance(outcome, SetupError):
        raise RequestSetupError(outcome.message)
    raise TypeError(f"not an outcome: {outcome!r}")
