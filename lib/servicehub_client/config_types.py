from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SessionPolicy(str, Enum):
    """What a 401 does to the stored session."""

    STRICT = "strict"
    ADVISORY = "advisory"


@dataclass(frozen=True)
class ClientConfig:
    base_url: str
    timeout_ms: int = 10000
    session_policy: SessionPolicy = SessionPolicy.ADVISORY
    verbose_logging: bool = False

    @property
    def timeout_s(self) -> float:
        return self.timeout_ms / 1000.0
