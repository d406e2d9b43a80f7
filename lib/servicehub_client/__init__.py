from .client import AsyncServiceHubClient, ServiceHubClient
from .config_types import ClientConfig, SessionPolicy
from .errors import ApiError, AuthError, ConfigurationError, NetworkError, RequestSetupError, ServiceHubClientError
from .factory import build_async_client, build_client, default_client, reset_default_client, resolve_config
from .outcomes import Outcome, ServerError, SetupError, Success, TransportError, unwrap
from .session import MemorySessionStore, SessionStore

__all__ = [
    "ServiceHubClient",
    "AsyncServiceHubClient",
    "ClientConfig",
    "SessionPolicy",
    "ServiceHubClientError",
    "ConfigurationError",
    "ApiError",
    "AuthError",
    "NetworkError",
    "RequestSetupError",
    "build_client",
    "build_async_client",
    "default_client",
    "reset_default_client",
    "resolve_config",
    "Outcome",
    "Success",
    "ServerError",
    "TransportError",
    "SetupError",
    "unwrap",
    "SessionStore",
    "MemorySessionStore",
]
