from __future__ import annotations


class ServiceHubClientError(Exception):
    """Base client error."""


class ConfigurationError(ServiceHubClientError):
    """Client could not be built from the given configuration."""


class NetworkError(ServiceHubClientError):
    """Transport/network layer error."""


class RequestSetupError(ServiceHubClientError):
    """Request could not be prepared for dispatch."""


class ApiError(ServiceHubClientError):
    def __init__(self, status_code: int, message: str, details: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class AuthError(ApiError):
    """Auth-related API error."""
