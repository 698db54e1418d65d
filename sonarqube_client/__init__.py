"""Typed client for the SonarQube and SonarCloud web API."""

__version__ = "0.1.0"

from sonarqube_client.auth import BasicAuth, BearerTokenAuth, NoAuth, PasscodeAuth
from sonarqube_client.errors import (
    ApiError,
    AuthenticationError,
    AuthorizationError,
    IndexingInProgressError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
    SonarQubeError,
    ValidationError,
)
from sonarqube_client.sonarqube import SonarQubeClient

__all__ = [
    "ApiError",
    "AuthenticationError",
    "AuthorizationError",
    "BasicAuth",
    "BearerTokenAuth",
    "IndexingInProgressError",
    "NetworkError",
    "NoAuth",
    "NotFoundError",
    "PasscodeAuth",
    "RateLimitError",
    "RequestTimeoutError",
    "ServerError",
    "SonarQubeClient",
    "SonarQubeError",
    "ValidationError",
]
