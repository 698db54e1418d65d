"""Exception taxonomy for SonarQube API calls.

Usage:
    try:
        client.metrics.search()
    except NotFoundError:
        ...
    except SonarQubeError as exc:
        print(exc.code, exc.status_code)

``error_from_response`` and ``network_error`` are used by the base client to
turn a failed HTTP exchange into one of the classes below.
"""

from typing import Any

import requests


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class SonarQubeError(Exception):
    """Base exception for all client errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        status_code: int | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details


class ApiError(SonarQubeError):
    """Raised on a 4xx response with no more specific class."""

    def __init__(self, message: str, status_code: int, details: Any = None) -> None:
        super().__init__(message, "API_ERROR", status_code, details)


class ValidationError(SonarQubeError):
    """Raised before sending a request whose parameters are invalid."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, "VALIDATION_ERROR", None, {"field": field} if field else None)
        self.field = field


class RateLimitError(SonarQubeError):
    """Raised on HTTP 429."""

    def __init__(self, message: str, retry_after: int | None = None) -> None:
        super().__init__(message, "RATE_LIMIT_ERROR", 429, {"retry_after": retry_after})
        self.retry_after = retry_after


class AuthenticationError(SonarQubeError):
    """Raised on HTTP 401: invalid or expired credentials."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR", 401)


class AuthorizationError(SonarQubeError):
    """Raised on HTTP 403."""

    def __init__(self, message: str = "Insufficient permissions") -> None:
        super().__init__(message, "AUTHORIZATION_ERROR", 403)


class NotFoundError(SonarQubeError):
    """Raised on HTTP 404: project, component or resource not found."""

    def __init__(self, message: str = "Resource not found", resource: str | None = None) -> None:
        super().__init__(message, "NOT_FOUND_ERROR", 404, {"resource": resource})


class NetworkError(SonarQubeError):
    """Raised when the server cannot be reached."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message, "NETWORK_ERROR", None, {"cause": cause})
        self.cause = cause


class RequestTimeoutError(SonarQubeError):
    """Raised when a request exceeds the configured timeout."""

    def __init__(self, message: str = "Request timed out", timeout: float | None = None) -> None:
        super().__init__(message, "TIMEOUT_ERROR", None, {"timeout": timeout})
        self.timeout = timeout


class ServerError(SonarQubeError):
    """Raised on a 5xx response."""

    def __init__(self, message: str, status_code: int, details: Any = None) -> None:
        super().__init__(message, "SERVER_ERROR", status_code, details)


class IndexingInProgressError(ServerError):
    """Raised on HTTP 503 while SonarQube is (re)building its issue index."""

    def __init__(self, message: str = "Issue indexing in progress, please try again later") -> None:
        super().__init__(message, 503)
        self.code = "INDEXING_IN_PROGRESS"


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

_INDEXING_MARKERS = ("indexing in progress", "issues index", "index is not ready")


def error_from_response(response: requests.Response) -> SonarQubeError:
    """Map a non-2xx response to the matching exception instance."""
    message = _parse_error_message(response)
    status = response.status_code

    if status == 401:
        return AuthenticationError(message)
    if status == 403:
        return AuthorizationError(message)
    if status == 404:
        return NotFoundError(message, resource=response.url)
    if status == 429:
        return RateLimitError(message, _parse_retry_after(response.headers.get("Retry-After")))
    if status == 503 and _is_indexing_error(message):
        return IndexingInProgressError(message)

    details = {"headers": dict(response.headers)}
    if 500 <= status < 600:
        return ServerError(message, status, details)
    if 400 <= status < 500:
        return ApiError(message, status, details)
    return SonarQubeError(message, "UNKNOWN_ERROR", status, details)


def network_error(exc: requests.exceptions.RequestException, url: str, timeout: float | None = None) -> SonarQubeError:
    """Wrap a transport-level ``requests`` exception."""
    if isinstance(exc, requests.exceptions.Timeout):
        return RequestTimeoutError(
            f"Request timed out after {timeout}s while contacting '{url}'", timeout
        )
    if isinstance(exc, requests.exceptions.ConnectionError):
        return NetworkError(f"Unable to reach SonarQube server at '{url}'", exc)
    return NetworkError(str(exc) or "An unknown network error occurred", exc)


def _parse_error_message(response: requests.Response) -> str:
    content_type = response.headers.get("Content-Type", "")
    if "application/json" in content_type and response.content:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            errors = body.get("errors")
            if isinstance(errors, list):
                messages = [str(e["msg"]) for e in errors if isinstance(e, dict) and e.get("msg")]
                if messages:
                    return ", ".join(messages)
            # v2 endpoints wrap a single error object
            error = body.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
    return response.reason or f"HTTP {response.status_code}"


def _parse_retry_after(value: str | None) -> int | None:
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _is_indexing_error(message: str) -> bool:
    lowered = message.lower()
    if any(marker in lowered for marker in _INDEXING_MARKERS):
        return True
    return "index" in lowered and "progress" in lowered
