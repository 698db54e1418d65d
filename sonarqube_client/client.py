"""Base HTTP client shared by every resource client.

Usage:
    class MetricsClient(BaseClient):
        def types(self) -> dict:
            return self._get("/api/metrics/types")

    metrics = MetricsClient("https://sonar.example.com", BearerTokenAuth("squ_xxx"))

Resource clients created through ``SonarQubeClient`` share one
``requests.Session``.
"""

import logging
from typing import Any, Mapping

import requests

from sonarqube_client.auth import NoAuth
from sonarqube_client.errors import error_from_response, network_error

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


# ---------------------------------------------------------------------------
# Parameter encoding
# ---------------------------------------------------------------------------

def encode_value(value: Any) -> str:
    """Render one parameter value the way the web API expects it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, set)):
        return ",".join(encode_value(v) for v in value)
    return str(value)


def encode_params(params: Mapping[str, Any] | None) -> dict[str, str]:
    """Drop unset values and flatten the rest to strings.

    ``None`` and empty lists are skipped, lists are comma-joined and booleans
    become ``true``/``false``.
    """
    encoded: dict[str, str] = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, (list, tuple, set)) and not value:
            continue
        encoded[key] = encode_value(value)
    return encoded


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class BaseClient:
    """Thin wrapper around the SonarQube web API."""

    def __init__(
        self,
        base_url: str,
        auth: requests.auth.AuthBase | None = None,
        *,
        organization: str | None = None,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.auth = auth or NoAuth()
        self.organization = organization
        self._timeout = timeout
        self._session = session or requests.Session()

    # ------------------------------------------------------------------
    # Helpers for subclasses
    # ------------------------------------------------------------------

    def _get(self, endpoint: str, params: Mapping[str, Any] | None = None) -> Any:
        return self._request("GET", endpoint, params=params)

    def _get_text(
        self,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
        accept: str | None = None,
    ) -> str:
        headers = {"Accept": accept} if accept else None
        return self._request("GET", endpoint, params=params, headers=headers, response_type="text")

    def _get_bytes(self, endpoint: str, params: Mapping[str, Any] | None = None) -> bytes:
        return self._request(
            "GET",
            endpoint,
            params=params,
            headers={"Accept": "application/octet-stream"},
            response_type="bytes",
        )

    def _post(
        self,
        endpoint: str,
        data: Mapping[str, Any] | list[tuple[str, str]] | None = None,
        files: Mapping[str, Any] | None = None,
    ) -> Any:
        """POST a form-encoded body (multipart when *files* is given).

        A list of pairs sends repeated fields as-is.
        """
        return self._request("POST", endpoint, data=data, files=files)

    def _post_json(self, endpoint: str, body: Any) -> Any:
        return self._request("POST", endpoint, json=body)

    def _patch_json(self, endpoint: str, body: Any) -> Any:
        return self._request(
            "PATCH", endpoint, json=body, headers={"Content-Type": "application/merge-patch+json"}
        )

    def _delete(self, endpoint: str, params: Mapping[str, Any] | None = None) -> Any:
        return self._request("DELETE", endpoint, params=params)

    def _with_organization(self, params: dict[str, Any]) -> dict[str, Any]:
        """Add the configured organization unless the caller set one."""
        if self.organization and not params.get("organization"):
            params["organization"] = self.organization
        return params

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Mapping[str, Any] | None = None,
        data: Mapping[str, Any] | list[tuple[str, str]] | None = None,
        json: Any = None,
        files: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        response_type: str = "json",
    ) -> Any:
        url = f"{self.base_url}{endpoint}"
        request_headers: dict[str, str] = {}
        if response_type == "json":
            request_headers["Accept"] = "application/json"
        if headers:
            request_headers.update(headers)

        logger.debug("%s %s", method, url)
        try:
            response = self._session.request(
                method,
                url,
                params=encode_params(params),
                data=encode_params(data) if isinstance(data, Mapping) else data,
                json=json,
                files=files,
                headers=request_headers,
                auth=self.auth,
                timeout=self._timeout,
            )
        except requests.exceptions.RequestException as exc:
            raise network_error(exc, self.base_url, self._timeout) from exc

        logger.debug("%s %s -> %d", method, url, response.status_code)
        if not response.ok:
            raise error_from_response(response)

        if response_type == "bytes":
            return response.content
        if response_type == "text":
            return response.text
        if response.status_code == 204 or not response.content:
            return None
        return response.json()
