"""System API (``/api/system`` and ``/api/v2/system``).

The v1 ``health``, ``status`` and ``info`` endpoints still work but are
deprecated in favour of their v2 counterparts.
"""

from typing import TypedDict

from sonarqube_client.client import BaseClient
from sonarqube_client.deprecation import warn_deprecated


class HealthResponse(TypedDict, total=False):
    health: str
    causes: list[dict]
    nodes: list[dict]


class StatusResponse(TypedDict, total=False):
    id: str
    version: str
    status: str


class SystemClient(BaseClient):

    def ping(self) -> str:
        """Returns ``pong`` when the server is up."""
        return self._get_text("/api/system/ping")

    def health(self) -> HealthResponse:
        warn_deprecated(
            "system.health()",
            replacement="system.health_v2()",
            reason="The v1 endpoint is deprecated since 10.6",
        )
        return self._get("/api/system/health")

    def status(self) -> StatusResponse:
        warn_deprecated(
            "system.status()",
            replacement="system.health_v2()",
            reason="The v1 endpoint is deprecated since 10.6",
        )
        return self._get("/api/system/status")

    def info(self) -> dict:
        warn_deprecated("system.info()", reason="The v1 endpoint is deprecated since 10.6")
        return self._get("/api/system/info")

    def liveness(self) -> dict | None:
        return self._get("/api/v2/system/liveness")

    def health_v2(self) -> HealthResponse:
        return self._get("/api/v2/system/health")

    def migrations_status(self) -> dict:
        """Progress of database migrations after an upgrade."""
        return self._get("/api/v2/system/migrations-status")
