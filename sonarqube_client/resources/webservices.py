"""Web service introspection (``/api/webservices``)."""

from sonarqube_client.client import BaseClient


class WebservicesClient(BaseClient):

    def list(self, include_internals: bool | None = None) -> dict:
        """Every web service and action the server exposes."""
        return self._get("/api/webservices/list", {"include_internals": include_internals})

    def response_example(self, controller: str, action: str) -> dict:
        return self._get("/api/webservices/response_example", {"controller": controller, "action": action})
