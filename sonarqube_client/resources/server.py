"""Server API (``/api/server``)."""

from sonarqube_client.client import BaseClient


class ServerClient(BaseClient):

    def version(self) -> str:
        """Server version as plain text, e.g. ``10.8.0.100206``."""
        return self._get_text("/api/server/version")
