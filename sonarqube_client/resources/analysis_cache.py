"""Analysis cache API (``/api/analysis_cache``)."""

from sonarqube_client.client import BaseClient


class AnalysisCacheClient(BaseClient):

    def get(self, project: str, branch: str | None = None) -> bytes:
        """Fetch the scanner cache of *project* (or one of its branches).

        The payload is returned as raw bytes; it is gzip data when the
        server chose to compress it.
        """
        return self._get_bytes("/api/analysis_cache/get", {"project": project, "branch": branch})
