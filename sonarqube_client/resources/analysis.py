"""Scanner bootstrap API (``/api/v2/analysis``), available since 10.3.

Scanners use these endpoints to fetch the analysis engine, a matching JRE
and the rules active on the analysed project.
"""

from typing import TypedDict

from sonarqube_client.client import BaseClient


class ActiveRule(TypedDict, total=False):
    ruleKey: dict
    name: str
    severity: str
    language: str
    templateRuleKey: str
    params: list[dict]
    impacts: list[dict]


class EngineMetadata(TypedDict):
    filename: str
    sha256: str
    downloadUrl: str


class JreMetadata(TypedDict, total=False):
    id: str
    filename: str
    sha256: str
    javaPath: str
    os: str
    arch: str
    downloadUrl: str


class AnalysisClient(BaseClient):

    def active_rules(self, project_key: str, branch: str | None = None) -> list[ActiveRule]:
        return self._get(
            "/api/v2/analysis/active_rules",
            {"projectKey": project_key, "branch": branch},
        )

    def engine_metadata(self) -> EngineMetadata:
        return self._get("/api/v2/analysis/engine")

    def download_engine(self) -> bytes:
        """Download the scanner engine jar."""
        return self._get_bytes("/api/v2/analysis/engine")

    def jres(self, os: str | None = None, arch: str | None = None) -> list[JreMetadata]:
        """List the JREs the server provides, optionally for one platform."""
        return self._get("/api/v2/analysis/jres", {"os": os, "arch": arch})

    def jre(self, jre_id: str) -> JreMetadata:
        return self._get(f"/api/v2/analysis/jres/{jre_id}")

    def download_jre(self, jre_id: str) -> bytes:
        return self._get_bytes(f"/api/v2/analysis/jres/{jre_id}")

    def version(self) -> str:
        """Server version as plain text."""
        return self._get_text("/api/v2/analysis/version")
