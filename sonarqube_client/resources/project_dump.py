"""Project export and import (``/api/project_dump``), Enterprise Edition."""

from typing import BinaryIO, TypedDict

from sonarqube_client.client import BaseClient


class ExportResponse(TypedDict, total=False):
    taskId: str
    projectId: str
    projectKey: str
    projectName: str


class DumpStatus(TypedDict, total=False):
    canBeExported: bool
    canBeImported: bool
    exportedDump: str
    dumpToImport: str


class ProjectDumpClient(BaseClient):

    def export(self, key: str) -> ExportResponse:
        """Queue an export task for project *key*."""
        return self._post("/api/project_dump/export", {"key": key})

    def import_dump(self, key: str, file: BinaryIO | bytes | None = None) -> dict | None:
        """Import a dump into the empty project *key*.

        When *file* is given it is uploaded as multipart data; otherwise the
        dump already present on the server is used.
        """
        files = {"file": (f"{key}.zip", file)} if file is not None else None
        return self._post("/api/project_dump/import", {"key": key}, files=files)

    def status(self, key: str | None = None, project_id: str | None = None) -> DumpStatus:
        return self._get("/api/project_dump/status", {"key": key, "id": project_id})
