"""Source code API (``/api/sources``)."""

from typing import TypedDict

from sonarqube_client.client import BaseClient


class SourceLine(TypedDict, total=False):
    line: int
    code: str
    scmRevision: str
    scmAuthor: str
    scmDate: str
    duplicated: bool
    isNew: bool
    lineHits: int
    conditions: int
    coveredConditions: int


class SourcesClient(BaseClient):

    def raw(self, key: str, branch: str | None = None, pull_request: str | None = None) -> str:
        """Plain source of the file *key*."""
        return self._get_text(
            "/api/sources/raw",
            {"key": key, "branch": branch, "pullRequest": pull_request},
            accept="text/plain",
        )

    def lines(
        self,
        key: str,
        *,
        from_: int | None = None,
        to: int | None = None,
        branch: str | None = None,
        pull_request: str | None = None,
    ) -> dict:
        """Source lines with SCM, coverage and duplication information."""
        return self._get(
            "/api/sources/lines",
            {"key": key, "from": from_, "to": to, "branch": branch, "pullRequest": pull_request},
        )

    def scm(
        self,
        key: str,
        *,
        commits_by_line: bool | None = None,
        from_: int | None = None,
        to: int | None = None,
    ) -> dict:
        """SCM blame; with *commits_by_line* consecutive lines of one commit are not merged."""
        return self._get(
            "/api/sources/scm",
            {"key": key, "commits_by_line": commits_by_line, "from": from_, "to": to},
        )

    def show(self, key: str, from_: int | None = None, to: int | None = None) -> dict:
        return self._get("/api/sources/show", {"key": key, "from": from_, "to": to})
