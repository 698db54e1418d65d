"""Security hotspots API (``/api/hotspots``).

Usage:
    to_review = client.hotspots.search().for_project("my-project").with_status("TO_REVIEW").all()
    client.hotspots.change_status("AX2", "REVIEWED", resolution="SAFE", comment="Input is sanitized")
"""

from typing import TypedDict

from sonarqube_client.builders import PaginatedBuilder
from sonarqube_client.client import BaseClient


class Hotspot(TypedDict, total=False):
    key: str
    component: str
    project: str
    securityCategory: str
    vulnerabilityProbability: str
    status: str
    resolution: str
    line: int
    message: str
    assignee: str
    author: str
    creationDate: str
    updateDate: str
    ruleKey: str


class SearchHotspotsResponse(TypedDict, total=False):
    hotspots: list[Hotspot]
    components: list[dict]
    paging: dict


class SearchHotspotsBuilder(PaginatedBuilder[SearchHotspotsResponse, Hotspot]):
    items_key = "hotspots"

    def for_project(self, project_key: str) -> "SearchHotspotsBuilder":
        return self._set("projectKey", project_key)

    def with_hotspots(self, hotspot_keys: list[str]) -> "SearchHotspotsBuilder":
        return self._set("hotspots", hotspot_keys)

    def with_status(self, status: str) -> "SearchHotspotsBuilder":
        """``TO_REVIEW`` or ``REVIEWED``."""
        return self._set("status", status)

    def with_resolution(self, resolution: str) -> "SearchHotspotsBuilder":
        return self._set("resolution", resolution)

    def only_mine(self, only_mine: bool = True) -> "SearchHotspotsBuilder":
        return self._set("onlyMine", only_mine)

    def since_leak_period(self, since: bool = True) -> "SearchHotspotsBuilder":
        return self._set("sinceLeakPeriod", since)

    def in_files(self, paths: list[str]) -> "SearchHotspotsBuilder":
        return self._set("files", paths)

    def in_file_uuids(self, uuids: list[str]) -> "SearchHotspotsBuilder":
        return self._set("fileUuids", uuids)

    def on_branch(self, branch: str) -> "SearchHotspotsBuilder":
        return self._set("branch", branch)

    def on_pull_request(self, pull_request: str) -> "SearchHotspotsBuilder":
        return self._set("pullRequest", pull_request)


class HotspotsClient(BaseClient):

    def search(self) -> SearchHotspotsBuilder:
        return SearchHotspotsBuilder(lambda params: self._get("/api/hotspots/search", params))

    def show(self, hotspot: str) -> dict:
        """Full details of one hotspot, including rule and changelog."""
        return self._get("/api/hotspots/show", {"hotspot": hotspot})

    def change_status(
        self,
        hotspot: str,
        status: str,
        resolution: str | None = None,
        comment: str | None = None,
    ) -> None:
        """Review a hotspot; *resolution* is required when *status* is ``REVIEWED``."""
        self._post(
            "/api/hotspots/change_status",
            {"hotspot": hotspot, "status": status, "resolution": resolution, "comment": comment},
        )
