"""Project tags API (``/api/project_tags``)."""

from typing import TypedDict

from sonarqube_client.builders import BaseBuilder
from sonarqube_client.client import BaseClient


class SearchTagsResponse(TypedDict):
    tags: list[str]


class SearchTagsBuilder(BaseBuilder[SearchTagsResponse]):

    def query(self, query: str) -> "SearchTagsBuilder":
        return self._set("q", query)

    def page_size(self, size: int) -> "SearchTagsBuilder":
        return self._set("ps", size)

    def for_project(self, project: str) -> "SearchTagsBuilder":
        """Only tags of *project* (SonarQube 2025.1+)."""
        return self._set("project", project)


class ProjectTagsClient(BaseClient):

    def search(self) -> SearchTagsBuilder:
        return SearchTagsBuilder(lambda params: self._get("/api/project_tags/search", params))

    def set(self, project: str, tags: list[str]) -> None:
        """Replace the tags of *project*; an empty list clears them."""
        self._post("/api/project_tags/set", {"project": project, "tags": ",".join(tags)})
