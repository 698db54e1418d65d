"""Project links API (``/api/project_links``)."""

from typing import TypedDict

from sonarqube_client.client import BaseClient
from sonarqube_client.errors import ValidationError


class ProjectLink(TypedDict, total=False):
    id: str
    name: str
    type: str
    url: str


class SearchLinksResponse(TypedDict):
    links: list[ProjectLink]


def _project_selector(project_id: str | None, project_key: str | None) -> dict:
    if bool(project_id) == bool(project_key):
        raise ValidationError("Exactly one of project_id or project_key must be provided", "projectKey")
    return {"projectId": project_id, "projectKey": project_key}


class ProjectLinksClient(BaseClient):

    def create(
        self,
        name: str,
        url: str,
        *,
        project_id: str | None = None,
        project_key: str | None = None,
    ) -> dict:
        return self._post(
            "/api/project_links/create",
            {"name": name, "url": url, **_project_selector(project_id, project_key)},
        )

    def delete(self, link_id: str) -> None:
        self._post("/api/project_links/delete", {"id": link_id})

    def search(self, *, project_id: str | None = None, project_key: str | None = None) -> SearchLinksResponse:
        return self._get("/api/project_links/search", _project_selector(project_id, project_key))
