"""Applications API (``/api/applications``), Developer Edition and above."""

from typing import TypedDict

from sonarqube_client.client import BaseClient
from sonarqube_client.errors import ValidationError


class ApplicationProject(TypedDict, total=False):
    key: str
    name: str
    branch: str
    isMain: bool
    enabled: bool


class Application(TypedDict, total=False):
    key: str
    name: str
    description: str
    visibility: str
    branch: str
    isMain: bool
    projects: list[ApplicationProject]
    branches: list[dict]
    tags: list[str]


class ApplicationResponse(TypedDict):
    application: Application


class ApplicationsClient(BaseClient):
    """Create applications and manage the projects and branches they aggregate."""

    def create(
        self,
        name: str,
        key: str | None = None,
        description: str | None = None,
        visibility: str | None = None,
    ) -> ApplicationResponse:
        return self._post(
            "/api/applications/create",
            {"name": name, "key": key, "description": description, "visibility": visibility},
        )

    def delete(self, application: str) -> None:
        self._post("/api/applications/delete", {"application": application})

    def show(self, application: str, branch: str | None = None) -> ApplicationResponse:
        return self._get("/api/applications/show", {"application": application, "branch": branch})

    def update(self, application: str, name: str, description: str | None = None) -> None:
        self._post(
            "/api/applications/update",
            {"application": application, "name": name, "description": description},
        )

    def add_project(self, application: str, project: str) -> None:
        self._post("/api/applications/add_project", {"application": application, "project": project})

    def remove_project(self, application: str, project: str) -> None:
        self._post("/api/applications/remove_project", {"application": application, "project": project})

    def set_tags(self, application: str, tags: list[str]) -> None:
        """Replace the tags of *application*; an empty list clears them."""
        self._post("/api/applications/set_tags", {"application": application, "tags": ",".join(tags)})

    def create_branch(
        self,
        application: str,
        branch: str,
        projects: list[str],
        project_branches: list[str],
    ) -> None:
        """Create an application branch.

        *projects* and *project_branches* are parallel lists: each project is
        included through the branch at the same index (empty string for the
        main branch).
        """
        self._send_branch("/api/applications/create_branch", application, branch, projects, project_branches)

    def update_branch(
        self,
        application: str,
        branch: str,
        name: str,
        projects: list[str],
        project_branches: list[str],
    ) -> None:
        self._send_branch(
            "/api/applications/update_branch", application, branch, projects, project_branches, name=name
        )

    def delete_branch(self, application: str, branch: str) -> None:
        self._post("/api/applications/delete_branch", {"application": application, "branch": branch})

    def _send_branch(
        self,
        endpoint: str,
        application: str,
        branch: str,
        projects: list[str],
        project_branches: list[str],
        name: str | None = None,
    ) -> None:
        if len(projects) != len(project_branches):
            raise ValidationError("projects and project_branches must have the same length", "projectBranch")
        # the API expects repeated project/projectBranch fields
        data: list[tuple[str, str]] = [("application", application), ("branch", branch)]
        if name is not None:
            data.append(("name", name))
        for project, project_branch in zip(projects, project_branches):
            data.append(("project", project))
            data.append(("projectBranch", project_branch))
        self._post(endpoint, data)
