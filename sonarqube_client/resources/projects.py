"""Projects API (``/api/projects``).

Usage:
    for project in client.projects.search().query("payments").all():
        print(project["key"], project.get("lastAnalysisDate"))

    client.projects.bulk_delete().analyzed_before("2023-01-01").execute()
"""

from typing import TypedDict

from sonarqube_client.builders import BaseBuilder, PaginatedBuilder
from sonarqube_client.client import BaseClient
from sonarqube_client.errors import ValidationError


class Project(TypedDict, total=False):
    key: str
    name: str
    qualifier: str
    visibility: str
    lastAnalysisDate: str
    revision: str
    managed: bool


class SearchProjectsResponse(TypedDict):
    components: list[Project]
    paging: dict


class CreateProjectResponse(TypedDict):
    project: Project


class Finding(TypedDict, total=False):
    key: str
    type: str
    ruleReference: str
    severity: str
    status: str
    path: str
    lineNumber: int
    message: str


class BulkDeleteProjectsBuilder(BaseBuilder[None]):
    """Deletes every project matching the filters; at least one filter is required."""

    def analyzed_before(self, date: str) -> "BulkDeleteProjectsBuilder":
        return self._set("analyzedBefore", date)

    def on_provisioned_only(self, provisioned_only: bool = True) -> "BulkDeleteProjectsBuilder":
        return self._set("onProvisionedOnly", provisioned_only)

    def projects(self, project_keys: list[str]) -> "BulkDeleteProjectsBuilder":
        return self._set("projects", project_keys)

    def query(self, query: str) -> "BulkDeleteProjectsBuilder":
        return self._set("q", query)

    def qualifiers(self, qualifiers: list[str]) -> "BulkDeleteProjectsBuilder":
        return self._set("qualifiers", qualifiers)

    def validate(self) -> None:
        if (
            self._params.get("analyzedBefore") is None
            and not self._params.get("projects")
            and self._params.get("q") is None
        ):
            raise ValidationError(
                "At least one parameter is required among analyzedBefore, projects and q", "projects"
            )


class SearchProjectsBuilder(PaginatedBuilder[SearchProjectsResponse, Project]):
    items_key = "components"

    def analyzed_before(self, date: str) -> "SearchProjectsBuilder":
        return self._set("analyzedBefore", date)

    def on_provisioned_only(self, provisioned_only: bool = True) -> "SearchProjectsBuilder":
        return self._set("onProvisionedOnly", provisioned_only)

    def projects(self, project_keys: list[str]) -> "SearchProjectsBuilder":
        return self._set("projects", project_keys)

    def query(self, query: str) -> "SearchProjectsBuilder":
        return self._set("q", query)

    def qualifiers(self, qualifiers: list[str]) -> "SearchProjectsBuilder":
        return self._set("qualifiers", qualifiers)


class ProjectsClient(BaseClient):
    """Provision, search and administer projects."""

    def search(self) -> SearchProjectsBuilder:
        return SearchProjectsBuilder(
            lambda params: self._get("/api/projects/search", self._with_organization(params))
        )

    def bulk_delete(self) -> BulkDeleteProjectsBuilder:
        return BulkDeleteProjectsBuilder(
            lambda params: self._post("/api/projects/bulk_delete", self._with_organization(params))
        )

    def create(
        self,
        name: str,
        project: str,
        *,
        main_branch: str | None = None,
        visibility: str | None = None,
        new_code_definition_type: str | None = None,
        new_code_definition_value: str | None = None,
        organization: str | None = None,
    ) -> CreateProjectResponse:
        return self._post(
            "/api/projects/create",
            self._with_organization(
                {
                    "name": name,
                    "project": project,
                    "mainBranch": main_branch,
                    "visibility": visibility,
                    "newCodeDefinitionType": new_code_definition_type,
                    "newCodeDefinitionValue": new_code_definition_value,
                    "organization": organization,
                }
            ),
        )

    def delete(self, project: str) -> None:
        self._post("/api/projects/delete", {"project": project})

    def update_key(self, from_key: str, to_key: str) -> None:
        self._post("/api/projects/update_key", {"from": from_key, "to": to_key})

    def bulk_update_key(self, project: str, from_: str, to: str, dry_run: bool = False) -> dict:
        """Replace *from_* with *to* in the key of *project* and its modules."""
        return self._post(
            "/api/projects/bulk_update_key",
            {"project": project, "from": from_, "to": to, "dryRun": dry_run},
        )

    def update_visibility(self, project: str, visibility: str) -> None:
        """*visibility* is ``public`` or ``private``."""
        self._post("/api/projects/update_visibility", {"project": project, "visibility": visibility})

    def export_findings(
        self,
        project: str,
        branch: str | None = None,
        pull_request: str | None = None,
    ) -> list[Finding]:
        if branch and pull_request:
            raise ValidationError("Cannot specify both branch and pullRequest", "branch")
        return self._get(
            "/api/projects/export_findings",
            {"project": project, "branch": branch, "pullRequest": pull_request},
        )

    def get_contains_ai_code(self, project: str) -> dict:
        return self._get("/api/projects/get_contains_ai_code", {"project": project})

    def set_contains_ai_code(self, project: str, contains_ai_code: bool) -> None:
        self._post(
            "/api/projects/set_contains_ai_code",
            {"project": project, "contains_ai_code": contains_ai_code},
        )

    def license_usage(self) -> dict:
        return self._get("/api/projects/license_usage")
