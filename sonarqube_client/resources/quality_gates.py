"""Quality gates API (``/api/qualitygates``).

Usage:
    status = client.quality_gates.project_status(project_key="my-project")
    if status["projectStatus"]["status"] == "ERROR":
        ...
"""

from typing import TypedDict

from sonarqube_client.builders import PaginatedBuilder
from sonarqube_client.client import BaseClient
from sonarqube_client.errors import ValidationError


class Condition(TypedDict, total=False):
    id: str
    metric: str
    op: str
    error: str


class QualityGate(TypedDict, total=False):
    name: str
    isDefault: bool
    isBuiltIn: bool
    conditions: list[Condition]
    actions: dict
    caycStatus: str


class ListQualityGatesResponse(TypedDict, total=False):
    qualitygates: list[QualityGate]
    default: str
    actions: dict


class ConditionStatus(TypedDict, total=False):
    status: str
    metricKey: str
    comparator: str
    errorThreshold: str
    actualValue: str


class ProjectStatus(TypedDict, total=False):
    status: str
    ignoredConditions: bool
    caycStatus: str
    conditions: list[ConditionStatus]
    period: dict


class ProjectStatusResponse(TypedDict):
    projectStatus: ProjectStatus


class GateProject(TypedDict, total=False):
    key: str
    name: str
    selected: bool


class SearchGateProjectsResponse(TypedDict):
    results: list[GateProject]
    paging: dict


class SearchGateProjectsBuilder(PaginatedBuilder[SearchGateProjectsResponse, GateProject]):
    """Projects associated (or not) with one gate."""

    items_key = "results"

    def query(self, query: str) -> "SearchGateProjectsBuilder":
        return self._set("query", query)

    def selected(self, selected: str) -> "SearchGateProjectsBuilder":
        """``selected``, ``deselected`` or ``all``."""
        return self._set("selected", selected)


class QualityGatesClient(BaseClient):

    def list(self) -> ListQualityGatesResponse:
        return self._get("/api/qualitygates/list", self._with_organization({}))

    def show(self, name: str) -> QualityGate:
        return self._get("/api/qualitygates/show", self._with_organization({"name": name}))

    def create(self, name: str) -> QualityGate:
        return self._post("/api/qualitygates/create", self._with_organization({"name": name}))

    def rename(self, current_name: str, name: str) -> None:
        self._post("/api/qualitygates/rename", self._with_organization({"currentName": current_name, "name": name}))

    def copy(self, source_name: str, name: str) -> QualityGate:
        return self._post(
            "/api/qualitygates/copy", self._with_organization({"sourceName": source_name, "name": name})
        )

    def destroy(self, name: str) -> None:
        self._post("/api/qualitygates/destroy", self._with_organization({"name": name}))

    def set_as_default(self, name: str) -> None:
        self._post("/api/qualitygates/set_as_default", self._with_organization({"name": name}))

    # --- conditions ---

    def create_condition(self, gate_name: str, metric: str, error: str, op: str | None = None) -> Condition:
        """Add a condition failing the gate when *metric* crosses *error*.

        *op* is ``LT`` or ``GT``.
        """
        return self._post(
            "/api/qualitygates/create_condition",
            self._with_organization({"gateName": gate_name, "metric": metric, "error": error, "op": op}),
        )

    def update_condition(self, condition_id: str, metric: str, error: str, op: str | None = None) -> None:
        self._post(
            "/api/qualitygates/update_condition",
            self._with_organization({"id": condition_id, "metric": metric, "error": error, "op": op}),
        )

    def delete_condition(self, condition_id: str) -> None:
        self._post("/api/qualitygates/delete_condition", self._with_organization({"id": condition_id}))

    # --- projects ---

    def search(self, gate_name: str) -> SearchGateProjectsBuilder:
        builder = SearchGateProjectsBuilder(
            lambda params: self._get("/api/qualitygates/search", self._with_organization(params))
        )
        return builder._set("gateName", gate_name)

    def select(self, gate_name: str, project_key: str) -> None:
        self._post(
            "/api/qualitygates/select",
            self._with_organization({"gateName": gate_name, "projectKey": project_key}),
        )

    def deselect(self, project_key: str) -> None:
        """Return *project_key* to the default gate."""
        self._post("/api/qualitygates/deselect", self._with_organization({"projectKey": project_key}))

    def get_by_project(self, project: str) -> dict:
        return self._get("/api/qualitygates/get_by_project", self._with_organization({"project": project}))

    def project_status(
        self,
        *,
        project_key: str | None = None,
        project_id: str | None = None,
        analysis_id: str | None = None,
        branch: str | None = None,
        pull_request: str | None = None,
    ) -> ProjectStatusResponse:
        """Gate status of the last analysis of a project, or of one analysis.

        Raises:
            ValidationError: none of *project_key*, *project_id* or *analysis_id* given
        """
        if not (project_key or project_id or analysis_id):
            raise ValidationError("One of project_key, project_id or analysis_id is required", "projectKey")
        return self._get(
            "/api/qualitygates/project_status",
            {
                "projectKey": project_key,
                "projectId": project_id,
                "analysisId": analysis_id,
                "branch": branch,
                "pullRequest": pull_request,
            },
        )
