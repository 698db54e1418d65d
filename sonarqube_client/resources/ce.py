"""Compute Engine API (``/api/ce``): background tasks such as analysis reports.

Usage:
    failed = client.ce.search_activity().with_component("my-project").with_statuses(["FAILED"]).execute()
    task = client.ce.task("AU-Tpxb--iU5OvuD2FLy")["task"]
"""

from typing import TypedDict

from sonarqube_client.builders import PaginatedBuilder
from sonarqube_client.client import BaseClient
from sonarqube_client.errors import ValidationError


class Task(TypedDict, total=False):
    id: str
    type: str
    componentId: str
    componentKey: str
    componentName: str
    analysisId: str
    status: str
    submittedAt: str
    submitterLogin: str
    startedAt: str
    executedAt: str
    executionTimeMs: int
    errorMessage: str
    hasScannerContext: bool
    warningCount: int
    warnings: list[str]


class ActivityResponse(TypedDict, total=False):
    tasks: list[Task]
    paging: dict


class ActivityStatusResponse(TypedDict):
    pending: int
    inProgress: int
    failing: int
    pendingTime: int


class ComponentTasksResponse(TypedDict, total=False):
    queue: list[Task]
    current: Task


class TaskResponse(TypedDict):
    task: Task


class ActivityBuilder(PaginatedBuilder[ActivityResponse, Task]):
    items_key = "tasks"

    def with_component(self, component: str) -> "ActivityBuilder":
        return self._set("component", component)

    def with_component_id(self, component_id: str) -> "ActivityBuilder":
        if "q" in self._params:
            raise ValidationError("componentId and q are mutually exclusive", "componentId")
        return self._set("componentId", component_id)

    def with_query(self, query: str) -> "ActivityBuilder":
        """Filter on task id or component name/key."""
        if "componentId" in self._params:
            raise ValidationError("q and componentId are mutually exclusive", "q")
        return self._set("q", query)

    def with_statuses(self, statuses: list[str]) -> "ActivityBuilder":
        return self._set("status", statuses)

    def with_type(self, task_type: str) -> "ActivityBuilder":
        return self._set("type", task_type)

    def submitted_after(self, date: str) -> "ActivityBuilder":
        return self._set("minSubmittedAt", date)

    def executed_before(self, date: str) -> "ActivityBuilder":
        return self._set("maxExecutedAt", date)

    def only_currents(self) -> "ActivityBuilder":
        """Keep only the most recent task of each component."""
        return self._set("onlyCurrents", True)

    def validate(self) -> None:
        if self._params.get("component") and self._params.get("componentId"):
            raise ValidationError("component and componentId cannot both be set", "component")


class CEClient(BaseClient):
    """Inspect the Compute Engine queue and task history."""

    def activity(
        self,
        *,
        component: str | None = None,
        component_id: str | None = None,
        q: str | None = None,
        status: list[str] | None = None,
        type_: str | None = None,
        only_currents: bool | None = None,
        min_submitted_at: str | None = None,
        max_executed_at: str | None = None,
        p: int | None = None,
        ps: int | None = None,
    ) -> ActivityResponse:
        """Search past and pending tasks.

        Raises:
            ValidationError: both *component* and *component_id* given
        """
        if component is not None and component_id is not None:
            raise ValidationError("component and componentId cannot both be set", "component")
        return self._activity(
            {
                "component": component,
                "componentId": component_id,
                "q": q,
                "status": status,
                "type": type_,
                "onlyCurrents": only_currents,
                "minSubmittedAt": min_submitted_at,
                "maxExecutedAt": max_executed_at,
                "p": p,
                "ps": ps,
            }
        )

    def search_activity(self) -> ActivityBuilder:
        return ActivityBuilder(self._activity)

    def activity_status(self, component: str | None = None, component_id: str | None = None) -> ActivityStatusResponse:
        """Queue counters, for one component or the whole instance."""
        return self._get(
            "/api/ce/activity_status",
            {"componentKey": component, "componentId": component_id},
        )

    def component(self, component: str) -> ComponentTasksResponse:
        """Pending and current tasks of one component."""
        return self._get("/api/ce/component", {"component": component})

    def task(self, task_id: str, additional_fields: list[str] | None = None) -> TaskResponse:
        return self._get("/api/ce/task", {"id": task_id, "additionalFields": additional_fields})

    def _activity(self, params: dict) -> ActivityResponse:
        return self._get("/api/ce/activity", params)
