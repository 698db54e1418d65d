"""Project analyses and their events (``/api/project_analyses``).

Usage:
    for analysis in client.project_analyses.search("my-project").category("VERSION").all():
        print(analysis["date"], [e["name"] for e in analysis["events"]])
"""

from typing import TypedDict

from sonarqube_client.builders import PaginatedBuilder
from sonarqube_client.client import BaseClient
from sonarqube_client.errors import ValidationError

MAX_EVENT_NAME_LENGTH = 400
MAX_PAGE_SIZE = 500
CREATABLE_EVENT_CATEGORIES = ("VERSION", "OTHER")


class Event(TypedDict, total=False):
    key: str
    category: str
    name: str
    description: str
    analysis: str


class Analysis(TypedDict, total=False):
    key: str
    date: str
    projectVersion: str
    buildString: str
    revision: str
    manualNewCodePeriodBaseline: bool
    detectedCI: str
    events: list[Event]


class SearchAnalysesResponse(TypedDict):
    analyses: list[Analysis]
    paging: dict


class EventResponse(TypedDict):
    event: Event


class SearchAnalysesBuilder(PaginatedBuilder[SearchAnalysesResponse, Analysis]):
    items_key = "analyses"

    def project(self, project: str) -> "SearchAnalysesBuilder":
        return self._set("project", project)

    def branch(self, branch: str) -> "SearchAnalysesBuilder":
        return self._set("branch", branch)

    def category(self, category: str) -> "SearchAnalysesBuilder":
        """Keep analyses carrying an event of *category* (VERSION, QUALITY_GATE, ...)."""
        return self._set("category", category)

    def from_date(self, date: str) -> "SearchAnalysesBuilder":
        return self._set("from", date)

    def to_date(self, date: str) -> "SearchAnalysesBuilder":
        return self._set("to", date)

    def validate(self) -> None:
        if not self._params.get("project"):
            raise ValidationError("Project key is required", "project")
        page_size = self._params.get("ps")
        if page_size is not None and not 0 < page_size <= MAX_PAGE_SIZE:
            raise ValidationError(f"Page size must be between 1 and {MAX_PAGE_SIZE}", "ps")


def _check_event_name(name: str) -> None:
    if len(name) > MAX_EVENT_NAME_LENGTH:
        raise ValidationError(f"Event name cannot exceed {MAX_EVENT_NAME_LENGTH} characters", "name")


class ProjectAnalysesClient(BaseClient):

    def search(self, project: str | None = None) -> SearchAnalysesBuilder:
        builder = SearchAnalysesBuilder(lambda params: self._get("/api/project_analyses/search", params))
        if project:
            builder.project(project)
        return builder

    def create_event(self, analysis: str, name: str, category: str | None = None) -> EventResponse:
        """Attach an event to *analysis*.

        Raises:
            ValidationError: name longer than 400 characters, or a category
                other than VERSION / OTHER
        """
        _check_event_name(name)
        if category and category not in CREATABLE_EVENT_CATEGORIES:
            raise ValidationError("Only events of category 'VERSION' and 'OTHER' can be created", "category")
        return self._post(
            "/api/project_analyses/create_event",
            {"analysis": analysis, "name": name, "category": category},
        )

    def update_event(self, event: str, name: str) -> EventResponse:
        _check_event_name(name)
        return self._post("/api/project_analyses/update_event", {"event": event, "name": name})

    def delete_event(self, event: str) -> None:
        self._post("/api/project_analyses/delete_event", {"event": event})

    def delete(self, analysis: str) -> None:
        self._post("/api/project_analyses/delete", {"analysis": analysis})

    def set_baseline(self, project: str, analysis: str, branch: str | None = None) -> None:
        """Use *analysis* as the new code period baseline."""
        self._post(
            "/api/project_analyses/set_baseline",
            {"project": project, "analysis": analysis, "branch": branch},
        )

    def unset_baseline(self, project: str, branch: str | None = None) -> None:
        self._post("/api/project_analyses/unset_baseline", {"project": project, "branch": branch})
