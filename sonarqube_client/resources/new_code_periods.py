"""New code period API (``/api/new_code_periods``)."""

from typing import TypedDict

from sonarqube_client.client import BaseClient
from sonarqube_client.errors import ValidationError

#: Period types that need a ``value`` to be meaningful.
TYPES_REQUIRING_VALUE = ("NUMBER_OF_DAYS", "REFERENCE_BRANCH", "SPECIFIC_ANALYSIS")


class NewCodePeriod(TypedDict, total=False):
    projectKey: str
    branchKey: str
    type: str
    value: str
    effectiveValue: str
    inherited: bool


class ListNewCodePeriodsResponse(TypedDict):
    newCodePeriods: list[NewCodePeriod]


class NewCodePeriodsClient(BaseClient):

    def list(self, project: str, branch: str | None = None) -> ListNewCodePeriodsResponse:
        """Periods of every branch of *project*."""
        return self._get("/api/new_code_periods/list", {"project": project, "branch": branch})

    def show(self, project: str | None = None, branch: str | None = None) -> NewCodePeriod:
        """Effective period of a branch, a project, or the instance default."""
        return self._get("/api/new_code_periods/show", {"project": project, "branch": branch})

    def set(
        self,
        type_: str,
        *,
        project: str | None = None,
        branch: str | None = None,
        value: str | None = None,
    ) -> None:
        """Raises ``ValidationError`` when *type_* needs a *value* and none is given."""
        if type_ in TYPES_REQUIRING_VALUE and not value:
            raise ValidationError(f"A value is required for type {type_}", "value")
        self._post(
            "/api/new_code_periods/set",
            {"type": type_, "project": project, "branch": branch, "value": value},
        )

    def unset(self, project: str | None = None, branch: str | None = None) -> None:
        self._post("/api/new_code_periods/unset", {"project": project, "branch": branch})
