"""Project branches API (``/api/project_branches``)."""

from typing import TypedDict

from sonarqube_client.client import BaseClient


class Branch(TypedDict, total=False):
    name: str
    isMain: bool
    type: str
    status: dict
    analysisDate: str
    excludedFromPurge: bool
    branchId: str


class ListBranchesResponse(TypedDict):
    branches: list[Branch]


class ProjectBranchesClient(BaseClient):

    def list(self, project: str | None = None, branch_ids: list[str] | None = None) -> ListBranchesResponse:
        return self._get("/api/project_branches/list", {"project": project, "branchIds": branch_ids})

    def delete(self, project: str, branch: str) -> None:
        self._post("/api/project_branches/delete", {"project": project, "branch": branch})

    def rename(self, project: str, name: str) -> None:
        """Rename the main branch of *project*."""
        self._post("/api/project_branches/rename", {"project": project, "name": name})

    def set_automatic_deletion_protection(self, project: str, branch: str, value: bool) -> None:
        """Exclude *branch* from (or return it to) housekeeping deletion."""
        self._post(
            "/api/project_branches/set_automatic_deletion_protection",
            {"project": project, "branch": branch, "value": value},
        )

    def set_main(self, project: str, branch: str) -> None:
        self._post("/api/project_branches/set_main", {"project": project, "branch": branch})
