"""Pull request analyses (``/api/project_pull_requests``)."""

from typing import TypedDict

from sonarqube_client.client import BaseClient


class PullRequest(TypedDict, total=False):
    key: str
    title: str
    branch: str
    base: str
    status: dict
    analysisDate: str
    url: str
    target: str


class ListPullRequestsResponse(TypedDict):
    pullRequests: list[PullRequest]


class ProjectPullRequestsClient(BaseClient):

    def list(self, project: str) -> ListPullRequestsResponse:
        return self._get("/api/project_pull_requests/list", {"project": project})

    def delete(self, project: str, pull_request: str) -> None:
        self._post("/api/project_pull_requests/delete", {"project": project, "pullRequest": pull_request})
