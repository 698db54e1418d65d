"""Portfolios API (``/api/views``), Enterprise Edition."""

from sonarqube_client.client import BaseClient


class ViewsClient(BaseClient):

    def show(self, key: str) -> dict:
        """Portfolio definition, including its selection mode and sub-portfolios."""
        return self._get("/api/views/show", {"key": key})

    def update(self, key: str, name: str, description: str | None = None) -> None:
        self._post("/api/views/update", {"key": key, "name": name, "description": description})

    def add_application(self, portfolio: str, application: str) -> None:
        self._post("/api/views/add_application", {"portfolio": portfolio, "application": application})

    def add_application_branch(self, portfolio: str, application: str, branch: str) -> None:
        self._post(
            "/api/views/add_application_branch",
            {"portfolio": portfolio, "application": application, "branch": branch},
        )
