"""Project badges (``/api/project_badges``), rendered as SVG documents."""

from sonarqube_client.client import BaseClient

SVG = "image/svg+xml"


class ProjectBadgesClient(BaseClient):
    """Fetch badge images; *token* is the project badge token for private projects."""

    def measure(
        self,
        project: str,
        metric: str,
        branch: str | None = None,
        token: str | None = None,
    ) -> str:
        return self._get_text(
            "/api/project_badges/measure",
            {"project": project, "metric": metric, "branch": branch, "token": token},
            accept=SVG,
        )

    def quality_gate(self, project: str, branch: str | None = None, token: str | None = None) -> str:
        return self._get_text(
            "/api/project_badges/quality_gate",
            {"project": project, "branch": branch, "token": token},
            accept=SVG,
        )

    def ai_code_assurance(self, project: str, token: str | None = None) -> str:
        return self._get_text(
            "/api/project_badges/ai_code_assurance",
            {"project": project, "token": token},
            accept=SVG,
        )
