"""Issues API (``/api/issues``).

Usage:
    for issue in client.issues.search().with_projects(["my-project"]).only_unresolved().all():
        print(issue["key"], issue["message"])

    client.issues.do_transition(issue="AX1", transition="falsepositive")
"""

from typing import Iterator, TypedDict

from sonarqube_client.builders import PaginatedBuilder
from sonarqube_client.client import BaseClient
from sonarqube_client.deprecation import warn_deprecated
from sonarqube_client.errors import ValidationError

MAX_BULK_CHANGE = 500

# Python-friendly filter names that the API spells differently
_API_PARAM_NAMES = {
    "owaspTop10v2021": "owaspTop10-2021",
    "owaspAsvs40": "owaspAsvs-4.0",
    "owaspMobileTop102024": "owaspMobileTop10-2024",
    "pciDss32": "pciDss-3.2",
    "pciDss40": "pciDss-4.0",
    "stigASDV5R3": "stig-ASD_V5R3",
}


class TextRange(TypedDict, total=False):
    startLine: int
    endLine: int
    startOffset: int
    endOffset: int


class Impact(TypedDict):
    softwareQuality: str
    severity: str


class Comment(TypedDict, total=False):
    key: str
    login: str
    htmlText: str
    markdown: str
    updatable: bool
    createdAt: str


class Issue(TypedDict, total=False):
    key: str
    rule: str
    severity: str
    component: str
    project: str
    line: int
    hash: str
    textRange: TextRange
    status: str
    issueStatus: str
    resolution: str
    message: str
    effort: str
    debt: str
    author: str
    assignee: str
    tags: list[str]
    type: str
    cleanCodeAttribute: str
    cleanCodeAttributeCategory: str
    impacts: list[Impact]
    comments: list[Comment]
    creationDate: str
    updateDate: str
    closeDate: str


class Paging(TypedDict):
    pageIndex: int
    pageSize: int
    total: int


class SearchIssuesResponse(TypedDict, total=False):
    total: int
    p: int
    ps: int
    paging: Paging
    effortTotal: int
    issues: list[Issue]
    components: list[dict]
    rules: list[dict]
    users: list[dict]
    facets: list[dict]


class IssueResponse(TypedDict, total=False):
    issue: Issue
    components: list[dict]
    rules: list[dict]
    users: list[dict]


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

class SearchIssuesBuilder(PaginatedBuilder[SearchIssuesResponse, Issue]):
    """Filters for ``/api/issues/search``."""

    items_key = "issues"

    def with_components(self, component_keys: list[str]) -> "SearchIssuesBuilder":
        return self._set("componentKeys", component_keys)

    def with_projects(self, project_keys: list[str]) -> "SearchIssuesBuilder":
        return self._set("projects", project_keys)

    def with_directories(self, directories: list[str]) -> "SearchIssuesBuilder":
        return self._set("directories", directories)

    def with_files(self, files: list[str]) -> "SearchIssuesBuilder":
        return self._set("files", files)

    def with_statuses(self, statuses: list[str]) -> "SearchIssuesBuilder":
        warn_deprecated(
            "SearchIssuesBuilder.with_statuses()",
            replacement="with_issue_statuses()",
            reason="Parameter 'statuses' is deprecated since July 3, 2024",
        )
        return self._set("statuses", statuses)

    def with_types(self, types: list[str]) -> "SearchIssuesBuilder":
        warn_deprecated(
            "SearchIssuesBuilder.with_types()",
            reason="Issue types are derived from Clean Code categories since August 25, 2023",
        )
        return self._set("types", types)

    def with_severities(self, severities: list[str]) -> "SearchIssuesBuilder":
        warn_deprecated(
            "SearchIssuesBuilder.with_severities()",
            replacement="with_impact_severities()",
            reason="Parameter 'severities' is deprecated since August 25, 2023",
        )
        return self._set("severities", severities)

    def with_resolutions(self, resolutions: list[str]) -> "SearchIssuesBuilder":
        warn_deprecated(
            "SearchIssuesBuilder.with_resolutions()",
            replacement="with_issue_statuses()",
            reason="Issue resolutions are replaced by the new status model since July 3, 2024",
        )
        return self._set("resolutions", resolutions)

    def with_issue_statuses(self, statuses: list[str]) -> "SearchIssuesBuilder":
        return self._set("issueStatuses", statuses)

    def with_impact_severities(self, severities: list[str]) -> "SearchIssuesBuilder":
        return self._set("impactSeverities", severities)

    def with_impact_software_qualities(self, qualities: list[str]) -> "SearchIssuesBuilder":
        return self._set("impactSoftwareQualities", qualities)

    def with_clean_code_attribute_categories(self, categories: list[str]) -> "SearchIssuesBuilder":
        return self._set("cleanCodeAttributeCategories", categories)

    def assigned_to(self, assignee: str) -> "SearchIssuesBuilder":
        return self._set("assignees", [assignee])

    def assigned_to_any(self, assignees: list[str]) -> "SearchIssuesBuilder":
        return self._set("assignees", assignees)

    def by_author(self, author: str) -> "SearchIssuesBuilder":
        return self._set("authors", [author])

    def by_authors(self, authors: list[str]) -> "SearchIssuesBuilder":
        return self._set("authors", authors)

    def created_after(self, date: str) -> "SearchIssuesBuilder":
        return self._set("createdAfter", date)

    def created_before(self, date: str) -> "SearchIssuesBuilder":
        return self._set("createdBefore", date)

    def created_at(self, date: str) -> "SearchIssuesBuilder":
        return self._set("createdAt", date)

    def created_in_last(self, period: str) -> "SearchIssuesBuilder":
        """Relative window such as ``1w``, ``1m`` or ``1y``."""
        return self._set("createdInLast", period)

    def with_tags(self, tags: list[str]) -> "SearchIssuesBuilder":
        return self._set("tags", tags)

    def with_languages(self, languages: list[str]) -> "SearchIssuesBuilder":
        return self._set("languages", languages)

    def with_rules(self, rules: list[str]) -> "SearchIssuesBuilder":
        return self._set("rules", rules)

    def with_issues(self, issue_keys: list[str]) -> "SearchIssuesBuilder":
        return self._set("issues", issue_keys)

    def with_scopes(self, scopes: list[str]) -> "SearchIssuesBuilder":
        return self._set("scopes", scopes)

    def with_cwe(self, cwe_ids: list[str]) -> "SearchIssuesBuilder":
        return self._set("cwe", cwe_ids)

    def with_owasp_top10(self, categories: list[str]) -> "SearchIssuesBuilder":
        return self._set("owaspTop10", categories)

    def with_owasp_top10_2021(self, categories: list[str]) -> "SearchIssuesBuilder":
        return self._set("owaspTop10v2021", categories)

    def with_owasp_asvs40(self, categories: list[str]) -> "SearchIssuesBuilder":
        return self._set("owaspAsvs40", categories)

    def with_pci_dss32(self, categories: list[str]) -> "SearchIssuesBuilder":
        return self._set("pciDss32", categories)

    def with_pci_dss40(self, categories: list[str]) -> "SearchIssuesBuilder":
        return self._set("pciDss40", categories)

    def with_sans_top25(self, categories: list[str]) -> "SearchIssuesBuilder":
        return self._set("sansTop25", categories)

    def with_sonarsource_security(self, categories: list[str]) -> "SearchIssuesBuilder":
        return self._set("sonarsourceSecurity", categories)

    def on_branch(self, branch: str) -> "SearchIssuesBuilder":
        return self._set("branch", branch)

    def on_pull_request(self, pull_request: str) -> "SearchIssuesBuilder":
        return self._set("pullRequest", pull_request)

    def in_organization(self, organization: str) -> "SearchIssuesBuilder":
        return self._set("organization", organization)

    def only_assigned(self) -> "SearchIssuesBuilder":
        return self._set("assigned", True)

    def only_unassigned(self) -> "SearchIssuesBuilder":
        return self._set("assigned", False)

    def only_resolved(self) -> "SearchIssuesBuilder":
        return self._set("resolved", True)

    def only_unresolved(self) -> "SearchIssuesBuilder":
        return self._set("resolved", False)

    def in_new_code_period(self) -> "SearchIssuesBuilder":
        return self._set("inNewCodePeriod", True)

    def on_component_only(self) -> "SearchIssuesBuilder":
        return self._set("onComponentOnly", True)

    def sort_by(self, field: str, ascending: bool = True) -> "SearchIssuesBuilder":
        return self._set_params(s=field, asc=ascending)

    def with_additional_fields(self, fields: list[str]) -> "SearchIssuesBuilder":
        return self._set("additionalFields", fields)

    def with_facets(self, facets: list[str]) -> "SearchIssuesBuilder":
        return self._set("facets", facets)


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class IssuesClient(BaseClient):
    """Search issues and drive their workflow."""

    def search(self) -> SearchIssuesBuilder:
        """Start an issue search; requires Browse permission on the projects."""
        return SearchIssuesBuilder(self._search)

    def search_all(self, project: str) -> Iterator[Issue]:
        """Iterate over every unresolved issue of *project*."""
        return self.search().with_projects([project]).only_unresolved().all()

    def add_comment(self, issue: str, text: str) -> IssueResponse:
        return self._post("/api/issues/add_comment", {"issue": issue, "text": text})

    def assign(self, issue: str, assignee: str | None = None) -> IssueResponse:
        """Assign *issue*; omit *assignee* to unassign it."""
        return self._post("/api/issues/assign", {"issue": issue, "assignee": assignee})

    def do_transition(self, issue: str, transition: str, comment: str | None = None) -> IssueResponse:
        """Apply a workflow transition (confirm, resolve, falsepositive, accept, ...)."""
        return self._post(
            "/api/issues/do_transition",
            {"issue": issue, "transition": transition, "comment": comment},
        )

    def set_tags(self, issue: str, tags: list[str]) -> IssueResponse:
        # an empty string clears every tag
        return self._post("/api/issues/set_tags", {"issue": issue, "tags": ",".join(tags)})

    def set_severity(self, issue: str, severity: str) -> IssueResponse:
        return self._post("/api/issues/set_severity", {"issue": issue, "severity": severity})

    def set_type(self, issue: str, type_: str) -> IssueResponse:
        return self._post("/api/issues/set_type", {"issue": issue, "type": type_})

    def search_authors(
        self,
        q: str | None = None,
        ps: int | None = None,
        project: str | None = None,
    ) -> dict:
        """List SCM accounts matching *q* (may raise ``IndexingInProgressError``)."""
        return self._get(
            "/api/issues/authors",
            {"q": q or None, "ps": ps or None, "project": project or None},
        )

    def bulk_change(
        self,
        issues: list[str],
        *,
        add_tags: list[str] | None = None,
        remove_tags: list[str] | None = None,
        assign: str | None = None,
        set_severity: str | None = None,
        set_type: str | None = None,
        do_transition: str | None = None,
        comment: str | None = None,
        send_notifications: bool | None = None,
    ) -> dict:
        """Apply one set of changes to up to 500 issues.

        Raises:
            ValidationError: no issue given, or more than 500
        """
        if not issues:
            raise ValidationError("At least one issue key is required", "issues")
        if len(issues) > MAX_BULK_CHANGE:
            raise ValidationError(f"At most {MAX_BULK_CHANGE} issues can be changed at once", "issues")
        return self._post(
            "/api/issues/bulk_change",
            {
                "issues": issues,
                "add_tags": add_tags,
                "remove_tags": remove_tags,
                "assign": assign or None,
                "set_severity": set_severity,
                "set_type": set_type,
                "do_transition": do_transition,
                "comment": comment or None,
                "sendNotifications": send_notifications,
            },
        )

    def changelog(self, issue: str) -> dict:
        return self._get("/api/issues/changelog", {"issue": issue})

    def delete_comment(self, comment: str) -> IssueResponse:
        return self._post("/api/issues/delete_comment", {"comment": comment})

    def edit_comment(self, comment: str, text: str) -> IssueResponse:
        return self._post("/api/issues/edit_comment", {"comment": comment, "text": text})

    def gitlab_sast_export(
        self,
        project: str,
        branch: str | None = None,
        pull_request: str | None = None,
    ) -> dict:
        """Vulnerabilities of *project* in GitLab SAST JSON format (since 10.2)."""
        return self._get(
            "/api/issues/gitlab_sast_export",
            {"project": project, "branch": branch or None, "pullRequest": pull_request or None},
        )

    def reindex(self, project: str) -> dict | None:
        return self._post("/api/issues/reindex", {"project": project})

    def search_tags(
        self,
        q: str | None = None,
        ps: int | None = None,
        organization: str | None = None,
    ) -> dict:
        params = {"q": q or None, "ps": ps or None, "organization": organization or None}
        return self._get("/api/issues/tags", self._with_organization(params))

    def _search(self, params: dict) -> SearchIssuesResponse:
        params = {_API_PARAM_NAMES.get(key, key): value for key, value in params.items()}
        return self._get("/api/issues/search", self._with_organization(params))
