"""AI CodeFix suggestions (``/api/v2/fix-suggestions``), available since 10.7.

Usage:
    available = client.fix_suggestions.check_availability().with_issue("AX1").execute()
    fix = (
        client.fix_suggestions.request_suggestions()
        .with_issue("AX1")
        .with_max_alternatives(2)
        .with_fix_style("minimal")
        .execute()
    )
"""

from typing import Any, TypedDict

from sonarqube_client.builders import BaseBuilder
from sonarqube_client.client import BaseClient
from sonarqube_client.errors import ValidationError

MAX_ALTERNATIVES = 10
MAX_CUSTOM_CONTEXT_LENGTH = 1000


class FixSuggestionAvailability(TypedDict, total=False):
    enabled: bool
    status: str
    reason: str


class SuggestedChange(TypedDict, total=False):
    startLine: int
    endLine: int
    newCode: str


class AiSuggestionResponse(TypedDict, total=False):
    id: str
    issueId: str
    explanation: str
    changes: list[SuggestedChange]


class IssueAvailabilityBuilder(BaseBuilder[FixSuggestionAvailability]):

    def with_issue(self, issue_key: str) -> "IssueAvailabilityBuilder":
        return self._set("issueKey", issue_key)

    def in_project(self, project_key: str) -> "IssueAvailabilityBuilder":
        return self._set("projectKey", project_key)

    def on_branch(self, branch: str) -> "IssueAvailabilityBuilder":
        return self._set("branch", branch)

    def on_pull_request(self, pull_request: str) -> "IssueAvailabilityBuilder":
        return self._set("pullRequest", pull_request)

    def validate(self) -> None:
        _require_issue_key(self._params)
        if self._params.get("branch") and self._params.get("pullRequest"):
            raise ValidationError("Cannot specify both branch and pull request", "branch")


class AiSuggestionsBuilder(BaseBuilder[AiSuggestionResponse]):
    """Request body for ``/ai-suggestions``.

    Starts with context included, 3 alternatives, the ``comprehensive`` fix
    style and ``normal`` priority.
    """

    def __init__(self, executor) -> None:
        super().__init__(executor)
        self._params.update(
            includeContext=True,
            maxAlternatives=3,
            fixStyle="comprehensive",
            priority="normal",
        )

    def with_issue(self, issue_key: str) -> "AiSuggestionsBuilder":
        return self._set("issueKey", issue_key)

    def with_context(self, include: bool = True) -> "AiSuggestionsBuilder":
        return self._set("includeContext", include)

    def with_max_alternatives(self, count: int) -> "AiSuggestionsBuilder":
        if not 1 <= count <= MAX_ALTERNATIVES:
            raise ValidationError(f"Max alternatives must be between 1 and {MAX_ALTERNATIVES}", "maxAlternatives")
        return self._set("maxAlternatives", count)

    def with_fix_style(self, style: str) -> "AiSuggestionsBuilder":
        """``minimal``, ``comprehensive`` or ``defensive``."""
        return self._set("fixStyle", style)

    def with_language_preferences(self, preferences: dict[str, Any]) -> "AiSuggestionsBuilder":
        merged = {**self._params.get("languagePreferences", {}), **preferences}
        return self._set("languagePreferences", merged)

    def with_custom_context(self, context: str) -> "AiSuggestionsBuilder":
        if not context.strip():
            raise ValidationError("Custom context cannot be empty", "customContext")
        return self._set("customContext", context)

    def with_priority(self, priority: str) -> "AiSuggestionsBuilder":
        return self._set("priority", priority)

    def validate(self) -> None:
        _require_issue_key(self._params)
        alternatives = self._params.get("maxAlternatives")
        if alternatives is not None and not 1 <= alternatives <= MAX_ALTERNATIVES:
            raise ValidationError(f"Max alternatives must be between 1 and {MAX_ALTERNATIVES}", "maxAlternatives")
        if len(self._params.get("customContext") or "") > MAX_CUSTOM_CONTEXT_LENGTH:
            raise ValidationError(
                f"Custom context cannot exceed {MAX_CUSTOM_CONTEXT_LENGTH} characters", "customContext"
            )


def _require_issue_key(params: dict) -> None:
    issue_key = params.get("issueKey")
    if issue_key is None:
        raise ValidationError("Issue key is required", "issueKey")
    if not issue_key.strip():
        raise ValidationError("Issue key cannot be empty", "issueKey")


class FixSuggestionsClient(BaseClient):

    def get_issue_availability(
        self,
        issue_key: str,
        project_key: str | None = None,
        branch: str | None = None,
        pull_request: str | None = None,
    ) -> FixSuggestionAvailability:
        return self._get(
            "/api/v2/fix-suggestions/issues",
            {"issueKey": issue_key, "projectKey": project_key, "branch": branch, "pullRequest": pull_request},
        )

    def request_ai_suggestions(self, issue_key: str, **options: Any) -> AiSuggestionResponse:
        """POST a suggestion request; *options* are sent as-is in the JSON body."""
        return self._post_json("/api/v2/fix-suggestions/ai-suggestions", {"issueKey": issue_key, **options})

    def check_availability(self) -> IssueAvailabilityBuilder:
        return IssueAvailabilityBuilder(lambda params: self._get("/api/v2/fix-suggestions/issues", params))

    def request_suggestions(self) -> AiSuggestionsBuilder:
        return AiSuggestionsBuilder(
            lambda params: self._post_json("/api/v2/fix-suggestions/ai-suggestions", params)
        )
