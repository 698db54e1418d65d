"""Components API (``/api/components``).

Usage:
    files = client.components.tree("my-project").qualifiers(["FIL"]).strategy("leaves").all()
"""

from typing import TypedDict

from sonarqube_client.builders import PaginatedBuilder
from sonarqube_client.client import BaseClient
from sonarqube_client.deprecation import warn_deprecated
from sonarqube_client.errors import ValidationError


class Component(TypedDict, total=False):
    key: str
    name: str
    qualifier: str
    path: str
    language: str
    project: str
    description: str
    visibility: str
    analysisDate: str
    leakPeriodDate: str
    tags: list[str]


class ComponentShowResponse(TypedDict, total=False):
    component: Component
    ancestors: list[Component]


class ComponentSearchResponse(TypedDict):
    components: list[Component]
    paging: dict


class ComponentTreeResponse(TypedDict, total=False):
    baseComponent: Component
    components: list[Component]
    paging: dict


class ComponentsSearchBuilder(PaginatedBuilder[ComponentSearchResponse, Component]):
    items_key = "components"

    def query(self, query: str) -> "ComponentsSearchBuilder":
        return self._set("q", query)

    def qualifiers(self, qualifiers: list[str]) -> "ComponentsSearchBuilder":
        return self._set("qualifiers", qualifiers)

    def languages(self, languages: list[str]) -> "ComponentsSearchBuilder":
        return self._set("languages", languages)

    def in_organization(self, organization: str) -> "ComponentsSearchBuilder":
        return self._set("organization", organization)


class ComponentTreeBuilder(PaginatedBuilder[ComponentTreeResponse, Component]):
    items_key = "components"

    def component(self, component: str) -> "ComponentTreeBuilder":
        return self._set("component", component)

    def branch(self, branch: str) -> "ComponentTreeBuilder":
        return self._set("branch", branch)

    def pull_request(self, pull_request: str) -> "ComponentTreeBuilder":
        return self._set("pullRequest", pull_request)

    def query(self, query: str) -> "ComponentTreeBuilder":
        if len(query) < 3:
            raise ValidationError("Query must be at least 3 characters long", "q")
        return self._set("q", query)

    def qualifiers(self, qualifiers: list[str]) -> "ComponentTreeBuilder":
        return self._set("qualifiers", qualifiers)

    def sort_by(self, fields: list[str], ascending: bool = True) -> "ComponentTreeBuilder":
        return self._set_params(s=fields, asc=ascending)

    def strategy(self, strategy: str) -> "ComponentTreeBuilder":
        """``all``, ``children`` or ``leaves``."""
        return self._set("strategy", strategy)

    def validate(self) -> None:
        if not self._params.get("component"):
            raise ValidationError("A base component is required for tree search", "component")


class ComponentsClient(BaseClient):

    def show(
        self,
        component: str,
        branch: str | None = None,
        pull_request: str | None = None,
    ) -> ComponentShowResponse:
        """Return a component and its ancestors."""
        return self._get(
            "/api/components/show",
            {"component": component, "branch": branch or None, "pullRequest": pull_request or None},
        )

    def search(self) -> ComponentsSearchBuilder:
        return ComponentsSearchBuilder(
            lambda params: self._get("/api/components/search", self._with_organization(params))
        )

    def search_legacy(
        self,
        organization: str,
        q: str | None = None,
        p: int | None = None,
        ps: int | None = None,
    ) -> ComponentSearchResponse:
        warn_deprecated(
            "components.search_legacy()",
            replacement="components.search() or components.tree()",
            remove_version="9.0.0",
            reason="The legacy search endpoint is replaced by the search builder since 6.3",
        )
        return self._get(
            "/api/components/search",
            {"organization": organization, "q": q or None, "p": p or None, "ps": ps or None},
        )

    def tree(self, component: str | None = None) -> ComponentTreeBuilder:
        builder = ComponentTreeBuilder(lambda params: self._get("/api/components/tree", params))
        if component:
            builder.component(component)
        return builder
