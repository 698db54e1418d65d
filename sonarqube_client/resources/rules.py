"""Coding rules API (``/api/rules``).

Usage:
    for rule in client.rules.search().with_languages(["py"]).with_tags(["security"]).all():
        print(rule["key"], rule["name"])
"""

from typing import Any, TypedDict

from sonarqube_client.builders import PaginatedBuilder
from sonarqube_client.client import BaseClient


class Rule(TypedDict, total=False):
    key: str
    repo: str
    name: str
    htmlDesc: str
    mdDesc: str
    severity: str
    status: str
    type: str
    lang: str
    langName: str
    isTemplate: bool
    templateKey: str
    tags: list[str]
    sysTags: list[str]
    params: list[dict]
    impacts: list[dict]
    cleanCodeAttribute: str
    cleanCodeAttributeCategory: str


class SearchRulesResponse(TypedDict, total=False):
    rules: list[Rule]
    total: int
    p: int
    ps: int
    paging: dict
    actives: dict
    facets: list[dict]


class ShowRuleResponse(TypedDict, total=False):
    rule: Rule
    actives: list[dict]


class RuleFilters:
    """Rule selection filters shared by rule search and bulk (de)activation."""

    def with_query(self, query: str):
        return self._set("q", query)

    def with_languages(self, languages: list[str]):
        return self._set("languages", languages)

    def with_repositories(self, repositories: list[str]):
        return self._set("repositories", repositories)

    def with_rule_key(self, key: str):
        return self._set("rule_key", key)

    def with_rule_keys(self, keys: list[str]):
        return self._set("rule_keys", keys)

    def with_tags(self, tags: list[str]):
        return self._set("tags", tags)

    def with_types(self, types: list[str]):
        return self._set("types", types)

    def with_severities(self, severities: list[str]):
        return self._set("severities", severities)

    def with_statuses(self, statuses: list[str]):
        return self._set("statuses", statuses)

    def with_impact_severities(self, severities: list[str]):
        return self._set("impactSeverities", severities)

    def with_impact_software_qualities(self, qualities: list[str]):
        return self._set("impactSoftwareQualities", qualities)

    def with_clean_code_attribute_categories(self, categories: list[str]):
        return self._set("cleanCodeAttributeCategories", categories)

    def with_cwe(self, cwe_ids: list[str]):
        return self._set("cwe", cwe_ids)

    def with_owasp_top10(self, categories: list[str]):
        return self._set("owaspTop10", categories)

    def with_owasp_top10_2021(self, categories: list[str]):
        return self._set("owaspTop10-2021", categories)

    def with_sonarsource_security(self, categories: list[str]):
        return self._set("sonarsourceSecurity", categories)

    def in_quality_profile(self, profile_key: str, activation: bool = True):
        """Rules active (or inactive) in the profile *profile_key*."""
        return self._set_params(qprofile=profile_key, activation=activation)

    def with_active_severities(self, severities: list[str]):
        return self._set("active_severities", severities)

    def with_inheritance(self, inheritance: list[str]):
        return self._set("inheritance", inheritance)

    def available_since(self, date: str):
        return self._set("available_since", date)

    def only_templates(self, is_template: bool = True):
        return self._set("is_template", is_template)

    def with_template_key(self, key: str):
        return self._set("template_key", key)

    def include_external(self, include: bool = True):
        return self._set("include_external", include)


class SearchRulesBuilder(RuleFilters, PaginatedBuilder[SearchRulesResponse, Rule]):
    items_key = "rules"

    def with_fields(self, fields: list[str]) -> "SearchRulesBuilder":
        return self._set("f", fields)

    def with_facets(self, facets: list[str]) -> "SearchRulesBuilder":
        return self._set("facets", facets)

    def in_organization(self, organization: str) -> "SearchRulesBuilder":
        return self._set("organization", organization)

    def sort_by(self, field: str, ascending: bool = True) -> "SearchRulesBuilder":
        return self._set_params(s=field, asc=ascending)


class RulesClient(BaseClient):

    def search(self) -> SearchRulesBuilder:
        return SearchRulesBuilder(lambda params: self._get("/api/rules/search", self._with_organization(params)))

    def show(self, key: str, actives: bool | None = None, organization: str | None = None) -> ShowRuleResponse:
        """Detailed rule; with *actives* the profiles activating it are included."""
        return self._get(
            "/api/rules/show",
            self._with_organization({"key": key, "actives": actives, "organization": organization}),
        )

    def list_repositories(self, language: str | None = None, q: str | None = None) -> dict:
        return self._get("/api/rules/repositories", {"language": language, "q": q})

    def list_tags(self, q: str | None = None, ps: int | None = None, organization: str | None = None) -> dict:
        return self._get(
            "/api/rules/tags",
            self._with_organization({"q": q, "ps": ps, "organization": organization}),
        )

    def create(
        self,
        custom_key: str,
        name: str,
        markdown_description: str,
        template_key: str,
        *,
        severity: str | None = None,
        status: str | None = None,
        type_: str | None = None,
        params: dict[str, Any] | None = None,
        impacts: dict[str, str] | None = None,
        clean_code_attribute: str | None = None,
    ) -> ShowRuleResponse:
        """Create a custom rule from the template rule *template_key*."""
        return self._post(
            "/api/rules/create",
            {
                "customKey": custom_key,
                "name": name,
                "markdownDescription": markdown_description,
                "templateKey": template_key,
                "severity": severity,
                "status": status,
                "type": type_,
                "params": _key_values(params),
                "impacts": _key_values(impacts),
                "cleanCodeAttribute": clean_code_attribute,
            },
        )

    def update(
        self,
        key: str,
        *,
        name: str | None = None,
        markdown_description: str | None = None,
        markdown_note: str | None = None,
        severity: str | None = None,
        status: str | None = None,
        tags: list[str] | None = None,
        params: dict[str, Any] | None = None,
        remediation_fn_type: str | None = None,
        remediation_fn_base_effort: str | None = None,
        remediation_fy_gap_multiplier: str | None = None,
        organization: str | None = None,
    ) -> ShowRuleResponse:
        return self._post(
            "/api/rules/update",
            self._with_organization(
                {
                    "key": key,
                    "name": name,
                    "markdown_description": markdown_description,
                    "markdown_note": markdown_note,
                    "severity": severity,
                    "status": status,
                    "tags": ",".join(tags) if tags is not None else None,
                    "params": _key_values(params),
                    "remediation_fn_type": remediation_fn_type,
                    "remediation_fn_base_effort": remediation_fn_base_effort,
                    "remediation_fy_gap_multiplier": remediation_fy_gap_multiplier,
                    "organization": organization,
                }
            ),
        )

    def delete(self, key: str) -> None:
        """Delete a custom rule."""
        self._post("/api/rules/delete", {"key": key})


def _key_values(values: dict[str, Any] | None) -> str | None:
    # rendered as key1=v1;key2=v2
    if not values:
        return None
    return ";".join(f"{key}={value}" for key, value in values.items())
