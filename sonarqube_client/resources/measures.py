"""Measures API (``/api/measures``).

Usage:
    measures = client.measures.component("my-project", ["coverage", "bugs"])
    for file in client.measures.component_tree("my-project", ["ncloc"]).with_qualifiers(["FIL"]).all():
        ...
"""

from typing import TypedDict

from sonarqube_client.builders import PaginatedBuilder
from sonarqube_client.client import BaseClient
from sonarqube_client.errors import ValidationError

MAX_METRIC_KEYS = 15


class Measure(TypedDict, total=False):
    metric: str
    value: str
    bestValue: bool
    period: dict
    periods: list[dict]


class MeasuredComponent(TypedDict, total=False):
    key: str
    name: str
    qualifier: str
    path: str
    language: str
    measures: list[Measure]


class ComponentMeasuresResponse(TypedDict, total=False):
    component: MeasuredComponent
    metrics: list[dict]
    period: dict


class ComponentTreeResponse(TypedDict, total=False):
    baseComponent: MeasuredComponent
    components: list[MeasuredComponent]
    metrics: list[dict]
    paging: dict


class HistoryValue(TypedDict, total=False):
    date: str
    value: str


class MetricHistory(TypedDict):
    metric: str
    history: list[HistoryValue]


class SearchHistoryResponse(TypedDict):
    measures: list[MetricHistory]
    paging: dict


class ComponentTreeBuilder(PaginatedBuilder[ComponentTreeResponse, MeasuredComponent]):
    items_key = "components"

    def with_base_component_id(self, base_component_id: str) -> "ComponentTreeBuilder":
        self._params.pop("component", None)
        return self._set("baseComponentId", base_component_id)

    def with_additional_fields(self, fields: list[str]) -> "ComponentTreeBuilder":
        return self._set("additionalFields", fields)

    def with_strategy(self, strategy: str) -> "ComponentTreeBuilder":
        return self._set("strategy", strategy)

    def with_qualifiers(self, qualifiers: list[str]) -> "ComponentTreeBuilder":
        return self._set("qualifiers", qualifiers)

    def with_branch(self, branch: str) -> "ComponentTreeBuilder":
        return self._set("branch", branch)

    def with_pull_request(self, pull_request: str) -> "ComponentTreeBuilder":
        return self._set("pullRequest", pull_request)

    def with_query(self, query: str) -> "ComponentTreeBuilder":
        return self._set("q", query)

    def sort_by_metric(self, metric_key: str, metric_sort_filter: str = "all") -> "ComponentTreeBuilder":
        return self._set_params(s="metric", metricSort=metric_key, metricSortFilter=metric_sort_filter)

    def sort_by(self, field: str, ascending: bool = True) -> "ComponentTreeBuilder":
        return self._set_params(s=field, asc=ascending)

    def validate(self) -> None:
        metric_keys = self._params.get("metricKeys")
        if not metric_keys:
            raise ValidationError("Metric keys are required", "metricKeys")
        if len(metric_keys) > MAX_METRIC_KEYS:
            raise ValidationError(f"Maximum {MAX_METRIC_KEYS} metric keys allowed", "metricKeys")
        if not self._params.get("component") and not self._params.get("baseComponentId"):
            raise ValidationError("Either component or baseComponentId must be provided", "component")


class SearchHistoryBuilder(PaginatedBuilder[SearchHistoryResponse, MetricHistory]):
    items_key = "measures"

    def with_branch(self, branch: str) -> "SearchHistoryBuilder":
        return self._set("branch", branch)

    def with_pull_request(self, pull_request: str) -> "SearchHistoryBuilder":
        return self._set("pullRequest", pull_request)

    def date_range(self, from_date: str | None = None, to_date: str | None = None) -> "SearchHistoryBuilder":
        return self._set_params(**{"from": from_date, "to": to_date})

    def validate(self) -> None:
        if not self._params.get("component"):
            raise ValidationError("Component is required", "component")
        if not self._params.get("metrics"):
            raise ValidationError("At least one metric is required", "metrics")


class MeasuresClient(BaseClient):

    def component(
        self,
        component: str,
        metric_keys: list[str],
        *,
        additional_fields: list[str] | None = None,
        branch: str | None = None,
        pull_request: str | None = None,
    ) -> ComponentMeasuresResponse:
        return self._get(
            "/api/measures/component",
            {
                "component": component,
                "metricKeys": metric_keys,
                "additionalFields": additional_fields,
                "branch": branch,
                "pullRequest": pull_request,
            },
        )

    def component_tree(self, component: str, metric_keys: list[str]) -> ComponentTreeBuilder:
        builder = ComponentTreeBuilder(lambda params: self._get("/api/measures/component_tree", params))
        return builder._set_params(component=component, metricKeys=metric_keys)

    def search_history(self, component: str, metrics: list[str]) -> SearchHistoryBuilder:
        """History of *metrics* for *component*, one page of analyses at a time."""
        builder = SearchHistoryBuilder(lambda params: self._get("/api/measures/search_history", params))
        return builder._set_params(component=component, metrics=metrics)
