"""Metrics API (``/api/metrics``), available since 5.2."""

from typing import Any, Iterator, TypedDict

from sonarqube_client.builders import PaginatedBuilder
from sonarqube_client.client import BaseClient
from sonarqube_client.deprecation import warn_deprecated
from sonarqube_client.errors import ValidationError

MAX_PAGE_SIZE = 500


class Metric(TypedDict, total=False):
    id: str
    key: str
    name: str
    type: str
    description: str
    domain: str
    direction: int
    qualitative: bool
    hidden: bool
    custom: bool
    decimalScale: int


class SearchMetricsResponse(TypedDict):
    metrics: list[Metric]
    total: int
    p: int
    ps: int


class MetricPages(PaginatedBuilder[SearchMetricsResponse, Metric]):
    """Walks ``/api/metrics/search``, which reports ``total`` and ``ps`` at the top level."""

    items_key = "metrics"

    def custom(self, is_custom: bool | None = True) -> "MetricPages":
        return self._set("isCustom", is_custom)

    def _total(self, response: Any) -> int | None:
        return (response or {}).get("total")

    def _has_more(self, response: Any, current_page: int) -> bool:
        total = self._total(response)
        page_size = (response or {}).get("ps") or 0
        if total is None or page_size <= 0:
            return False
        return current_page * page_size < total


class MetricsClient(BaseClient):
    """Client for the metrics endpoints."""

    def search(
        self,
        *,
        fields: list[str] | str | None = None,
        is_custom: bool | None = None,
        p: int | None = None,
        ps: int | None = None,
    ) -> SearchMetricsResponse:
        """Return one page of metric definitions.

        Raises:
            ValidationError: page size outside 1..500
        """
        if ps is not None and not 1 <= ps <= MAX_PAGE_SIZE:
            raise ValidationError(f"Page size must be between 1 and {MAX_PAGE_SIZE}", "ps")
        return self._get(
            "/api/metrics/search",
            {"f": fields, "isCustom": is_custom, "p": p, "ps": ps},
        )

    def search_all(self, *, is_custom: bool | None = None) -> Iterator[Metric]:
        """Iterate over every metric, requesting pages of 500."""
        pages = MetricPages(lambda params: self._get("/api/metrics/search", params))
        return pages.custom(is_custom).page_size(MAX_PAGE_SIZE).all()

    def types(self) -> dict:
        return self._get("/api/metrics/types")

    def domains(self) -> dict:
        warn_deprecated(
            "metrics.domains()",
            remove_version="7.7",
            reason="This endpoint has been deprecated and will be removed",
        )
        return self._get("/api/metrics/domains")
