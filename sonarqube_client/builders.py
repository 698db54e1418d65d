"""Fluent request builders.

A builder accumulates optional parameters, then either issues one request
(``execute()``) or walks every page lazily (``all()``):

    page = client.issues.search().with_projects(["my-project"]).page_size(100).execute()

    for issue in client.issues.search().with_projects(["my-project"]).all():
        ...
"""

import logging
import math
import warnings
from typing import Any, Callable, Generic, Iterator, TypeVar

logger = logging.getLogger(__name__)

#: SonarQube refuses to page beyond this many results on search endpoints.
PAGINATION_WARNING_THRESHOLD = 10_000

ResponseT = TypeVar("ResponseT")
ItemT = TypeVar("ItemT")
B = TypeVar("B", bound="BaseBuilder")


class BaseBuilder(Generic[ResponseT]):
    """Accumulates request parameters and hands them to an executor."""

    def __init__(self, executor: Callable[[dict[str, Any]], ResponseT]) -> None:
        self._executor = executor
        self._params: dict[str, Any] = {}

    @property
    def params(self) -> dict[str, Any]:
        """A copy of the parameters collected so far."""
        return dict(self._params)

    def _set(self: B, key: str, value: Any) -> B:
        self._params[key] = value
        return self

    def _set_params(self: B, **params: Any) -> B:
        self._params.update(params)
        return self

    def validate(self) -> None:
        """Raise ``ValidationError`` when the parameters cannot be sent."""

    def execute(self) -> ResponseT:
        self.validate()
        return self._executor(dict(self._params))


class PaginatedBuilder(BaseBuilder[ResponseT], Generic[ResponseT, ItemT]):
    """Builder for v1 search endpoints paged with ``p`` / ``ps``.

    Subclasses name the response key holding the items in ``items_key``.
    """

    items_key: str = ""
    page_param = "p"
    page_size_param = "ps"

    def page(self: B, number: int) -> B:
        return self._set(self.page_param, number)

    def page_size(self: B, size: int) -> B:
        return self._set(self.page_size_param, size)

    def all(self) -> Iterator[ItemT]:
        """Yield every item across all pages, fetching pages on demand."""
        self.validate()
        current_page = 1
        warned = False

        while True:
            logger.debug("%s: fetching page %d", type(self).__name__, current_page)
            response = self._executor({**self._params, self.page_param: current_page})
            items = self._items(response)

            total = self._total(response)
            if total is not None and total > PAGINATION_WARNING_THRESHOLD and not warned:
                warnings.warn(
                    f"Result set exceeds {PAGINATION_WARNING_THRESHOLD} items (total={total}). "
                    "SonarQube caps pagination at 10 000, so some results may be missing. "
                    "Narrow the search with additional filters.",
                    UserWarning,
                    stacklevel=2,
                )
                warned = True

            yield from items
            if not items or not self._has_more(response, current_page):
                return
            current_page += 1

    def _items(self, response: Any) -> list[ItemT]:
        return (response or {}).get(self.items_key) or []

    def _total(self, response: Any) -> int | None:
        paging = (response or {}).get("paging")
        return paging.get("total") if paging else None

    def _has_more(self, response: Any, current_page: int) -> bool:
        response = response or {}
        paging = response.get("paging")
        if paging:
            page_size = paging.get("pageSize") or 0
            if page_size <= 0:
                return False
            return current_page < math.ceil(paging.get("total", 0) / page_size)
        if "isLastPage" in response:
            return not response["isLastPage"]
        return False


class V2PaginatedBuilder(PaginatedBuilder[ResponseT, ItemT]):
    """Builder for ``/api/v2`` endpoints paged with ``page`` / ``pageSize``.

    v2 responses describe paging in a ``page`` object carrying ``pageIndex``,
    ``pageSize`` and either ``total`` or ``totalPages``.
    """

    page_param = "page"
    page_size_param = "pageSize"

    def _total(self, response: Any) -> int | None:
        page = (response or {}).get("page")
        return page.get("total") if page else None

    def _has_more(self, response: Any, current_page: int) -> bool:
        page = (response or {}).get("page")
        if not page:
            return False
        if "totalPages" in page:
            return current_page < page["totalPages"]
        page_size = page.get("pageSize") or 0
        if page_size <= 0:
            return False
        return current_page * page_size < page.get("total", 0)
