"""Audit logs API (``/api/audit_logs``), Enterprise Edition and above.

Usage:
    if client.audit_logs.is_available():
        for entry in client.audit_logs.search_all(from_="2024-01-01"):
            print(entry["action"], entry["userLogin"])
"""

import logging
from typing import Iterator, TypedDict

from sonarqube_client.builders import V2PaginatedBuilder
from sonarqube_client.client import BaseClient
from sonarqube_client.errors import SonarQubeError

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 500


class AuditLog(TypedDict, total=False):
    id: str
    category: str
    action: str
    userLogin: str
    userName: str
    createdAt: str
    details: dict


class SearchAuditLogsResponse(TypedDict):
    auditLogs: list[AuditLog]
    page: dict


class AuditLogPages(V2PaginatedBuilder[SearchAuditLogsResponse, AuditLog]):
    items_key = "auditLogs"

    def matching(
        self,
        *,
        category: str | None = None,
        action: str | None = None,
        user_login: str | None = None,
        from_: str | None = None,
        to: str | None = None,
    ) -> "AuditLogPages":
        return self._set_params(category=category, action=action, userLogin=user_login, to=to, **{"from": from_})


class AuditLogsClient(BaseClient):

    def search(
        self,
        *,
        category: str | None = None,
        action: str | None = None,
        user_login: str | None = None,
        from_: str | None = None,
        to: str | None = None,
        page: int | None = None,
        page_size: int | None = None,
    ) -> SearchAuditLogsResponse:
        return self._get(
            "/api/audit_logs/search",
            {
                "category": category,
                "action": action,
                "userLogin": user_login,
                "from": from_,
                "to": to,
                "page": page,
                "pageSize": page_size,
            },
        )

    def search_all(
        self,
        *,
        category: str | None = None,
        action: str | None = None,
        user_login: str | None = None,
        from_: str | None = None,
        to: str | None = None,
    ) -> Iterator[AuditLog]:
        """Iterate over every matching entry, 500 per request."""
        pages = AuditLogPages(lambda params: self._get("/api/audit_logs/search", params))
        pages.matching(category=category, action=action, user_login=user_login, from_=from_, to=to)
        return pages.page_size(MAX_PAGE_SIZE).all()

    def download(self, from_: str | None = None, to: str | None = None, format_: str | None = None) -> bytes:
        """Download the logs as a file (``json`` or ``csv``)."""
        return self._get_bytes("/api/audit_logs/download", {"from": from_, "to": to, "format": format_})

    def is_available(self) -> bool:
        """Whether this server exposes audit logs."""
        try:
            self.search(page_size=1)
        except SonarQubeError as exc:
            logger.debug("Audit logs unavailable: %s", exc)
            return False
        return True
