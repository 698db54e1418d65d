"""Tests for sonarqube_client/resources/audit_logs.py"""

import pytest

from sonarqube_client.auth import BearerTokenAuth
from sonarqube_client.resources.audit_logs import AuditLogsClient

BASE = "https://sonar.example.com"


@pytest.fixture
def client() -> AuditLogsClient:
    return AuditLogsClient(BASE, BearerTokenAuth("squ_test"))


def test_search_all_stops_at_total_pages(client, requests_mock):
    adapter = requests_mock.get(
        f"{BASE}/api/audit_logs/search",
        [
            {"json": {"auditLogs": [{"id": "1"}], "page": {"pageIndex": 1, "pageSize": 500, "totalPages": 2}}},
            {"json": {"auditLogs": [{"id": "2"}], "page": {"pageIndex": 2, "pageSize": 500, "totalPages": 2}}},
        ],
    )
    assert [e["id"] for e in client.search_all(category="USER", from_="2024-01-01")] == ["1", "2"]
    assert adapter.last_request.qs == {
        "category": ["user"],
        "from": ["2024-01-01"],
        "page": ["2"],
        "pagesize": ["500"],
    }


def test_search_all_stops_without_page_object(client, requests_mock):
    adapter = requests_mock.get(f"{BASE}/api/audit_logs/search", json={"auditLogs": [{"id": "1"}]})
    assert [e["id"] for e in client.search_all(user_login="admin")] == ["1"]
    assert adapter.call_count == 1
    assert adapter.last_request.qs == {"userlogin": ["admin"], "page": ["1"], "pagesize": ["500"]}


def test_download_returns_bytes(client, requests_mock):
    requests_mock.get(f"{BASE}/api/audit_logs/download", content=b"id,action\n")
    assert client.download(format_="csv") == b"id,action\n"


def test_is_available(client, requests_mock):
    requests_mock.get(f"{BASE}/api/audit_logs/search", json={"auditLogs": [], "page": {"totalPages": 0}})
    assert client.is_available() is True


def test_is_not_available_on_error(client, requests_mock):
    requests_mock.get(f"{BASE}/api/audit_logs/search", status_code=404)
    assert client.is_available() is False
