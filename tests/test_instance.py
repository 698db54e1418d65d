"""Tests for sonarqube_client/instance.py"""

import pytest

from sonarqube_client import SonarQubeClient
from sonarqube_client.instance import analyze_instance, is_version_at_least, parse_version

BASE = "https://sonar.example.com"


@pytest.fixture
def client() -> SonarQubeClient:
    return SonarQubeClient(BASE, "squ_test")


# ---------------------------------------------------------------------------
# Version helpers
# ---------------------------------------------------------------------------

def test_parse_version():
    assert parse_version("10.8.0.100206") == (10, 8, 0, 100206)
    assert parse_version("9.9-SNAPSHOT") == (9, 9)


@pytest.mark.parametrize(
    "version, minimum, expected",
    [
        ("10.6", "10.6", True),
        ("10.6.0.1", "10.6", True),
        ("10.5.9", "10.6", False),
        ("2025.1", "10.7", True),
        ("8.0", "8.0.0", True),
    ],
)
def test_is_version_at_least(version, minimum, expected):
    assert is_version_at_least(version, minimum) is expected


# ---------------------------------------------------------------------------
# analyze_instance()
# ---------------------------------------------------------------------------

def test_community_server(client, requests_mock):
    requests_mock.get(f"{BASE}/api/server/version", text="10.4.1.88267\n")
    requests_mock.get(f"{BASE}/api/editions/status", status_code=404)

    report = analyze_instance(client)

    assert report["version"] == "10.4.1.88267"
    assert report["edition"] == "community"
    assert report["apis"]["analysis_v2"] is True
    assert report["apis"]["v2_api"] is False
    assert report["apis"]["applications"] is False
    assert "fix_suggestions" in report["unavailable"]
    assert "audit_logs" in report["unavailable"]


def test_enterprise_server_with_audit_logs(client, requests_mock):
    requests_mock.get(f"{BASE}/api/server/version", text="10.8.0.100206")
    requests_mock.get(f"{BASE}/api/editions/status", json={"currentEditionKey": "Enterprise"})
    requests_mock.get(f"{BASE}/api/audit_logs/search", json={"audit_logs": [], "page": {"total": 0}})

    report = analyze_instance(client)

    assert report["edition"] == "enterprise"
    assert report["apis"]["portfolios"] is True
    assert report["apis"]["audit_logs"] is True
    assert report["unavailable"] == []
