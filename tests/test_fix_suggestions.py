"""Tests for sonarqube_client/resources/fix_suggestions.py"""

import pytest

from sonarqube_client.auth import BearerTokenAuth
from sonarqube_client.errors import ValidationError
from sonarqube_client.resources.fix_suggestions import FixSuggestionsClient

BASE = "https://sonar.example.com"
ENDPOINT = f"{BASE}/api/v2/fix-suggestions"


@pytest.fixture
def client() -> FixSuggestionsClient:
    return FixSuggestionsClient(BASE, BearerTokenAuth("squ_test"))


# ---------------------------------------------------------------------------
# Availability
# ---------------------------------------------------------------------------

def test_get_issue_availability(client, requests_mock):
    adapter = requests_mock.get(f"{ENDPOINT}/issues", json={"enabled": True})
    assert client.get_issue_availability("AX1", project_key="proj")["enabled"] is True
    assert adapter.last_request.qs == {"issuekey": ["ax1"], "projectkey": ["proj"]}


def test_check_availability_requires_issue(client):
    with pytest.raises(ValidationError, match="required"):
        client.check_availability().execute()


def test_check_availability_rejects_blank_issue(client):
    with pytest.raises(ValidationError, match="empty"):
        client.check_availability().with_issue("  ").execute()


def test_check_availability_branch_and_pr_exclusive(client):
    with pytest.raises(ValidationError):
        client.check_availability().with_issue("AX1").on_branch("main").on_pull_request("12").execute()


# ---------------------------------------------------------------------------
# Suggestions
# ---------------------------------------------------------------------------

def test_request_suggestions_sends_defaults(client, requests_mock):
    adapter = requests_mock.post(f"{ENDPOINT}/ai-suggestions", json={"id": "s1", "issueId": "AX1"})
    response = client.request_suggestions().with_issue("AX1").execute()
    assert response["id"] == "s1"
    assert adapter.last_request.json() == {
        "issueKey": "AX1",
        "includeContext": True,
        "maxAlternatives": 3,
        "fixStyle": "comprehensive",
        "priority": "normal",
    }


def test_request_suggestions_merges_language_preferences(client, requests_mock):
    adapter = requests_mock.post(f"{ENDPOINT}/ai-suggestions", json={})
    (
        client.request_suggestions()
        .with_issue("AX1")
        .with_language_preferences({"java": {"version": "17"}})
        .with_language_preferences({"python": {"version": "3.12"}})
        .with_fix_style("minimal")
        .execute()
    )
    body = adapter.last_request.json()
    assert body["languagePreferences"] == {"java": {"version": "17"}, "python": {"version": "3.12"}}
    assert body["fixStyle"] == "minimal"


@pytest.mark.parametrize("count", [0, 11])
def test_max_alternatives_bounds(client, count):
    with pytest.raises(ValidationError):
        client.request_suggestions().with_max_alternatives(count)


def test_custom_context_rules(client):
    with pytest.raises(ValidationError, match="empty"):
        client.request_suggestions().with_custom_context("   ")
    builder = client.request_suggestions().with_issue("AX1").with_custom_context("x" * 1001)
    with pytest.raises(ValidationError, match="1000"):
        builder.execute()


def test_request_ai_suggestions_passes_options(client, requests_mock):
    adapter = requests_mock.post(f"{ENDPOINT}/ai-suggestions", json={})
    client.request_ai_suggestions("AX1", maxAlternatives=2)
    assert adapter.last_request.json() == {"issueKey": "AX1", "maxAlternatives": 2}
