"""Tests for new code periods and project links"""

from urllib.parse import parse_qs

import pytest

from sonarqube_client.auth import BearerTokenAuth
from sonarqube_client.errors import ValidationError
from sonarqube_client.resources.new_code_periods import NewCodePeriodsClient
from sonarqube_client.resources.project_links import ProjectLinksClient

BASE = "https://sonar.example.com"


@pytest.fixture
def periods() -> NewCodePeriodsClient:
    return NewCodePeriodsClient(BASE, BearerTokenAuth("squ_test"))


@pytest.fixture
def links() -> ProjectLinksClient:
    return ProjectLinksClient(BASE, BearerTokenAuth("squ_test"))


# ---------------------------------------------------------------------------
# New code periods
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("period_type", ["NUMBER_OF_DAYS", "REFERENCE_BRANCH", "SPECIFIC_ANALYSIS"])
def test_set_requires_value(periods, period_type):
    with pytest.raises(ValidationError, match=period_type):
        periods.set(period_type, project="proj")


def test_set_previous_version(periods, requests_mock):
    adapter = requests_mock.post(f"{BASE}/api/new_code_periods/set", status_code=204)
    periods.set("PREVIOUS_VERSION", project="proj")
    assert parse_qs(adapter.last_request.text) == {"type": ["PREVIOUS_VERSION"], "project": ["proj"]}


def test_set_number_of_days(periods, requests_mock):
    adapter = requests_mock.post(f"{BASE}/api/new_code_periods/set", status_code=204)
    periods.set(type_="NUMBER_OF_DAYS", value="30")
    assert parse_qs(adapter.last_request.text) == {"type": ["NUMBER_OF_DAYS"], "value": ["30"]}


def test_show_instance_default(periods, requests_mock):
    adapter = requests_mock.get(f"{BASE}/api/new_code_periods/show", json={"type": "PREVIOUS_VERSION"})
    assert periods.show()["type"] == "PREVIOUS_VERSION"
    assert adapter.last_request.qs == {}


# ---------------------------------------------------------------------------
# Project links
# ---------------------------------------------------------------------------

def test_link_needs_exactly_one_project_selector(links):
    with pytest.raises(ValidationError):
        links.search()
    with pytest.raises(ValidationError):
        links.search(project_id="AU1", project_key="proj")


def test_create_link(links, requests_mock):
    adapter = requests_mock.post(f"{BASE}/api/project_links/create", json={"link": {"id": "1"}})
    links.create("Docs", "https://docs.example.com", project_key="proj")
    assert parse_qs(adapter.last_request.text) == {
        "name": ["Docs"],
        "url": ["https://docs.example.com"],
        "projectKey": ["proj"],
    }
