"""Tests for sonarqube_client/resources/projects.py"""

from urllib.parse import parse_qs

import pytest

from sonarqube_client.auth import BearerTokenAuth
from sonarqube_client.errors import ValidationError
from sonarqube_client.resources.projects import ProjectsClient

BASE = "https://sonar.example.com"


@pytest.fixture
def client() -> ProjectsClient:
    return ProjectsClient(BASE, BearerTokenAuth("squ_test"))


def test_search_all(client, requests_mock):
    requests_mock.get(
        f"{BASE}/api/projects/search",
        [
            {"json": {"components": [{"key": "a"}], "paging": {"pageIndex": 1, "pageSize": 1, "total": 2}}},
            {"json": {"components": [{"key": "b"}], "paging": {"pageIndex": 2, "pageSize": 1, "total": 2}}},
        ],
    )
    assert [p["key"] for p in client.search().page_size(1).all()] == ["a", "b"]


def test_bulk_delete_needs_a_filter(client):
    with pytest.raises(ValidationError):
        client.bulk_delete().on_provisioned_only().execute()


def test_bulk_delete(client, requests_mock):
    adapter = requests_mock.post(f"{BASE}/api/projects/bulk_delete", status_code=204)
    client.bulk_delete().analyzed_before("2023-01-01").execute()
    assert parse_qs(adapter.last_request.text) == {"analyzedBefore": ["2023-01-01"]}


def test_create(client, requests_mock):
    adapter = requests_mock.post(f"{BASE}/api/projects/create", json={"project": {"key": "proj"}})
    client.create("My Project", "proj", main_branch="main", visibility="private")
    assert parse_qs(adapter.last_request.text) == {
        "name": ["My Project"],
        "project": ["proj"],
        "mainBranch": ["main"],
        "visibility": ["private"],
    }


def test_export_findings_branch_and_pr_exclusive(client):
    with pytest.raises(ValidationError):
        client.export_findings("proj", branch="main", pull_request="1")


def test_bulk_update_key_dry_run(client, requests_mock):
    adapter = requests_mock.post(f"{BASE}/api/projects/bulk_update_key", json={"keys": []})
    client.bulk_update_key("proj", "old", "new", dry_run=True)
    assert parse_qs(adapter.last_request.text)["dryRun"] == ["true"]
