"""Tests for sonarqube_client/resources/applications.py"""

from urllib.parse import parse_qs, parse_qsl

import pytest

from sonarqube_client.auth import BearerTokenAuth
from sonarqube_client.errors import ValidationError
from sonarqube_client.resources.applications import ApplicationsClient

BASE = "https://sonar.example.com"


@pytest.fixture
def client() -> ApplicationsClient:
    return ApplicationsClient(BASE, BearerTokenAuth("squ_test"))


def test_create(client, requests_mock):
    adapter = requests_mock.post(f"{BASE}/api/applications/create", json={"application": {"key": "app"}})
    assert client.create("My App", key="app")["application"]["key"] == "app"
    assert parse_qs(adapter.last_request.text) == {"name": ["My App"], "key": ["app"]}


def test_create_branch_repeats_project_fields(client, requests_mock):
    adapter = requests_mock.post(f"{BASE}/api/applications/create_branch", status_code=204)
    client.create_branch("app", "release", ["p1", "p2"], ["release-1", ""])
    assert parse_qsl(adapter.last_request.text, keep_blank_values=True) == [
        ("application", "app"),
        ("branch", "release"),
        ("project", "p1"),
        ("projectBranch", "release-1"),
        ("project", "p2"),
        ("projectBranch", ""),
    ]


def test_update_branch_sends_new_name(client, requests_mock):
    adapter = requests_mock.post(f"{BASE}/api/applications/update_branch", status_code=204)
    client.update_branch("app", "release", "release-2", ["p1"], ["r2"])
    assert ("name", "release-2") in parse_qsl(adapter.last_request.text)


def test_branch_lists_must_match(client):
    with pytest.raises(ValidationError):
        client.create_branch("app", "release", ["p1", "p2"], ["r1"])


def test_set_tags(client, requests_mock):
    adapter = requests_mock.post(f"{BASE}/api/applications/set_tags", status_code=204)
    client.set_tags("app", ["finance", "core"])
    assert parse_qs(adapter.last_request.text)["tags"] == ["finance,core"]
