"""Tests for sonarqube_client/resources/authorizations.py"""

import pytest

from sonarqube_client.auth import BearerTokenAuth
from sonarqube_client.resources.authorizations import AuthorizationsClient

BASE = "https://sonar.example.com"
GROUPS = f"{BASE}/api/v2/authorizations/groups"
MEMBERSHIPS = f"{BASE}/api/v2/authorizations/group-memberships"


@pytest.fixture
def client() -> AuthorizationsClient:
    return AuthorizationsClient(BASE, BearerTokenAuth("squ_test"))


def test_search_groups_pages(client, requests_mock):
    adapter = requests_mock.get(
        GROUPS,
        [
            {"json": {"groups": [{"id": "g1"}], "page": {"pageIndex": 1, "pageSize": 1, "total": 2}}},
            {"json": {"groups": [{"id": "g2"}], "page": {"pageIndex": 2, "pageSize": 1, "total": 2}}},
        ],
    )
    ids = [g["id"] for g in client.search_groups().query("dev").page_size(1).all()]
    assert ids == ["g1", "g2"]
    assert adapter.last_request.qs == {"q": ["dev"], "pagesize": ["1"], "page": ["2"]}


def test_create_group_posts_json(client, requests_mock):
    adapter = requests_mock.post(GROUPS, json={"id": "g1", "name": "devs"})
    assert client.create_group("devs")["id"] == "g1"
    assert adapter.last_request.json() == {"name": "devs"}


def test_update_group_sends_only_set_fields(client, requests_mock):
    adapter = requests_mock.patch(f"{GROUPS}/g1", json={"id": "g1"})
    client.update_group("g1", description="Developers")
    assert adapter.last_request.json() == {"description": "Developers"}
    assert adapter.last_request.headers["Content-Type"] == "application/merge-patch+json"


def test_delete_group(client, requests_mock):
    adapter = requests_mock.delete(f"{GROUPS}/g1", status_code=204)
    client.delete_group("g1")
    assert adapter.called


def test_memberships(client, requests_mock):
    add = requests_mock.post(MEMBERSHIPS, json={"id": "m1", "groupId": "g1", "userId": "u1"})
    remove = requests_mock.delete(f"{MEMBERSHIPS}/m1", status_code=204)
    membership = client.add_group_membership("g1", "u1")
    client.remove_group_membership(membership["id"])
    assert add.last_request.json() == {"groupId": "g1", "userId": "u1"}
    assert remove.called
