"""Tests for sonarqube_client/resources/webhooks.py"""

from urllib.parse import parse_qs

import pytest

from sonarqube_client.auth import BearerTokenAuth
from sonarqube_client.errors import ValidationError
from sonarqube_client.resources.webhooks import WebhooksClient

BASE = "https://sonar.example.com"


@pytest.fixture
def client() -> WebhooksClient:
    return WebhooksClient(BASE, BearerTokenAuth("squ_test"), organization="acme")


def test_create_trims_and_drops_blank_values(client, requests_mock):
    adapter = requests_mock.post(f"{BASE}/api/webhooks/create", json={"webhook": {"key": "wh1"}})
    response = client.create("  ci  ", "https://ci.example.com/hook ", project=" ", secret=" s3cret ")
    assert response["webhook"]["key"] == "wh1"
    assert parse_qs(adapter.last_request.text) == {
        "name": ["ci"],
        "organization": ["acme"],
        "url": ["https://ci.example.com/hook"],
        "secret": ["s3cret"],
    }


def test_create_requires_name(client):
    with pytest.raises(ValidationError, match="name"):
        client.create(" ", "https://ci.example.com/hook")


def test_create_requires_organization(requests_mock):
    client = WebhooksClient(BASE, BearerTokenAuth("squ_test"))
    with pytest.raises(ValidationError, match="organization"):
        client.create("ci", "https://ci.example.com/hook")


def test_update_blank_secret_clears_it(client, requests_mock):
    adapter = requests_mock.post(f"{BASE}/api/webhooks/update", status_code=204)
    client.update("wh1", "ci", "https://ci.example.com/hook", secret="  ")
    body = parse_qs(adapter.last_request.text, keep_blank_values=True)
    assert body["secret"] == [""]


def test_update_without_secret_leaves_it(client, requests_mock):
    adapter = requests_mock.post(f"{BASE}/api/webhooks/update", status_code=204)
    client.update("wh1", "ci", "https://ci.example.com/hook")
    assert "secret" not in parse_qs(adapter.last_request.text, keep_blank_values=True)


def test_list_uses_client_organization(client, requests_mock):
    adapter = requests_mock.get(f"{BASE}/api/webhooks/list", json={"webhooks": []})
    client.list(project="proj")
    assert adapter.last_request.qs == {"organization": ["acme"], "project": ["proj"]}


def test_deliveries_pages(client, requests_mock):
    requests_mock.get(
        f"{BASE}/api/webhooks/deliveries",
        json={"deliveries": [{"id": "d1"}], "paging": {"pageIndex": 1, "pageSize": 10, "total": 1}},
    )
    assert [d["id"] for d in client.deliveries().webhook("wh1").all()] == ["d1"]


def test_delivery_requires_id(client):
    with pytest.raises(ValidationError):
        client.delivery("")
