"""Tests for sonarqube_client/client.py"""

import pytest
import requests

from sonarqube_client.auth import BearerTokenAuth
from sonarqube_client.client import BaseClient, encode_params, encode_value
from sonarqube_client.errors import (
    ApiError,
    AuthenticationError,
    AuthorizationError,
    IndexingInProgressError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
    SonarQubeError,
)

BASE = "https://sonar.example.com"
JSON = {"Content-Type": "application/json"}


@pytest.fixture
def client() -> BaseClient:
    return BaseClient(f"{BASE}/", BearerTokenAuth("squ_test"), organization="my-org")


# ---------------------------------------------------------------------------
# Parameter encoding
# ---------------------------------------------------------------------------

def test_encode_value_booleans():
    assert encode_value(True) == "true"
    assert encode_value(False) == "false"


def test_encode_value_joins_lists():
    assert encode_value(["BUG", "VULNERABILITY"]) == "BUG,VULNERABILITY"


def test_encode_params_drops_unset_values():
    encoded = encode_params({"a": None, "b": [], "c": 0, "d": "x", "e": False})
    assert encoded == {"c": "0", "d": "x", "e": "false"}


def test_encode_params_accepts_none():
    assert encode_params(None) == {}


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

def test_trailing_slash_is_stripped(client):
    assert client.base_url == BASE


def test_get_returns_parsed_json(client, requests_mock):
    requests_mock.get(f"{BASE}/api/metrics/types", json=["INT", "FLOAT"])
    assert client._get("/api/metrics/types") == ["INT", "FLOAT"]


def test_get_sends_bearer_header_and_accept(client, requests_mock):
    adapter = requests_mock.get(f"{BASE}/api/metrics/types", json=[])
    client._get("/api/metrics/types")
    assert adapter.last_request.headers["Authorization"] == "Bearer squ_test"
    assert adapter.last_request.headers["Accept"] == "application/json"


def test_get_encodes_query_parameters(client, requests_mock):
    adapter = requests_mock.get(f"{BASE}/api/issues/search", json={})
    client._get("/api/issues/search", {"types": ["BUG", "CODE_SMELL"], "resolved": False, "assignees": None})
    assert adapter.last_request.qs == {"types": ["bug,code_smell"], "resolved": ["false"]}


def test_empty_body_returns_none(client, requests_mock):
    requests_mock.post(f"{BASE}/api/favorites/add", status_code=204)
    assert client._post("/api/favorites/add", {"component": "p"}) is None


def test_post_sends_form_body(client, requests_mock):
    adapter = requests_mock.post(f"{BASE}/api/issues/add_comment", json={})
    client._post("/api/issues/add_comment", {"issue": "AX1", "text": "hi there", "isFeedback": None})
    assert adapter.last_request.text == "issue=AX1&text=hi+there"


def test_post_sends_repeated_fields(client, requests_mock):
    adapter = requests_mock.post(f"{BASE}/api/settings/set", status_code=204)
    client._post("/api/settings/set", [("key", "k"), ("values", "a"), ("values", "b")])
    assert adapter.last_request.text == "key=k&values=a&values=b"


def test_post_json_and_patch(client, requests_mock):
    post = requests_mock.post(f"{BASE}/api/v2/authorizations/groups", json={"id": "1"})
    patch = requests_mock.patch(f"{BASE}/api/v2/authorizations/groups/1", json={"id": "1"})
    client._post_json("/api/v2/authorizations/groups", {"name": "devs"})
    client._patch_json("/api/v2/authorizations/groups/1", {"name": "ops"})
    assert post.last_request.json() == {"name": "devs"}
    assert patch.last_request.headers["Content-Type"] == "application/merge-patch+json"
    assert patch.last_request.json() == {"name": "ops"}


def test_get_text_and_bytes(client, requests_mock):
    requests_mock.get(f"{BASE}/api/server/version", text="10.8.0.100206")
    requests_mock.get(f"{BASE}/api/analysis_cache/get", content=b"\x1f\x8b")
    assert client._get_text("/api/server/version") == "10.8.0.100206"
    assert client._get_bytes("/api/analysis_cache/get") == b"\x1f\x8b"


def test_with_organization_keeps_explicit_value(client):
    assert client._with_organization({}) == {"organization": "my-org"}
    assert client._with_organization({"organization": "other"}) == {"organization": "other"}


# ---------------------------------------------------------------------------
# HTTP error codes
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "status, error_class",
    [
        (400, ApiError),
        (401, AuthenticationError),
        (403, AuthorizationError),
        (404, NotFoundError),
        (429, RateLimitError),
        (500, ServerError),
        (503, ServerError),
    ],
)
def test_status_maps_to_error(client, requests_mock, status, error_class):
    requests_mock.get(f"{BASE}/api/projects/search", status_code=status)
    with pytest.raises(error_class) as info:
        client._get("/api/projects/search")
    assert info.value.status_code == status


def test_error_message_from_errors_array(client, requests_mock):
    requests_mock.post(
        f"{BASE}/api/projects/create",
        status_code=400,
        json={"errors": [{"msg": "Key too long"}, {"msg": "Name missing"}]},
        headers=JSON,
    )
    with pytest.raises(ApiError, match="Key too long, Name missing"):
        client._post("/api/projects/create", {"project": "x"})


def test_error_message_from_v2_error_object(client, requests_mock):
    requests_mock.post(
        f"{BASE}/api/v2/authorizations/groups",
        status_code=409,
        json={"error": {"message": "Group 'devs' already exists"}},
        headers=JSON,
    )
    with pytest.raises(ApiError, match="Group 'devs' already exists"):
        client._post_json("/api/v2/authorizations/groups", {"name": "devs"})


def test_error_message_falls_back_to_reason(client, requests_mock):
    requests_mock.get(f"{BASE}/api/projects/search", status_code=400, text="<html>oops</html>")
    with pytest.raises(ApiError) as info:
        client._get("/api/projects/search")
    assert info.value.message == "Bad Request"


def test_error_message_falls_back_to_status(client, requests_mock):
    requests_mock.get(f"{BASE}/api/projects/search", status_code=499)
    with pytest.raises(ApiError) as info:
        client._get("/api/projects/search")
    assert info.value.message == "HTTP 499"


@pytest.mark.parametrize(
    "status, body, error_class, message",
    [
        (400, {"errors": ["boom"]}, ApiError, "Bad Request"),
        (500, {"errors": "boom"}, ServerError, "Internal Server Error"),
        (400, {"errors": [{"code": "x"}]}, ApiError, "Bad Request"),
    ],
)
def test_unexpected_error_body_still_maps_to_error(client, requests_mock, status, body, error_class, message):
    requests_mock.get(f"{BASE}/api/projects/search", status_code=status, json=body, headers=JSON)
    with pytest.raises(error_class) as info:
        client._get("/api/projects/search")
    assert info.value.message == message


@pytest.mark.parametrize("status, error_class", [(400, ApiError), (502, ServerError)])
def test_generic_errors_carry_headers(client, requests_mock, status, error_class):
    requests_mock.get(
        f"{BASE}/api/projects/search",
        status_code=status,
        headers={"X-Request-Id": "abc123"},
    )
    with pytest.raises(error_class) as info:
        client._get("/api/projects/search")
    assert info.value.details["headers"]["X-Request-Id"] == "abc123"


def test_indexing_in_progress(client, requests_mock):
    requests_mock.get(
        f"{BASE}/api/issues/search",
        status_code=503,
        json={"errors": [{"msg": "Issues index is not ready, indexing in progress"}]},
        headers=JSON,
    )
    with pytest.raises(IndexingInProgressError) as info:
        client._get("/api/issues/search")
    assert info.value.code == "INDEXING_IN_PROGRESS"


def test_rate_limit_reads_retry_after(client, requests_mock):
    requests_mock.get(f"{BASE}/api/issues/search", status_code=429, headers={"Retry-After": "30"})
    with pytest.raises(RateLimitError) as info:
        client._get("/api/issues/search")
    assert info.value.retry_after == 30


# ---------------------------------------------------------------------------
# Network errors
# ---------------------------------------------------------------------------

def test_timeout_raises_timeout_error(client, requests_mock):
    requests_mock.get(f"{BASE}/api/issues/search", exc=requests.exceptions.Timeout)
    with pytest.raises(RequestTimeoutError, match="timed out"):
        client._get("/api/issues/search")


def test_connection_error_raises_network_error(client, requests_mock):
    requests_mock.get(f"{BASE}/api/issues/search", exc=requests.exceptions.ConnectionError)
    with pytest.raises(NetworkError, match="Unable to reach") as info:
        client._get("/api/issues/search")
    assert isinstance(info.value, SonarQubeError)
    assert info.value.code == "NETWORK_ERROR"
