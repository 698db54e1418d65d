"""Tests for sonarqube_client/auth.py"""

import pytest

from sonarqube_client.auth import BasicAuth, BearerTokenAuth, NoAuth, PasscodeAuth
from sonarqube_client.client import BaseClient

BASE = "https://sonar.example.com"


def _headers(auth, requests_mock) -> dict:
    adapter = requests_mock.get(f"{BASE}/api/server/version", text="10.8")
    BaseClient(BASE, auth)._get_text("/api/server/version")
    return adapter.last_request.headers


def test_bearer_header(requests_mock):
    headers = _headers(BearerTokenAuth("squ_abc"), requests_mock)
    assert headers["Authorization"] == "Bearer squ_abc"


def test_basic_header_with_token_as_username(requests_mock):
    headers = _headers(BasicAuth("squ_abc"), requests_mock)
    # base64("squ_abc:")
    assert headers["Authorization"] == "Basic c3F1X2FiYzo="


def test_basic_header_with_password(requests_mock):
    headers = _headers(BasicAuth("admin", "admin"), requests_mock)
    assert headers["Authorization"] == "Basic YWRtaW46YWRtaW4="


def test_passcode_header(requests_mock):
    headers = _headers(PasscodeAuth("s3cret"), requests_mock)
    assert headers["X-Sonar-Passcode"] == "s3cret"
    assert "Authorization" not in headers


def test_no_auth_sends_nothing(requests_mock):
    headers = _headers(NoAuth(), requests_mock)
    assert "Authorization" not in headers
    assert "X-Sonar-Passcode" not in headers


@pytest.mark.parametrize("factory", [BearerTokenAuth, BasicAuth, PasscodeAuth])
def test_empty_credentials_rejected(factory):
    with pytest.raises(ValueError):
        factory("")


def test_auth_types():
    assert BearerTokenAuth("t").auth_type == "bearer"
    assert BasicAuth("u").auth_type == "basic"
    assert PasscodeAuth("p").auth_type == "passcode"
    assert NoAuth().auth_type == "none"
