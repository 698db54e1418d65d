"""Tests for sonarqube_client/sonarqube.py"""

import pytest
import requests

from sonarqube_client import SonarQubeClient
from sonarqube_client.auth import BasicAuth, BearerTokenAuth, NoAuth, PasscodeAuth
from sonarqube_client.resources.issues import IssuesClient
from sonarqube_client.resources.webservices import WebservicesClient

BASE = "https://sonar.example.com"


def test_token_becomes_bearer_auth():
    client = SonarQubeClient(BASE, "squ_abc")
    assert isinstance(client.auth, BearerTokenAuth)


def test_no_token_is_anonymous():
    assert isinstance(SonarQubeClient(BASE).auth, NoAuth)


@pytest.mark.parametrize(
    "factory, args, auth_class",
    [
        (SonarQubeClient.with_token, ("squ_abc",), BearerTokenAuth),
        (SonarQubeClient.with_basic_auth, ("admin", "admin"), BasicAuth),
        (SonarQubeClient.with_passcode, ("pc",), PasscodeAuth),
        (SonarQubeClient.with_auth, (NoAuth(),), NoAuth),
    ],
)
def test_factories(factory, args, auth_class):
    client = factory(BASE, *args, organization="acme")
    assert isinstance(client.auth, auth_class)
    assert client.organization == "acme"


def test_resource_clients_share_session_and_settings():
    session = requests.Session()
    client = SonarQubeClient(f"{BASE}/", "squ_abc", organization="acme", session=session, timeout=5)
    assert isinstance(client.issues, IssuesClient)
    assert isinstance(client.webservices, WebservicesClient)
    for resource in (client.issues, client.projects, client.quality_gates, client.users):
        assert resource._session is session
        assert resource.auth is client.auth
        assert resource.organization == "acme"
        assert resource.base_url == BASE
        assert resource._timeout == 5


def test_requests_use_the_configured_auth(requests_mock):
    adapter = requests_mock.get(f"{BASE}/api/server/version", text="10.8.0.1")
    with SonarQubeClient.with_passcode(BASE, "pc") as client:
        assert client.server.version() == "10.8.0.1"
    assert adapter.last_request.headers["X-Sonar-Passcode"] == "pc"
