"""Tests for sonarqube_client/config.py"""

import textwrap
from pathlib import Path

import pytest

from sonarqube_client.auth import BasicAuth, BearerTokenAuth, NoAuth, PasscodeAuth
from sonarqube_client.config import (
    Config,
    ConfigError,
    ProjectNotFoundError,
    generate_template,
    load,
)
from sonarqube_client.sonarqube import SonarQubeClient


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SONAR_URL", "SONAR_TOKEN", "SONAR_ORGANIZATION"):
        monkeypatch.delenv(name, raising=False)


def write_config(tmp_path: Path, content: str) -> Path:
    p = tmp_path / "sonar-config.yaml"
    p.write_text(textwrap.dedent(content), encoding="utf-8")
    return p


VALID_YAML = """\
    server:
      url: "https://sonar.example.com"
      token: "squ_abc123"
      organization: "acme"
      timeout: 10
    projects:
      api: "com.acme.api"
      web: "com.acme.web"
    """


# ---------------------------------------------------------------------------
# load(): happy path
# ---------------------------------------------------------------------------

def test_load_valid_config(tmp_path):
    p = write_config(tmp_path, VALID_YAML)
    config = load(str(p))
    assert config.url == "https://sonar.example.com"
    assert config.token == "squ_abc123"
    assert config.organization == "acme"
    assert config.timeout == 10
    assert config.projects == {"api": "com.acme.api", "web": "com.acme.web"}
    assert config.auth_type == "bearer"


def test_load_without_token_is_anonymous(tmp_path):
    p = write_config(tmp_path, """\
        server:
          url: "https://sonar.example.com"
        """)
    config = load(str(p))
    assert config.auth_type == "none"
    assert config.projects == {}
    assert isinstance(config.build_auth(), NoAuth)


def test_load_basic_auth(tmp_path):
    p = write_config(tmp_path, """\
        server:
          url: "https://sonar.example.com"
          auth:
            type: basic
            username: "admin"
            password: "secret"
        """)
    auth = load(str(p)).build_auth()
    assert isinstance(auth, BasicAuth)
    assert (auth.username, auth.password) == ("admin", "secret")


def test_load_passcode_auth(tmp_path):
    p = write_config(tmp_path, """\
        server:
          url: "https://sonar.example.com"
          auth:
            type: passcode
            passcode: "pc"
        """)
    auth = load(str(p)).build_auth()
    assert isinstance(auth, PasscodeAuth)
    assert auth.passcode == "pc"


# ---------------------------------------------------------------------------
# load(): invalid files
# ---------------------------------------------------------------------------

def test_load_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load(str(tmp_path / "no-such-file.yaml"))


def test_load_malformed_yaml(tmp_path):
    p = write_config(tmp_path, "server: [unclosed\n")
    with pytest.raises(ConfigError, match="Failed to parse"):
        load(str(p))


def test_load_non_mapping(tmp_path):
    p = write_config(tmp_path, "- just\n- a list\n")
    with pytest.raises(ConfigError, match="mapping"):
        load(str(p))


def test_load_missing_url(tmp_path):
    p = write_config(tmp_path, """\
        server:
          token: "squ_abc123"
        """)
    with pytest.raises(ConfigError, match="server.url"):
        load(str(p))


def test_load_bearer_without_token(tmp_path):
    p = write_config(tmp_path, """\
        server:
          url: "https://sonar.example.com"
          auth:
            type: bearer
        """)
    with pytest.raises(ConfigError, match="server.token"):
        load(str(p))


def test_load_unknown_auth_type(tmp_path):
    p = write_config(tmp_path, """\
        server:
          url: "https://sonar.example.com"
          auth:
            type: kerberos
        """)
    with pytest.raises(ConfigError, match="kerberos"):
        load(str(p))


def test_load_basic_without_username(tmp_path):
    p = write_config(tmp_path, """\
        server:
          url: "https://sonar.example.com"
          auth:
            type: basic
        """)
    with pytest.raises(ConfigError, match="username"):
        load(str(p))


def test_load_bad_timeout(tmp_path):
    p = write_config(tmp_path, """\
        server:
          url: "https://sonar.example.com"
          timeout: soon
        """)
    with pytest.raises(ConfigError, match="timeout"):
        load(str(p))


def test_load_negative_timeout(tmp_path):
    p = write_config(tmp_path, """\
        server:
          url: "https://sonar.example.com"
          timeout: -1
        """)
    with pytest.raises(ConfigError, match="positive"):
        load(str(p))


# ---------------------------------------------------------------------------
# load(): environment variable overrides
# ---------------------------------------------------------------------------

def test_env_overrides_config(tmp_path, monkeypatch):
    p = write_config(tmp_path, VALID_YAML)
    monkeypatch.setenv("SONAR_URL", "https://override.example.com")
    monkeypatch.setenv("SONAR_TOKEN", "squ_override")
    monkeypatch.setenv("SONAR_ORGANIZATION", "other-org")
    config = load(str(p))
    assert config.url == "https://override.example.com"
    assert config.token == "squ_override"
    assert config.organization == "other-org"


def test_env_vars_replace_missing_file(tmp_path, monkeypatch):
    monkeypatch.setenv("SONAR_URL", "https://sonar.example.com")
    monkeypatch.setenv("SONAR_TOKEN", "squ_from_env")
    config = load(str(tmp_path / "absent.yaml"))
    assert config.url == "https://sonar.example.com"
    assert config.token == "squ_from_env"


# ---------------------------------------------------------------------------
# resolve_project() / create_client()
# ---------------------------------------------------------------------------

def test_resolve_known_alias():
    config = Config(url="u", token="t", projects={"api": "com.acme.api"})
    assert config.resolve_project("api") == "com.acme.api"


def test_resolve_raw_key_fallback():
    config = Config(url="u", token="t", projects={"api": "com.acme.api"})
    assert config.resolve_project("com.acme.api") == "com.acme.api"


def test_resolve_without_mapping_passes_through():
    assert Config(url="u").resolve_project("anything") == "anything"


def test_resolve_unknown_raises():
    config = Config(url="u", token="t", projects={"api": "com.acme.api"})
    with pytest.raises(ProjectNotFoundError, match="unknown-project"):
        config.resolve_project("unknown-project")


def test_create_client():
    client = Config(url="https://sonar.example.com/", token="t", organization="acme").create_client()
    assert isinstance(client, SonarQubeClient)
    assert isinstance(client.auth, BearerTokenAuth)
    assert client.base_url == "https://sonar.example.com"
    assert client.issues.organization == "acme"


# ---------------------------------------------------------------------------
# generate_template()
# ---------------------------------------------------------------------------

def test_generate_template_creates_loadable_file(tmp_path):
    out = tmp_path / "sonar-config.yaml"
    generate_template(str(out))
    content = out.read_text()
    assert "server:" in content
    assert "projects:" in content
    assert load(str(out)).projects["my-project"] == "com.example.my-project"


def test_generate_template_refuses_to_overwrite(tmp_path):
    out = tmp_path / "sonar-config.yaml"
    out.write_text("existing content")
    with pytest.raises(ConfigError, match="already exists"):
        generate_template(str(out))
