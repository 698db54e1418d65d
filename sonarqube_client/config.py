"""Configuration loading and validation for the command line.

Usage:
    config = load("sonar-config.yaml")       # raises ConfigError on bad config
    key = config.resolve_project("api")      # returns "com.example.api"
    client = config.create_client()
    generate_template("sonar-config.yaml")   # writes example file to disk
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from requests.auth import AuthBase

from sonarqube_client.auth import BasicAuth, BearerTokenAuth, NoAuth, PasscodeAuth
from sonarqube_client.client import DEFAULT_TIMEOUT
from sonarqube_client.sonarqube import SonarQubeClient

AUTH_TYPES = ("bearer", "basic", "passcode", "none")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ConfigError(Exception):
    """Raised when the configuration is missing or invalid."""


class ProjectNotFoundError(ConfigError):
    """Raised when a project alias is not found in the config."""


# ---------------------------------------------------------------------------
# Config dataclass
# ---------------------------------------------------------------------------

@dataclass
class Config:
    url: str
    token: str = ""
    organization: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    auth: dict[str, Any] = field(default_factory=dict)
    projects: dict[str, str] = field(default_factory=dict)

    @property
    def auth_type(self) -> str:
        if self.auth.get("type"):
            return str(self.auth["type"]).lower()
        return "bearer" if self.token else "none"

    def resolve_project(self, name: str) -> str:
        """Return the SonarQube project key for a given alias.

        Without a ``projects`` mapping every name is taken as a project key.
        Configured keys may also be passed directly.
        """
        if not self.projects:
            return name
        if name in self.projects:
            return self.projects[name]
        if name in self.projects.values():
            return name
        available = ", ".join(self.projects.keys())
        raise ProjectNotFoundError(
            f"Project '{name}' not found. Available aliases: {available}"
        )

    def build_auth(self) -> AuthBase:
        """Return the auth provider described by the config."""
        auth_type = self.auth_type
        if auth_type == "bearer":
            return BearerTokenAuth(self.auth.get("token") or self.token)
        if auth_type == "basic":
            return BasicAuth(self.auth.get("username", ""), self.auth.get("password") or "")
        if auth_type == "passcode":
            return PasscodeAuth(self.auth.get("passcode", ""))
        return NoAuth()

    def create_client(self) -> SonarQubeClient:
        return SonarQubeClient(
            self.url,
            auth=self.build_auth(),
            organization=self.organization,
            timeout=self.timeout,
        )


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

def load(config_path: str = "sonar-config.yaml") -> Config:
    """Load and validate configuration from a YAML file.

    Environment variables SONAR_URL, SONAR_TOKEN and SONAR_ORGANIZATION
    override file values. The file may be absent when SONAR_URL is set.

    Raises:
        ConfigError: if the file is missing, malformed, or required fields
                     are absent.
    """
    path = Path(config_path)

    if path.exists():
        try:
            with path.open(encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse '{config_path}': {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigError(f"'{config_path}' must be a YAML mapping at the top level.")
    elif os.environ.get("SONAR_URL"):
        raw = {}
    else:
        raise ConfigError(
            f"Config file not found: '{config_path}'\n"
            "Run `sonarqube-client init` to generate a template."
        )

    server = raw.get("server") or {}
    url = os.environ.get("SONAR_URL") or server.get("url", "")
    token = os.environ.get("SONAR_TOKEN") or server.get("token", "")
    organization = os.environ.get("SONAR_ORGANIZATION") or server.get("organization")
    auth = server.get("auth") or {}
    if not isinstance(auth, dict):
        raise ConfigError("'server.auth' must be a mapping.")

    try:
        timeout = float(server.get("timeout", DEFAULT_TIMEOUT))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"'server.timeout' must be a number of seconds: {exc}") from exc

    config = Config(
        url=str(url).strip(),
        token=str(token or "").strip(),
        organization=str(organization).strip() if organization else None,
        timeout=timeout,
        auth=auth,
        projects=raw.get("projects") or {},
    )
    _validate(config)
    return config


def _validate(config: Config) -> None:
    """Raise ConfigError if required fields are missing."""
    errors: list[str] = []

    if not config.url:
        errors.append(
            "  - 'server.url' is missing (or set the SONAR_URL environment variable)"
        )
    if config.timeout <= 0:
        errors.append("  - 'server.timeout' must be positive")

    auth_type = config.auth_type
    if auth_type not in AUTH_TYPES:
        errors.append(
            f"  - 'server.auth.type' must be one of {', '.join(AUTH_TYPES)} (got '{auth_type}')"
        )
    elif auth_type == "bearer" and not (config.auth.get("token") or config.token):
        errors.append(
            "  - 'server.token' is missing (or set the SONAR_TOKEN environment variable)"
        )
    elif auth_type == "basic" and not config.auth.get("username"):
        errors.append("  - 'server.auth.username' is required for basic authentication")
    elif auth_type == "passcode" and not config.auth.get("passcode"):
        errors.append("  - 'server.auth.passcode' is required for passcode authentication")

    if not isinstance(config.projects, dict):
        errors.append("  - 'projects' must map aliases to project keys")

    if errors:
        raise ConfigError("Invalid configuration:\n" + "\n".join(errors))


# ---------------------------------------------------------------------------
# Template generator (used by `init` command)
# ---------------------------------------------------------------------------

TEMPLATE = """\
server:
  url: "https://sonar.example.com"
  token: "squ_xxxxxxxxxxxx"       # Generate at: <your-sonar-url>/account/security
  # organization: "my-org"        # Required for SonarCloud
  # timeout: 30
  # auth:                         # Instead of 'token'
  #   type: basic                 # bearer | basic | passcode | none
  #   username: "admin"
  #   password: "secret"

projects:
  # Human-readable alias: SonarQube project key
  my-project: "com.example.my-project"
  another:    "com.example.another-service"
"""


def generate_template(output_path: str = "sonar-config.yaml") -> None:
    """Write a template sonar-config.yaml to *output_path*.

    Raises:
        ConfigError: if the file already exists (to avoid overwriting secrets).
    """
    path = Path(output_path)
    if path.exists():
        raise ConfigError(
            f"'{output_path}' already exists. Remove it first or choose a different path."
        )
    path.write_text(TEMPLATE, encoding="utf-8")
