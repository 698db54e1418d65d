"""Tests for sonarqube_client/cli.py"""

import json
import textwrap

import pytest
from click.testing import CliRunner

from sonarqube_client import __version__
from sonarqube_client.cli import cli

BASE = "https://sonar.example.com"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SONAR_URL", "SONAR_TOKEN", "SONAR_ORGANIZATION"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_path(tmp_path) -> str:
    p = tmp_path / "sonar-config.yaml"
    p.write_text(
        textwrap.dedent(f"""\
            server:
              url: "{BASE}"
              token: "squ_test"
            projects:
              api: "com.acme.api"
            """),
        encoding="utf-8",
    )
    return str(p)


def run(config_path: str, *args: str):
    return CliRunner().invoke(cli, ["--config", config_path, *args])


# ---------------------------------------------------------------------------
# Basics
# ---------------------------------------------------------------------------

def test_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_init_writes_template(tmp_path):
    out = tmp_path / "new.yaml"
    result = CliRunner().invoke(cli, ["init", "--output", str(out)])
    assert result.exit_code == 0
    assert out.exists()


def test_init_refuses_existing_file(tmp_path):
    out = tmp_path / "new.yaml"
    out.write_text("x")
    result = CliRunner().invoke(cli, ["init", "--output", str(out)])
    assert result.exit_code == 1


def test_missing_config_exits(tmp_path):
    result = run(str(tmp_path / "absent.yaml"), "status")
    assert result.exit_code == 1
    assert "Configuration error" in result.output


# ---------------------------------------------------------------------------
# Data commands
# ---------------------------------------------------------------------------

def test_status(config_path, requests_mock):
    requests_mock.get(f"{BASE}/api/server/version", text="10.8.0.100206")
    requests_mock.get(f"{BASE}/api/system/status", json={"status": "UP", "version": "10.8"})
    requests_mock.get(f"{BASE}/api/system/health", status_code=403)

    result = run(config_path, "status")

    assert result.exit_code == 0, result.output
    report = json.loads(result.output)
    assert report["version"] == "10.8.0.100206"
    assert report["status"]["status"] == "UP"
    assert report["health"] is None


def test_issues_resolves_alias_and_limits(config_path, requests_mock):
    adapter = requests_mock.get(
        f"{BASE}/api/issues/search",
        json={
            "issues": [{"key": "i1"}, {"key": "i2"}, {"key": "i3"}],
            "paging": {"pageIndex": 1, "pageSize": 100, "total": 3},
        },
    )

    result = run(config_path, "issues", "api", "--branch", "develop", "--severity", "high", "--limit", "2")

    assert result.exit_code == 0, result.output
    report = json.loads(result.output)
    assert report["project"] == "com.acme.api"
    assert [i["key"] for i in report["issues"]] == ["i1", "i2"]
    qs = adapter.last_request.qs
    assert qs["projects"] == ["com.acme.api"]
    assert qs["branch"] == ["develop"]
    assert qs["impactseverities"] == ["high"]
    assert qs["resolved"] == ["false"]


def test_issues_branch_and_pr_are_exclusive(config_path):
    result = run(config_path, "issues", "api", "--branch", "b", "--pr", "1")
    assert result.exit_code == 1


def test_issues_unknown_alias(config_path):
    result = run(config_path, "issues", "nope")
    assert result.exit_code == 1
    assert "Project error" in result.output


def test_issues_authentication_error(config_path, requests_mock):
    requests_mock.get(f"{BASE}/api/issues/search", status_code=401)
    result = run(config_path, "issues", "api")
    assert result.exit_code == 1
    assert "Authentication error" in result.output


def test_measures(config_path, requests_mock):
    adapter = requests_mock.get(
        f"{BASE}/api/measures/component",
        json={
            "component": {
                "key": "com.acme.api",
                "measures": [
                    {"metric": "coverage", "value": "81.5"},
                    {"metric": "new_bugs", "period": {"value": "2"}},
                ],
            }
        },
    )

    result = run(config_path, "measures", "api", "-m", "coverage", "-m", "new_bugs")

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["measures"] == {"coverage": "81.5", "new_bugs": "2"}
    assert adapter.last_request.qs["metrickeys"] == ["coverage,new_bugs"]


def test_metrics_writes_output_file(config_path, tmp_path, requests_mock):
    requests_mock.get(
        f"{BASE}/api/metrics/search",
        json={"metrics": [{"key": "coverage"}], "total": 1, "p": 1, "ps": 500},
    )
    out = tmp_path / "metrics.json"

    result = CliRunner().invoke(cli, ["--config", config_path, "--output", str(out), "--pretty", "metrics"])

    assert result.exit_code == 0, result.output
    assert json.loads(out.read_text(encoding="utf-8"))["metrics"] == [{"key": "coverage"}]


def test_analyze(config_path, requests_mock):
    requests_mock.get(f"{BASE}/api/server/version", text="9.9.0.65466")
    requests_mock.get(f"{BASE}/api/editions/status", status_code=404)

    result = run(config_path, "analyze")

    assert result.exit_code == 0, result.output
    report = json.loads(result.output)
    assert report["edition"] == "community"
    assert "v2_api" in report["unavailable"]
