"""CLI entry point: command definitions using Click.

Commands:
    init          Generate a template config file
    status        Server version, status and health
    issues        Open issues of a project, branch or pull request
    metrics       Metric definitions
    measures      Measures of a project
    analyze       Version, edition and available API families of the server
"""

import functools
import itertools
import json
import logging
import sys
import warnings
from typing import Any

import click

from sonarqube_client import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers shared by all data commands
# ---------------------------------------------------------------------------

def _make_client(ctx: click.Context):
    """Load config and return it with a ready SonarQubeClient. Exits on error."""
    from sonarqube_client.config import ConfigError, load

    obj = ctx.obj
    try:
        config = load(obj["config_path"])
        client = config.create_client()
    except (ConfigError, ValueError) as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        sys.exit(1)

    logger.debug("Connecting to %s", config.url)
    return config, client


def _emit_json(data: Any, ctx: click.Context) -> None:
    """Write JSON to stdout or to the file specified by --output."""
    obj = ctx.obj
    indent = 2 if obj["pretty"] else None
    text = json.dumps(data, indent=indent, ensure_ascii=False)

    output_path: str | None = obj["output_path"]
    if output_path:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(text)
        click.echo(f"Report written to '{output_path}'", err=True)
    else:
        click.echo(text)


def _handle_client_errors(func):
    """Decorator that catches client exceptions and exits cleanly."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        from sonarqube_client.config import ProjectNotFoundError
        from sonarqube_client.errors import (
            AuthenticationError,
            AuthorizationError,
            NetworkError,
            NotFoundError,
            SonarQubeError,
            ValidationError,
        )

        try:
            return func(*args, **kwargs)
        except ProjectNotFoundError as exc:
            click.echo(f"Project error: {exc}", err=True)
            sys.exit(1)
        except AuthenticationError as exc:
            click.echo(f"Authentication error: {exc}", err=True)
            sys.exit(1)
        except AuthorizationError as exc:
            click.echo(f"Permission denied: {exc}", err=True)
            sys.exit(1)
        except NotFoundError as exc:
            click.echo(f"Not found: {exc}", err=True)
            sys.exit(1)
        except NetworkError as exc:
            click.echo(f"Network error: {exc}", err=True)
            sys.exit(1)
        except ValidationError as exc:
            click.echo(f"Invalid request: {exc}", err=True)
            sys.exit(1)
        except SonarQubeError as exc:
            click.echo(f"SonarQube error: {exc}", err=True)
            sys.exit(1)

    return wrapper


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------

@click.group()
@click.option("--config", "config_path", default="sonar-config.yaml", show_default=True,
              help="Path to the configuration file.")
@click.option("--output", "output_path", default=None,
              help="Write JSON output to a file instead of stdout.")
@click.option("--pretty", is_flag=True, default=False,
              help="Pretty-print the JSON output.")
@click.option("--verbose", is_flag=True, default=False,
              help="Enable debug logging on stderr.")
@click.version_option(__version__, prog_name="sonarqube-client")
@click.pass_context
def cli(ctx: click.Context, config_path: str, output_path: str | None,
        pretty: bool, verbose: bool) -> None:
    """SonarQube web API client: query a server and export JSON."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["output_path"] = output_path
    ctx.obj["pretty"] = pretty
    ctx.obj["verbose"] = verbose

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if not verbose:
        # deprecation notices are for library users, not CLI output
        warnings.simplefilter("ignore", DeprecationWarning)


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------

@cli.command("init")
@click.option("--output", "output_path", default="sonar-config.yaml", show_default=True,
              help="Path where the template config file will be written.")
def init_command(output_path: str) -> None:
    """Generate a template sonar-config.yaml file."""
    from sonarqube_client.config import ConfigError, generate_template
    try:
        generate_template(output_path)
        click.echo(f"Template written to '{output_path}'.")
        click.echo("Edit it with your server URL, credentials and project key mappings.")
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


# ---------------------------------------------------------------------------
# status
# ---------------------------------------------------------------------------

@cli.command("status")
@click.pass_context
@_handle_client_errors
def status_command(ctx: click.Context) -> None:
    """Server version, system status and health."""
    from sonarqube_client.errors import AuthenticationError, AuthorizationError

    _, client = _make_client(ctx)
    report = {
        "url": client.base_url,
        "version": client.server.version().strip(),
        "status": client.system.status(),
    }
    try:
        report["health"] = client.system.health()
    except (AuthenticationError, AuthorizationError) as exc:
        # health needs admin rights or a passcode
        logger.debug("Health not available: %s", exc)
        report["health"] = None
    _emit_json(report, ctx)


# ---------------------------------------------------------------------------
# issues
# ---------------------------------------------------------------------------

@cli.command("issues")
@click.argument("project")
@click.option("--branch", default=None, help="Branch to inspect (defaults to the main branch).")
@click.option("--pr", "pull_request", default=None, help="Pull request ID.")
@click.option("--severity", "severities", multiple=True,
              type=click.Choice(["BLOCKER", "HIGH", "MEDIUM", "LOW", "INFO"], case_sensitive=False),
              help="Impact severity to keep (repeatable).")
@click.option("--limit", type=int, default=None, help="Stop after this many issues.")
@click.pass_context
@_handle_client_errors
def issues_command(ctx: click.Context, project: str, branch: str | None,
                   pull_request: str | None, severities: tuple[str, ...], limit: int | None) -> None:
    """Open issues of PROJECT (alias or key)."""
    if branch and pull_request:
        click.echo("Error: --branch and --pr are mutually exclusive.", err=True)
        sys.exit(1)

    config, client = _make_client(ctx)
    project_key = config.resolve_project(project)
    logger.debug("Fetching issues for %s", project_key)

    search = client.issues.search().with_projects([project_key]).only_unresolved()
    if branch:
        search.on_branch(branch)
    if pull_request:
        search.on_pull_request(pull_request)
    if severities:
        search.with_impact_severities([s.upper() for s in severities])

    issues = list(itertools.islice(search.all(), limit))
    _emit_json(
        {
            "project": project_key,
            "branch": branch,
            "pullRequest": pull_request,
            "total": len(issues),
            "issues": issues,
        },
        ctx,
    )


# ---------------------------------------------------------------------------
# metrics / measures
# ---------------------------------------------------------------------------

@cli.command("metrics")
@click.option("--custom", is_flag=True, default=False, help="Only custom metrics.")
@click.pass_context
@_handle_client_errors
def metrics_command(ctx: click.Context, custom: bool) -> None:
    """List metric definitions."""
    _, client = _make_client(ctx)
    metrics = list(client.metrics.search_all(is_custom=True if custom else None))
    _emit_json({"total": len(metrics), "metrics": metrics}, ctx)


@cli.command("measures")
@click.argument("project")
@click.option("-m", "--metric", "metrics", multiple=True, required=True,
              help="Metric key (repeatable), e.g. -m coverage -m bugs.")
@click.option("--branch", default=None)
@click.option("--pr", "pull_request", default=None)
@click.pass_context
@_handle_client_errors
def measures_command(ctx: click.Context, project: str, metrics: tuple[str, ...],
                     branch: str | None, pull_request: str | None) -> None:
    """Measures of PROJECT for the given metrics."""
    config, client = _make_client(ctx)
    project_key = config.resolve_project(project)
    response = client.measures.component(
        project_key, list(metrics), branch=branch, pull_request=pull_request
    )
    measures = {
        m["metric"]: m.get("value", (m.get("period") or {}).get("value"))
        for m in response.get("component", {}).get("measures", [])
    }
    _emit_json({"project": project_key, "measures": measures}, ctx)


# ---------------------------------------------------------------------------
# analyze
# ---------------------------------------------------------------------------

@cli.command("analyze")
@click.pass_context
@_handle_client_errors
def analyze_command(ctx: click.Context) -> None:
    """Report version, edition and which API families the server supports."""
    from sonarqube_client.instance import analyze_instance

    _, client = _make_client(ctx)
    _emit_json(analyze_instance(client), ctx)
