"""Instance analysis: what a given server supports.

Usage:
    report = analyze_instance(client)
    # {"version": "10.8.0.100206", "edition": "developer", "v2_api": True, ...}
"""

import logging
import re
from typing import Any

from sonarqube_client.errors import SonarQubeError
from sonarqube_client.sonarqube import SonarQubeClient

logger = logging.getLogger(__name__)

#: Minimum server version per API family.
API_MIN_VERSIONS = {
    "v2_api": "10.6",
    "fix_suggestions": "10.7",
    "analysis_v2": "10.3",
    "new_code_periods": "8.0",
}

COMMERCIAL_EDITIONS = ("developer", "enterprise", "datacenter")


def parse_version(version: str) -> tuple[int, ...]:
    """``"10.8.0.100206"`` -> ``(10, 8, 0, 100206)``; non-numeric tails are ignored."""
    parts = []
    for part in version.split("."):
        match = re.match(r"\d+", part)
        if not match:
            break
        parts.append(int(match.group()))
    return tuple(parts)


def is_version_at_least(version: str, minimum: str) -> bool:
    current, required = parse_version(version), parse_version(minimum)
    width = max(len(current), len(required))
    return current + (0,) * (width - len(current)) >= required + (0,) * (width - len(required))


def _edition(client: SonarQubeClient) -> str:
    try:
        status = client.editions.status()
    except SonarQubeError as exc:
        # the editions endpoint only exists on commercial editions
        logger.debug("Edition lookup failed, assuming community: %s", exc)
        return "community"
    return ((status or {}).get("currentEditionKey") or "community").lower()


def analyze_instance(client: SonarQubeClient) -> dict[str, Any]:
    """Return version, edition and the API families this server exposes."""
    version = client.server.version().strip()
    edition = _edition(client)
    logger.debug("Server %s, edition %s", version, edition)

    apis = {name: is_version_at_least(version, minimum) for name, minimum in API_MIN_VERSIONS.items()}
    apis["applications"] = edition in COMMERCIAL_EDITIONS
    apis["portfolios"] = edition in COMMERCIAL_EDITIONS[1:]
    apis["audit_logs"] = edition in COMMERCIAL_EDITIONS[1:] and client.audit_logs.is_available()

    return {
        "url": client.base_url,
        "version": version,
        "edition": edition,
        "apis": apis,
        "unavailable": sorted(name for name, available in apis.items() if not available),
    }
