"""Settings API (``/api/settings``).

Usage:
    client.settings.set("sonar.exclusions", values=["**/generated/**", "**/*.min.js"], component="my-project")
    current = client.settings.values(keys=["sonar.exclusions"], component="my-project")
"""

import json
from typing import Any, TypedDict

from sonarqube_client.client import BaseClient
from sonarqube_client.errors import ValidationError


class SettingDefinition(TypedDict, total=False):
    key: str
    name: str
    description: str
    type: str
    category: str
    subCategory: str
    defaultValue: str
    multiValues: bool
    options: list[str]
    fields: list[dict]


class Setting(TypedDict, total=False):
    key: str
    value: str
    values: list[str]
    fieldValues: list[dict[str, str]]
    inherited: bool
    parentValue: str


class SettingsClient(BaseClient):

    def list_definitions(self, component: str | None = None, organization: str | None = None) -> dict:
        return self._get(
            "/api/settings/list_definitions",
            self._with_organization({"component": component, "organization": organization}),
        )

    def values(
        self,
        keys: list[str] | None = None,
        *,
        component: str | None = None,
        branch: str | None = None,
        pull_request: str | None = None,
        organization: str | None = None,
    ) -> dict:
        """Current values, global or for *component*; all settings when *keys* is omitted."""
        return self._get(
            "/api/settings/values",
            self._with_organization(
                {
                    "keys": keys,
                    "component": component,
                    "branch": branch,
                    "pullRequest": pull_request,
                    "organization": organization,
                }
            ),
        )

    def set(
        self,
        key: str,
        value: str | None = None,
        *,
        values: list[str] | None = None,
        field_values: list[dict[str, Any]] | None = None,
        component: str | None = None,
        organization: str | None = None,
    ) -> None:
        """Update a setting.

        Exactly one of *value* (single value), *values* (multi-value setting)
        or *field_values* (property set) must be given.

        Raises:
            ValidationError: no key, or not exactly one kind of value
        """
        if not key:
            raise ValidationError("Setting key is required", "key")
        given = [v for v in (value, values, field_values) if v is not None]
        if len(given) != 1:
            raise ValidationError("Exactly one of value, values or field_values must be provided", "value")

        data: list[tuple[str, str]] = [("key", key)]
        if value is not None:
            data.append(("value", value))
        data.extend(("values", v) for v in values or [])
        data.extend(("fieldValues", json.dumps(fv)) for fv in field_values or [])
        extra = self._with_organization({"component": component, "organization": organization})
        data.extend((name, v) for name, v in extra.items() if v is not None)
        self._post("/api/settings/set", data)

    def reset(
        self,
        keys: list[str],
        *,
        component: str | None = None,
        branch: str | None = None,
        pull_request: str | None = None,
        organization: str | None = None,
    ) -> None:
        """Restore the default values of *keys*."""
        if not keys:
            raise ValidationError("At least one key is required", "keys")
        self._post(
            "/api/settings/reset",
            self._with_organization(
                {
                    "keys": keys,
                    "component": component,
                    "branch": branch,
                    "pullRequest": pull_request,
                    "organization": organization,
                }
            ),
        )
