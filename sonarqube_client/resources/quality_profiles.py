"""Quality profiles API (``/api/qualityprofiles``).

Most calls identify a profile either by ``key`` or by the pair
``quality_profile`` (its name) and ``language``.

Usage:
    client.quality_profiles.activate_rule("AU-Tp", "python:S1192", severity="MAJOR")
    xml = client.quality_profiles.backup(quality_profile="Sonar way", language="py")
"""

from typing import Any, TypedDict

from sonarqube_client.builders import BaseBuilder, PaginatedBuilder
from sonarqube_client.client import BaseClient
from sonarqube_client.errors import ValidationError
from sonarqube_client.resources.rules import RuleFilters


class QualityProfile(TypedDict, total=False):
    key: str
    name: str
    language: str
    languageName: str
    isInherited: bool
    isBuiltIn: bool
    isDefault: bool
    parentKey: str
    parentName: str
    activeRuleCount: int
    activeDeprecatedRuleCount: int
    projectCount: int
    rulesUpdatedAt: str
    lastUsed: str
    userUpdatedAt: str
    actions: dict


class SearchProfilesResponse(TypedDict, total=False):
    profiles: list[QualityProfile]
    actions: dict


class ChangelogEntry(TypedDict, total=False):
    date: str
    action: str
    authorLogin: str
    authorName: str
    ruleKey: str
    ruleName: str
    params: dict


class ChangelogResponse(TypedDict):
    events: list[ChangelogEntry]
    total: int
    p: int
    ps: int


class ProfileProject(TypedDict, total=False):
    id: str
    key: str
    name: str
    selected: bool


class ProfileProjectsResponse(TypedDict, total=False):
    results: list[ProfileProject]
    paging: dict
    more: bool


class BulkRuleChangeResponse(TypedDict):
    succeeded: int
    failed: int


def _profile(key: str | None, quality_profile: str | None, language: str | None) -> dict[str, Any]:
    if not key and not (quality_profile and language):
        raise ValidationError("Either key or both quality_profile and language must be provided", "key")
    if key:
        return {"key": key}
    return {"qualityProfile": quality_profile, "language": language}


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

class BulkRuleActivationBuilder(RuleFilters, BaseBuilder[BulkRuleChangeResponse]):
    """Selects the rules to (de)activate on the target profile."""

    def target_key(self, profile_key: str) -> "BulkRuleActivationBuilder":
        return self._set("targetKey", profile_key)

    def target_severity(self, severity: str) -> "BulkRuleActivationBuilder":
        return self._set("targetSeverity", severity)

    def validate(self) -> None:
        if not self._params.get("targetKey"):
            raise ValidationError("Target profile key is required", "targetKey")


class ChangelogBuilder(PaginatedBuilder[ChangelogResponse, ChangelogEntry]):
    items_key = "events"

    def since(self, date: str) -> "ChangelogBuilder":
        return self._set("since", date)

    def to(self, date: str) -> "ChangelogBuilder":
        return self._set("to", date)

    def _has_more(self, response: Any, current_page: int) -> bool:
        # changelog reports paging at the top level
        page_size = response.get("ps") or 0
        return page_size > 0 and current_page * page_size < response.get("total", 0)

    def _total(self, response: Any) -> int | None:
        return response.get("total")


class ProfileProjectsBuilder(PaginatedBuilder[ProfileProjectsResponse, ProfileProject]):
    items_key = "results"

    def query(self, query: str) -> "ProfileProjectsBuilder":
        return self._set("q", query)

    def selected(self, selected: str) -> "ProfileProjectsBuilder":
        """``selected``, ``deselected`` or ``all``."""
        return self._set("selected", selected)

    def validate(self) -> None:
        if not self._params.get("key"):
            raise ValidationError("Profile key is required", "key")

    def _has_more(self, response: Any, current_page: int) -> bool:
        if "more" in response:
            return bool(response["more"])
        return super()._has_more(response, current_page)


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class QualityProfilesClient(BaseClient):

    # --- rules ---

    def activate_rule(
        self,
        key: str,
        rule: str,
        *,
        severity: str | None = None,
        params: dict[str, Any] | None = None,
        reset: bool | None = None,
        prioritized_rule: bool | None = None,
    ) -> None:
        """Activate *rule* on profile *key*, or change its severity/params."""
        self._post(
            "/api/qualityprofiles/activate_rule",
            {
                "key": key,
                "rule": rule,
                "severity": severity,
                "params": ";".join(f"{k}={v}" for k, v in params.items()) if params else None,
                "reset": reset,
                "prioritizedRule": prioritized_rule,
            },
        )

    def deactivate_rule(self, key: str, rule: str) -> None:
        self._post("/api/qualityprofiles/deactivate_rule", {"key": key, "rule": rule})

    def activate_rules(self) -> BulkRuleActivationBuilder:
        return BulkRuleActivationBuilder(
            lambda params: self._post("/api/qualityprofiles/activate_rules", self._with_organization(params))
        )

    def deactivate_rules(self) -> BulkRuleActivationBuilder:
        return BulkRuleActivationBuilder(
            lambda params: self._post("/api/qualityprofiles/deactivate_rules", self._with_organization(params))
        )

    # --- projects ---

    def add_project(
        self,
        *,
        key: str | None = None,
        quality_profile: str | None = None,
        language: str | None = None,
        project: str | None = None,
        project_uuid: str | None = None,
    ) -> None:
        self._post(
            "/api/qualityprofiles/add_project",
            {**_profile(key, quality_profile, language), **self._project(project, project_uuid)},
        )

    def remove_project(
        self,
        *,
        key: str | None = None,
        quality_profile: str | None = None,
        language: str | None = None,
        project: str | None = None,
        project_uuid: str | None = None,
    ) -> None:
        self._post(
            "/api/qualityprofiles/remove_project",
            {**_profile(key, quality_profile, language), **self._project(project, project_uuid)},
        )

    def projects(self, key: str) -> ProfileProjectsBuilder:
        builder = ProfileProjectsBuilder(lambda params: self._get("/api/qualityprofiles/projects", params))
        return builder._set("key", key)

    # --- backup, restore and export ---

    def backup(
        self,
        *,
        key: str | None = None,
        quality_profile: str | None = None,
        language: str | None = None,
    ) -> str:
        """Profile backup as an XML document."""
        return self._get_text(
            "/api/qualityprofiles/backup",
            self._with_organization(_profile(key, quality_profile, language)),
            accept="application/xml",
        )

    def restore(self, backup: str | bytes, organization: str | None = None) -> dict:
        """Restore a profile from the XML produced by ``backup``."""
        return self._post(
            "/api/qualityprofiles/restore",
            self._with_organization({"organization": organization}),
            files={"backup": ("backup.xml", backup, "application/xml")},
        )

    def export(
        self,
        *,
        key: str | None = None,
        quality_profile: str | None = None,
        language: str | None = None,
        exporter_key: str | None = None,
    ) -> str:
        """Export a profile in the format of *exporter_key* (see ``exporters``)."""
        params = {**_profile(key, quality_profile, language), "exporterKey": exporter_key}
        return self._get_text("/api/qualityprofiles/export", self._with_organization(params))

    def exporters(self) -> dict:
        return self._get("/api/qualityprofiles/exporters")

    def importers(self) -> dict:
        return self._get("/api/qualityprofiles/importers")

    # --- lifecycle ---

    def create(self, name: str, language: str, organization: str | None = None) -> dict:
        return self._post(
            "/api/qualityprofiles/create",
            self._with_organization({"name": name, "language": language, "organization": organization}),
        )

    def copy(self, from_key: str, to_name: str) -> QualityProfile:
        return self._post("/api/qualityprofiles/copy", {"fromKey": from_key, "toName": to_name})

    def rename(self, key: str, name: str) -> None:
        self._post("/api/qualityprofiles/rename", {"key": key, "name": name})

    def delete(
        self,
        *,
        key: str | None = None,
        quality_profile: str | None = None,
        language: str | None = None,
    ) -> None:
        """Delete a profile together with its descendants."""
        self._post(
            "/api/qualityprofiles/delete",
            self._with_organization(_profile(key, quality_profile, language)),
        )

    def set_default(
        self,
        *,
        key: str | None = None,
        quality_profile: str | None = None,
        language: str | None = None,
    ) -> None:
        self._post(
            "/api/qualityprofiles/set_default",
            self._with_organization(_profile(key, quality_profile, language)),
        )

    def change_parent(
        self,
        *,
        key: str | None = None,
        quality_profile: str | None = None,
        language: str | None = None,
        parent_key: str | None = None,
        parent_quality_profile: str | None = None,
    ) -> None:
        """Set the parent profile; with no parent given the profile stops inheriting."""
        self._post(
            "/api/qualityprofiles/change_parent",
            {
                **_profile(key, quality_profile, language),
                "parentKey": parent_key,
                "parentQualityProfile": parent_quality_profile,
            },
        )

    # --- queries ---

    def search(
        self,
        *,
        defaults: bool | None = None,
        language: str | None = None,
        project: str | None = None,
        quality_profile: str | None = None,
        organization: str | None = None,
    ) -> SearchProfilesResponse:
        return self._get(
            "/api/qualityprofiles/search",
            self._with_organization(
                {
                    "defaults": defaults,
                    "language": language,
                    "project": project,
                    "qualityProfile": quality_profile,
                    "organization": organization,
                }
            ),
        )

    def inheritance(
        self,
        *,
        key: str | None = None,
        quality_profile: str | None = None,
        language: str | None = None,
    ) -> dict:
        return self._get(
            "/api/qualityprofiles/inheritance",
            self._with_organization(_profile(key, quality_profile, language)),
        )

    def compare(self, left_key: str, right_key: str) -> dict:
        return self._get("/api/qualityprofiles/compare", {"leftKey": left_key, "rightKey": right_key})

    def changelog(
        self,
        *,
        key: str | None = None,
        quality_profile: str | None = None,
        language: str | None = None,
    ) -> ChangelogBuilder:
        builder = ChangelogBuilder(
            lambda params: self._get("/api/qualityprofiles/changelog", self._with_organization(params))
        )
        return builder._set_params(**_profile(key, quality_profile, language))

    @staticmethod
    def _project(project: str | None, project_uuid: str | None) -> dict[str, Any]:
        if not (project or project_uuid):
            raise ValidationError("Either project or project_uuid must be provided", "project")
        return {"project": project, "projectUuid": project_uuid}
