"""Permissions API (``/api/permissions``).

Grants and revokes permissions for users and groups, either globally, on a
project, or on a permission template. The client's organization is sent on
every call unless one is given explicitly.

Usage:
    client.permissions.add_user("jane", "admin", project_key="my-project")
    client.permissions.bulk_apply_template().template_name("Default").query("legacy-").execute()
"""

from typing import Any, TypedDict

from sonarqube_client.builders import BaseBuilder, PaginatedBuilder
from sonarqube_client.client import BaseClient
from sonarqube_client.errors import ValidationError

MAX_BULK_PROJECTS = 1000


class PermissionCount(TypedDict):
    key: str
    name: str
    description: str
    usersCount: int
    groupsCount: int


class ProjectPermissions(TypedDict, total=False):
    id: str
    key: str
    name: str
    qualifier: str
    permissions: list[PermissionCount]


class SearchProjectPermissionsResponse(TypedDict, total=False):
    projects: list[ProjectPermissions]
    permissions: list[dict]
    paging: dict


class PermissionTemplate(TypedDict, total=False):
    id: str
    name: str
    description: str
    projectKeyPattern: str
    createdAt: str
    updatedAt: str
    permissions: list[PermissionCount]


class SearchTemplatesResponse(TypedDict, total=False):
    permissionTemplates: list[PermissionTemplate]
    defaultTemplates: list[dict]
    permissions: list[dict]


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

class SearchProjectPermissionsBuilder(PaginatedBuilder[SearchProjectPermissionsResponse, ProjectPermissions]):
    items_key = "projects"

    def project_id(self, project_id: str) -> "SearchProjectPermissionsBuilder":
        return self._set("projectId", project_id)

    def project_key(self, project_key: str) -> "SearchProjectPermissionsBuilder":
        return self._set("projectKey", project_key)

    def query(self, query: str) -> "SearchProjectPermissionsBuilder":
        return self._set("q", query)

    def qualifier(self, qualifier: str) -> "SearchProjectPermissionsBuilder":
        return self._set("qualifier", qualifier)

    def organization(self, organization: str) -> "SearchProjectPermissionsBuilder":
        return self._set("organization", organization)


class BulkApplyTemplateBuilder(BaseBuilder[None]):
    """Apply a template to every project matching a selection."""

    def template_id(self, template_id: str) -> "BulkApplyTemplateBuilder":
        return self._set("templateId", template_id)

    def template_name(self, template_name: str) -> "BulkApplyTemplateBuilder":
        return self._set("templateName", template_name)

    def organization(self, organization: str) -> "BulkApplyTemplateBuilder":
        return self._set("organization", organization)

    def query(self, query: str) -> "BulkApplyTemplateBuilder":
        return self._set("q", query)

    def qualifiers(self, qualifiers: list[str]) -> "BulkApplyTemplateBuilder":
        return self._set("qualifiers", qualifiers)

    def analyzed_before(self, date: str) -> "BulkApplyTemplateBuilder":
        return self._set("analyzedBefore", date)

    def on_provisioned_only(self, provisioned_only: bool = True) -> "BulkApplyTemplateBuilder":
        return self._set("onProvisionedOnly", provisioned_only)

    def projects(self, project_keys: list[str]) -> "BulkApplyTemplateBuilder":
        if len(project_keys) > MAX_BULK_PROJECTS:
            raise ValidationError(f"Maximum of {MAX_BULK_PROJECTS} projects can be specified", "projects")
        return self._set("projects", project_keys)

    def validate(self) -> None:
        if not (self._params.get("templateId") or self._params.get("templateName")):
            raise ValidationError("Either templateId or templateName must be provided", "template")
        selection = ("projects", "q", "analyzedBefore", "onProvisionedOnly")
        if not any(self._params.get(key) not in (None, "", []) for key in selection):
            raise ValidationError(
                "At least one project selection (projects, query, analyzedBefore "
                "or onProvisionedOnly) must be specified",
                "projects",
            )


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class PermissionsClient(BaseClient):

    # --- users and groups ---

    def add_user(
        self,
        login: str,
        permission: str,
        *,
        project_key: str | None = None,
        project_id: str | None = None,
        organization: str | None = None,
    ) -> None:
        """Grant *permission* to a user, globally or on one project."""
        self._send(
            "add_user",
            login=login,
            permission=permission,
            projectKey=project_key,
            projectId=project_id,
            organization=organization,
        )

    def remove_user(
        self,
        login: str,
        permission: str,
        *,
        project_key: str | None = None,
        project_id: str | None = None,
        organization: str | None = None,
    ) -> None:
        self._send(
            "remove_user",
            login=login,
            permission=permission,
            projectKey=project_key,
            projectId=project_id,
            organization=organization,
        )

    def add_group(
        self,
        group_name: str,
        permission: str,
        *,
        project_key: str | None = None,
        project_id: str | None = None,
        organization: str | None = None,
    ) -> None:
        """Grant *permission* to a group; use ``anyone`` for every user."""
        self._send(
            "add_group",
            groupName=group_name,
            permission=permission,
            projectKey=project_key,
            projectId=project_id,
            organization=organization,
        )

    def remove_group(
        self,
        group_name: str,
        permission: str,
        *,
        project_key: str | None = None,
        project_id: str | None = None,
        organization: str | None = None,
    ) -> None:
        self._send(
            "remove_group",
            groupName=group_name,
            permission=permission,
            projectKey=project_key,
            projectId=project_id,
            organization=organization,
        )

    # --- template membership ---

    def add_user_to_template(
        self,
        login: str,
        permission: str,
        *,
        template_id: str | None = None,
        template_name: str | None = None,
        organization: str | None = None,
    ) -> None:
        self._send_template(
            "add_user_to_template", template_id, template_name, organization, login=login, permission=permission
        )

    def remove_user_from_template(
        self,
        login: str,
        permission: str,
        *,
        template_id: str | None = None,
        template_name: str | None = None,
        organization: str | None = None,
    ) -> None:
        self._send_template(
            "remove_user_from_template", template_id, template_name, organization, login=login, permission=permission
        )

    def add_group_to_template(
        self,
        group_name: str,
        permission: str,
        *,
        template_id: str | None = None,
        template_name: str | None = None,
        organization: str | None = None,
    ) -> None:
        self._send_template(
            "add_group_to_template",
            template_id,
            template_name,
            organization,
            groupName=group_name,
            permission=permission,
        )

    def remove_group_from_template(
        self,
        group_name: str,
        permission: str,
        *,
        template_id: str | None = None,
        template_name: str | None = None,
        organization: str | None = None,
    ) -> None:
        self._send_template(
            "remove_group_from_template",
            template_id,
            template_name,
            organization,
            groupName=group_name,
            permission=permission,
        )

    def add_project_creator_to_template(
        self,
        permission: str,
        *,
        template_id: str | None = None,
        template_name: str | None = None,
        organization: str | None = None,
    ) -> None:
        """Give project creators *permission* on the projects they create."""
        self._send_template(
            "add_project_creator_to_template", template_id, template_name, organization, permission=permission
        )

    def remove_project_creator_from_template(
        self,
        permission: str,
        *,
        template_id: str | None = None,
        template_name: str | None = None,
        organization: str | None = None,
    ) -> None:
        self._send_template(
            "remove_project_creator_from_template", template_id, template_name, organization, permission=permission
        )

    # --- templates ---

    def create_template(
        self,
        name: str,
        *,
        description: str | None = None,
        project_key_pattern: str | None = None,
        organization: str | None = None,
    ) -> dict:
        return self._send(
            "create_template",
            name=name,
            description=description,
            projectKeyPattern=project_key_pattern,
            organization=organization,
        )

    def update_template(
        self,
        template_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        project_key_pattern: str | None = None,
    ) -> dict:
        return self._post(
            "/api/permissions/update_template",
            {
                "id": template_id,
                "name": name,
                "description": description,
                "projectKeyPattern": project_key_pattern,
            },
        )

    def delete_template(
        self,
        *,
        template_id: str | None = None,
        template_name: str | None = None,
        organization: str | None = None,
    ) -> None:
        self._send_template("delete_template", template_id, template_name, organization)

    def apply_template(
        self,
        *,
        project_key: str | None = None,
        project_id: str | None = None,
        template_id: str | None = None,
        template_name: str | None = None,
        organization: str | None = None,
    ) -> None:
        """Replace the permissions of one project with those of a template."""
        self._send_template(
            "apply_template",
            template_id,
            template_name,
            organization,
            projectKey=project_key,
            projectId=project_id,
        )

    def bulk_apply_template(self) -> BulkApplyTemplateBuilder:
        return BulkApplyTemplateBuilder(
            lambda params: self._post("/api/permissions/bulk_apply_template", self._with_organization(params))
        )

    def set_default_template(
        self,
        *,
        template_id: str | None = None,
        template_name: str | None = None,
        qualifier: str | None = None,
        organization: str | None = None,
    ) -> None:
        self._send_template("set_default_template", template_id, template_name, organization, qualifier=qualifier)

    # --- search ---

    def search_global_permissions(self, organization: str | None = None) -> dict:
        return self._get(
            "/api/permissions/search_global_permissions",
            self._with_organization({"organization": organization}),
        )

    def search_project_permissions(self) -> SearchProjectPermissionsBuilder:
        return SearchProjectPermissionsBuilder(
            lambda params: self._get("/api/permissions/search_project_permissions", self._with_organization(params))
        )

    def search_templates(self, q: str | None = None, organization: str | None = None) -> SearchTemplatesResponse:
        return self._get(
            "/api/permissions/search_templates",
            self._with_organization({"q": q, "organization": organization}),
        )

    # ------------------------------------------------------------------

    def _send(self, action: str, **params: Any) -> Any:
        return self._post(f"/api/permissions/{action}", self._with_organization(params))

    def _send_template(
        self,
        action: str,
        template_id: str | None,
        template_name: str | None,
        organization: str | None,
        **params: Any,
    ) -> Any:
        if not (template_id or template_name):
            raise ValidationError("Either template_id or template_name must be provided", "templateId")
        return self._send(
            action,
            templateId=template_id,
            templateName=template_name,
            organization=organization,
            **params,
        )
