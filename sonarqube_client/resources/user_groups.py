"""User groups API (``/api/user_groups``).

Groups are addressed by ``id`` or ``name``; the client's organization is
sent unless one is given.
"""

from typing import TypedDict

from sonarqube_client.builders import PaginatedBuilder
from sonarqube_client.client import BaseClient
from sonarqube_client.errors import ValidationError


class UserGroup(TypedDict, total=False):
    id: str
    name: str
    description: str
    membersCount: int
    default: bool
    managed: bool


class SearchGroupsResponse(TypedDict):
    groups: list[UserGroup]
    paging: dict


class GroupMember(TypedDict, total=False):
    login: str
    name: str
    selected: bool
    managed: bool


class GroupUsersResponse(TypedDict):
    users: list[GroupMember]
    paging: dict


class SearchGroupsBuilder(PaginatedBuilder[SearchGroupsResponse, UserGroup]):
    items_key = "groups"

    def organization(self, organization: str) -> "SearchGroupsBuilder":
        return self._set("organization", organization)

    def query(self, query: str) -> "SearchGroupsBuilder":
        return self._set("q", query)

    def fields(self, fields: list[str]) -> "SearchGroupsBuilder":
        """Subset of ``name``, ``description`` and ``membersCount``."""
        return self._set("f", fields)

    def validate(self) -> None:
        if not self._params.get("organization"):
            raise ValidationError("Organization is required for searching user groups", "organization")


class GroupUsersBuilder(PaginatedBuilder[GroupUsersResponse, GroupMember]):
    items_key = "users"

    def group_id(self, group_id: str) -> "GroupUsersBuilder":
        return self._set("id", group_id)

    def group_name(self, name: str) -> "GroupUsersBuilder":
        return self._set("name", name)

    def query(self, query: str) -> "GroupUsersBuilder":
        return self._set("q", query)

    def selected(self, selected: str) -> "GroupUsersBuilder":
        """``selected`` (members), ``deselected`` (non-members) or ``all``."""
        return self._set("selected", selected)

    def validate(self) -> None:
        if not self._params.get("id") and not self._params.get("name"):
            raise ValidationError("Either group id or name must be provided", "name")


def _group(group_id: str | None, name: str | None) -> dict:
    if not group_id and not name:
        raise ValidationError("Either id or name must be provided", "name")
    return {"id": group_id, "name": name}


class UserGroupsClient(BaseClient):

    def create(self, name: str, description: str | None = None, organization: str | None = None) -> dict:
        return self._post(
            "/api/user_groups/create",
            self._with_organization({"name": name, "description": description, "organization": organization}),
        )

    def update(self, group_id: str, *, name: str | None = None, description: str | None = None) -> None:
        self._post(
            "/api/user_groups/update",
            {"id": group_id, "name": name, "description": description},
        )

    def delete(self, *, group_id: str | None = None, name: str | None = None) -> None:
        self._post("/api/user_groups/delete", self._with_organization(_group(group_id, name)))

    def add_user(self, login: str, *, group_id: str | None = None, name: str | None = None) -> None:
        self._post(
            "/api/user_groups/add_user",
            self._with_organization({"login": login, **_group(group_id, name)}),
        )

    def remove_user(self, login: str, *, group_id: str | None = None, name: str | None = None) -> None:
        self._post(
            "/api/user_groups/remove_user",
            self._with_organization({"login": login, **_group(group_id, name)}),
        )

    def search(self) -> SearchGroupsBuilder:
        builder = SearchGroupsBuilder(lambda params: self._get("/api/user_groups/search", params))
        if self.organization:
            builder.organization(self.organization)
        return builder

    def users(self) -> GroupUsersBuilder:
        return GroupUsersBuilder(
            lambda params: self._get("/api/user_groups/users", self._with_organization(params))
        )
