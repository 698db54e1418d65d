"""Groups and group memberships through the v2 API (``/api/v2/authorizations``).

Usage:
    for group in client.authorizations.search_groups().query("dev").all():
        print(group["id"], group["name"])

    client.authorizations.add_group_membership(group_id=group["id"], user_id="u-1")
"""

from typing import TypedDict

from sonarqube_client.builders import V2PaginatedBuilder
from sonarqube_client.client import BaseClient


class Group(TypedDict, total=False):
    id: str
    name: str
    description: str
    managed: bool
    default: bool


class GroupMembership(TypedDict):
    id: str
    groupId: str
    userId: str


class SearchGroupsResponse(TypedDict):
    groups: list[Group]
    page: dict


class SearchGroupMembershipsResponse(TypedDict):
    groupMemberships: list[GroupMembership]
    page: dict


class SearchGroupsBuilder(V2PaginatedBuilder[SearchGroupsResponse, Group]):
    items_key = "groups"

    def query(self, query: str) -> "SearchGroupsBuilder":
        return self._set("q", query)

    def managed(self, managed: bool = True) -> "SearchGroupsBuilder":
        return self._set("managed", managed)

    def with_user(self, user_id: str) -> "SearchGroupsBuilder":
        return self._set("userId", user_id)

    def excluding_user(self, user_id: str) -> "SearchGroupsBuilder":
        return self._set("excludedUserId", user_id)


class SearchGroupMembershipsBuilder(V2PaginatedBuilder[SearchGroupMembershipsResponse, GroupMembership]):
    items_key = "groupMemberships"

    def with_group(self, group_id: str) -> "SearchGroupMembershipsBuilder":
        return self._set("groupId", group_id)

    def with_user(self, user_id: str) -> "SearchGroupMembershipsBuilder":
        return self._set("userId", user_id)


class AuthorizationsClient(BaseClient):
    """Manage groups and their members (SonarQube 10.5+)."""

    def search_groups(self) -> SearchGroupsBuilder:
        return SearchGroupsBuilder(lambda params: self._get("/api/v2/authorizations/groups", params))

    def create_group(self, name: str, description: str | None = None) -> Group:
        body = {"name": name}
        if description is not None:
            body["description"] = description
        return self._post_json("/api/v2/authorizations/groups", body)

    def get_group(self, group_id: str) -> Group:
        return self._get(f"/api/v2/authorizations/groups/{group_id}")

    def update_group(self, group_id: str, *, name: str | None = None, description: str | None = None) -> Group:
        """Rename a group or change its description; unset fields are left alone."""
        body = {key: value for key, value in (("name", name), ("description", description)) if value is not None}
        return self._patch_json(f"/api/v2/authorizations/groups/{group_id}", body)

    def delete_group(self, group_id: str) -> None:
        self._delete(f"/api/v2/authorizations/groups/{group_id}")

    def search_group_memberships(self) -> SearchGroupMembershipsBuilder:
        return SearchGroupMembershipsBuilder(
            lambda params: self._get("/api/v2/authorizations/group-memberships", params)
        )

    def add_group_membership(self, group_id: str, user_id: str) -> GroupMembership:
        return self._post_json(
            "/api/v2/authorizations/group-memberships",
            {"groupId": group_id, "userId": user_id},
        )

    def remove_group_membership(self, membership_id: str) -> None:
        self._delete(f"/api/v2/authorizations/group-memberships/{membership_id}")
