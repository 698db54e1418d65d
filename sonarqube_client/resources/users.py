"""Users API (``/api/users`` and ``/api/v2/users``).

The v1 search is deprecated since SonarQube 10.8; prefer ``search_v2``:

    for user in client.users.search_v2().query("jane").all():
        print(user["login"])
"""

from typing import Iterator, TypedDict

from sonarqube_client.builders import PaginatedBuilder, V2PaginatedBuilder
from sonarqube_client.client import BaseClient
from sonarqube_client.deprecation import warn_deprecated
from sonarqube_client.errors import ValidationError

MAX_IDS = 30
MAX_IDS_LENGTH = 1110
MIN_QUERY_LENGTH = 2


class User(TypedDict, total=False):
    login: str
    name: str
    email: str
    active: bool
    local: bool
    externalIdentity: str
    externalProvider: str
    avatar: str
    groups: list[str]
    tokensCount: int
    lastConnectionDate: str
    managed: bool


class SearchUsersResponse(TypedDict):
    users: list[User]
    paging: dict


class UserGroupMembership(TypedDict, total=False):
    id: int
    name: str
    description: str
    selected: bool
    default: bool


class UserGroupsResponse(TypedDict):
    groups: list[UserGroupMembership]
    paging: dict


class UserV2(TypedDict, total=False):
    id: str
    login: str
    name: str
    email: str
    active: bool
    local: bool
    managed: bool
    externalLogin: str
    externalProvider: str
    sonarQubeLastConnectionDate: str
    sonarLintLastConnectionDate: str


class SearchUsersV2Response(TypedDict):
    users: list[UserV2]
    page: dict


class SearchUsersBuilder(PaginatedBuilder[SearchUsersResponse, User]):
    items_key = "users"

    def ids(self, ids: list[str]) -> "SearchUsersBuilder":
        """Filter on up to 30 user ids."""
        return self._set("ids", ids)

    def query(self, query: str) -> "SearchUsersBuilder":
        return self._set("q", query)

    def deactivated(self, deactivated: bool = True) -> "SearchUsersBuilder":
        return self._set("deactivated", deactivated)

    def validate(self) -> None:
        ids = self._params.get("ids")
        if ids:
            if len(ids) > MAX_IDS:
                raise ValidationError(f"Maximum {MAX_IDS} user IDs allowed", "ids")
            if len(",".join(ids)) > MAX_IDS_LENGTH:
                raise ValidationError(f"IDs string exceeds maximum length of {MAX_IDS_LENGTH} characters", "ids")
        query = self._params.get("q")
        if query is not None and len(query) < MIN_QUERY_LENGTH:
            raise ValidationError(f"Query must be at least {MIN_QUERY_LENGTH} characters long", "q")


class UserGroupsBuilder(PaginatedBuilder[UserGroupsResponse, UserGroupMembership]):
    items_key = "groups"

    def login(self, login: str) -> "UserGroupsBuilder":
        return self._set("login", login)

    def organization(self, organization: str) -> "UserGroupsBuilder":
        return self._set("organization", organization)

    def query(self, query: str) -> "UserGroupsBuilder":
        return self._set("q", query)

    def selected(self, selected: str) -> "UserGroupsBuilder":
        return self._set("selected", selected)

    def validate(self) -> None:
        if not (self._params.get("login") or "").strip():
            raise ValidationError("login is required", "login")
        if not (self._params.get("organization") or "").strip():
            raise ValidationError("organization is required", "organization")


class SearchUsersV2Builder(V2PaginatedBuilder[SearchUsersV2Response, UserV2]):
    items_key = "users"

    def query(self, query: str) -> "SearchUsersV2Builder":
        return self._set("q", query)

    def active(self, active: bool = True) -> "SearchUsersV2Builder":
        return self._set("active", active)

    def managed(self, managed: bool = True) -> "SearchUsersV2Builder":
        return self._set("managed", managed)

    def external_login(self, external_login: str) -> "SearchUsersV2Builder":
        return self._set("externalLogin", external_login)

    def last_connected_before(self, date: str) -> "SearchUsersV2Builder":
        return self._set("sonarQubeLastConnectionDateTo", date)

    def last_connected_after(self, date: str) -> "SearchUsersV2Builder":
        return self._set("sonarQubeLastConnectionDateFrom", date)


class UsersClient(BaseClient):

    def search(self) -> SearchUsersBuilder:
        warn_deprecated(
            "users.search()",
            replacement="users.search_v2()",
            reason="The v1 endpoint is deprecated since SonarQube 10.8",
        )
        return SearchUsersBuilder(lambda params: self._get("/api/users/search", params))

    def search_all(self) -> Iterator[User]:
        return self.search().all()

    def groups(self) -> UserGroupsBuilder:
        builder = UserGroupsBuilder(lambda params: self._get("/api/users/groups", params))
        if self.organization:
            builder.organization(self.organization)
        return builder

    def groups_all(self, login: str, organization: str | None = None) -> Iterator[UserGroupMembership]:
        builder = self.groups().login(login)
        if organization:
            builder.organization(organization)
        return builder.all()

    def search_v2(self) -> SearchUsersV2Builder:
        return SearchUsersV2Builder(lambda params: self._get("/api/v2/users/search", params))

    def search_all_v2(self) -> Iterator[UserV2]:
        return self.search_v2().all()
