"""User tokens API (``/api/user_tokens``)."""

from typing import TypedDict

from sonarqube_client.client import BaseClient


class UserToken(TypedDict, total=False):
    name: str
    type: str
    createdAt: str
    lastConnectionDate: str
    expirationDate: str
    isExpired: bool
    project: dict


class GenerateTokenResponse(TypedDict, total=False):
    login: str
    name: str
    token: str
    type: str
    createdAt: str
    expirationDate: str


class SearchTokensResponse(TypedDict):
    login: str
    userTokens: list[UserToken]


class UserTokensClient(BaseClient):
    """Tokens of the current user, or of *login* for administrators."""

    def generate(
        self,
        name: str,
        *,
        login: str | None = None,
        type_: str | None = None,
        project_key: str | None = None,
        expiration_date: str | None = None,
    ) -> GenerateTokenResponse:
        """Create a token; its value is only returned by this call."""
        return self._post(
            "/api/user_tokens/generate",
            {
                "name": name,
                "login": login,
                "type": type_,
                "projectKey": project_key,
                "expirationDate": expiration_date,
            },
        )

    def revoke(self, name: str, login: str | None = None) -> None:
        self._post("/api/user_tokens/revoke", {"name": name, "login": login})

    def search(self, login: str | None = None) -> SearchTokensResponse:
        return self._get("/api/user_tokens/search", {"login": login})
