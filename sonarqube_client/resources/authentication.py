"""Authentication API (``/api/authentication``)."""

from typing import TypedDict

from sonarqube_client.client import BaseClient


class ValidateResponse(TypedDict):
    valid: bool


class AuthenticationClient(BaseClient):

    def validate(self) -> ValidateResponse:
        """Check whether the configured credentials are accepted."""
        return self._get("/api/authentication/validate")

    def logout(self) -> None:
        self._post("/api/authentication/logout")
