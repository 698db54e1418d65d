"""Editions API (``/api/editions``): license management on commercial editions."""

from typing import TypedDict

from sonarqube_client.client import BaseClient


class EditionStatus(TypedDict, total=False):
    currentEditionKey: str
    installationStatus: str
    nextEditionKey: str
    installError: str


class EditionsClient(BaseClient):

    def status(self) -> EditionStatus:
        return self._get("/api/editions/status")

    def activate_grace_period(self) -> None:
        """Give a license-less instance its grace period; requires 'Administer System'."""
        self._post("/api/editions/activate_grace_period")

    def set_license(self, license_: str) -> None:
        self._post("/api/editions/set_license", {"license": license_})
