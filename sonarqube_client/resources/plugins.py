"""Plugins API (``/api/plugins``); requires the 'Administer System' permission."""

from typing import TypedDict

from sonarqube_client.client import BaseClient


class Plugin(TypedDict, total=False):
    key: str
    name: str
    description: str
    version: str
    category: str
    license: str
    organizationName: str
    editionBundled: bool
    updatedAt: int
    filename: str
    hash: str


class InstalledPluginsResponse(TypedDict):
    plugins: list[Plugin]


class PendingPluginsResponse(TypedDict):
    installing: list[Plugin]
    updating: list[Plugin]
    removing: list[Plugin]


class PluginsClient(BaseClient):

    def available(self, q: str | None = None) -> dict:
        """Plugins available for installation from the update center."""
        return self._get("/api/plugins/available", {"q": q})

    def installed(self, fields: list[str] | None = None) -> InstalledPluginsResponse:
        return self._get("/api/plugins/installed", {"f": fields})

    def pending(self) -> PendingPluginsResponse:
        return self._get("/api/plugins/pending")

    def updates(self) -> dict:
        return self._get("/api/plugins/updates")

    def install(self, key: str) -> None:
        self._post("/api/plugins/install", {"key": key})

    def uninstall(self, key: str) -> None:
        self._post("/api/plugins/uninstall", {"key": key})

    def update(self, key: str) -> None:
        self._post("/api/plugins/update", {"key": key})

    def cancel_all(self) -> None:
        """Cancel every pending install, update and uninstall."""
        self._post("/api/plugins/cancel_all")
