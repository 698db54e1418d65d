"""Languages API (``/api/languages``)."""

from typing import TypedDict

from sonarqube_client.client import BaseClient


class Language(TypedDict):
    key: str
    name: str


class ListLanguagesResponse(TypedDict):
    languages: list[Language]


class LanguagesClient(BaseClient):

    def list(self, q: str | None = None, ps: int | None = None) -> ListLanguagesResponse:
        """List supported languages; *q* matches on key or name."""
        return self._get("/api/languages/list", {"q": q or None, "ps": ps})

    def list_all(self, q: str | None = None) -> ListLanguagesResponse:
        # ps=0 asks the server for every language in one response
        return self.list(q=q, ps=0)
