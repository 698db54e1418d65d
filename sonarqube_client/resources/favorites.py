"""Favorites API (``/api/favorites``) for the authenticated user."""

from typing import Iterator, TypedDict

from sonarqube_client.builders import PaginatedBuilder
from sonarqube_client.client import BaseClient


class Favorite(TypedDict, total=False):
    key: str
    name: str
    qualifier: str
    organization: str


class SearchFavoritesResponse(TypedDict):
    favorites: list[Favorite]
    paging: dict


class SearchFavoritesBuilder(PaginatedBuilder[SearchFavoritesResponse, Favorite]):
    items_key = "favorites"


class FavoritesClient(BaseClient):

    def add(self, component: str) -> None:
        self._post("/api/favorites/add", {"component": component})

    def remove(self, component: str) -> None:
        self._post("/api/favorites/remove", {"component": component})

    def search(self) -> SearchFavoritesBuilder:
        return SearchFavoritesBuilder(lambda params: self._get("/api/favorites/search", params))

    def search_all(self) -> Iterator[Favorite]:
        return self.search().page_size(500).all()
