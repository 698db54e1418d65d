"""Duplications API (``/api/duplications``)."""

from typing import TypedDict

from sonarqube_client.client import BaseClient

DuplicationBlock = TypedDict("DuplicationBlock", {"from": int, "size": int, "_ref": str})


class DuplicationsResponse(TypedDict):
    duplications: list[dict[str, list[DuplicationBlock]]]
    files: dict[str, dict]


class DuplicationsClient(BaseClient):

    def show(
        self,
        key: str,
        branch: str | None = None,
        pull_request: str | None = None,
    ) -> DuplicationsResponse:
        """Duplicated blocks of the file *key*.

        Blocks reference files through ``_ref``, resolved in ``files``.
        """
        return self._get(
            "/api/duplications/show",
            {"key": key, "branch": branch, "pullRequest": pull_request},
        )
