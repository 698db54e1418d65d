"""Notifications API (``/api/notifications``)."""

from typing import TypedDict

from sonarqube_client.client import BaseClient


class Notification(TypedDict, total=False):
    channel: str
    type: str
    organization: str
    project: str
    projectName: str


class ListNotificationsResponse(TypedDict, total=False):
    notifications: list[Notification]
    channels: list[str]
    globalTypes: list[str]
    perProjectTypes: list[str]


class NotificationsClient(BaseClient):
    """Subscribe users to notifications; *login* defaults to the current user."""

    def add(
        self,
        type_: str,
        channel: str | None = None,
        login: str | None = None,
        project: str | None = None,
    ) -> None:
        self._post(
            "/api/notifications/add",
            {"type": type_, "channel": channel, "login": login, "project": project},
        )

    def list(self, login: str | None = None) -> ListNotificationsResponse:
        return self._get("/api/notifications/list", {"login": login})

    def remove(
        self,
        type_: str,
        channel: str | None = None,
        login: str | None = None,
        project: str | None = None,
    ) -> None:
        self._post(
            "/api/notifications/remove",
            {"type": type_, "channel": channel, "login": login, "project": project},
        )
