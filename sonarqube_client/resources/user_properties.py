"""User properties (``/api/user_properties``), removed in SonarQube 6.3.

The endpoint was split into favorites and notifications. The client stays so
that old callers get a clear error instead of a 404.
"""

from typing import TypedDict

from sonarqube_client.client import BaseClient
from sonarqube_client.deprecation import warn_deprecated
from sonarqube_client.errors import SonarQubeError


class UserProperty(TypedDict):
    key: str
    value: str


class UserPropertiesResponse(TypedDict):
    properties: list[UserProperty]


class UserPropertiesClient(BaseClient):

    def index(self) -> UserPropertiesResponse:
        """Always raises ``SonarQubeError`` (code ``API_REMOVED``, status 410); no request is sent."""
        warn_deprecated(
            "user_properties.index()",
            replacement="favorites.search() or notifications.list()",
            remove_version="6.3",
            reason="The user_properties API was split into the favorites and notifications APIs",
        )
        raise SonarQubeError(
            "The user_properties API was removed in SonarQube 6.3. "
            "Use client.favorites for favorite projects or client.notifications "
            "for notification preferences.",
            "API_REMOVED",
            410,
            {
                "migration": {
                    "favorites": "client.favorites",
                    "notifications": "client.notifications",
                }
            },
        )
