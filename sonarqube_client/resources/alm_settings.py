"""DevOps platform (ALM) settings and project bindings (``/api/alm_settings``).

Requires the 'Administer System' permission for setting management and
'Administer' on the project for bindings.
"""

from typing import TypedDict

from sonarqube_client.client import BaseClient


class AlmSetting(TypedDict, total=False):
    key: str
    alm: str
    url: str


class ListAlmSettingsResponse(TypedDict):
    almSettings: list[AlmSetting]


class ProjectBinding(TypedDict, total=False):
    key: str
    alm: str
    url: str
    repository: str
    slug: str
    summaryCommentEnabled: bool
    monorepo: bool


class CountBindingResponse(TypedDict):
    key: str
    projects: int


class AlmSettingsClient(BaseClient):
    """Manage ALM settings and the bindings between projects and repositories."""

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def list(self, project: str | None = None) -> ListAlmSettingsResponse:
        """List settings available to *project*, or all of them."""
        return self._get("/api/alm_settings/list", {"project": project})

    def list_definitions(self) -> dict:
        return self._get("/api/alm_settings/list_definitions")

    def count_binding(self, alm_setting: str) -> CountBindingResponse:
        return self._get("/api/alm_settings/count_binding", {"almSetting": alm_setting})

    def validate(self, key: str) -> dict | None:
        return self._get("/api/alm_settings/validate", {"key": key})

    def delete(self, key: str) -> None:
        self._post("/api/alm_settings/delete", {"key": key})

    def create_github(
        self,
        key: str,
        url: str,
        app_id: str,
        client_id: str,
        client_secret: str,
        private_key: str,
        webhook_secret: str | None = None,
    ) -> None:
        self._post(
            "/api/alm_settings/create_github",
            {
                "key": key,
                "url": url,
                "appId": app_id,
                "clientId": client_id,
                "clientSecret": client_secret,
                "privateKey": private_key,
                "webhookSecret": webhook_secret,
            },
        )

    def update_github(
        self,
        key: str,
        url: str,
        app_id: str,
        client_id: str,
        new_key: str | None = None,
        client_secret: str | None = None,
        private_key: str | None = None,
        webhook_secret: str | None = None,
    ) -> None:
        self._post(
            "/api/alm_settings/update_github",
            {
                "key": key,
                "newKey": new_key,
                "url": url,
                "appId": app_id,
                "clientId": client_id,
                "clientSecret": client_secret,
                "privateKey": private_key,
                "webhookSecret": webhook_secret,
            },
        )

    def create_gitlab(self, key: str, url: str, personal_access_token: str) -> None:
        self._post(
            "/api/alm_settings/create_gitlab",
            {"key": key, "url": url, "personalAccessToken": personal_access_token},
        )

    def update_gitlab(
        self,
        key: str,
        url: str,
        new_key: str | None = None,
        personal_access_token: str | None = None,
    ) -> None:
        self._post(
            "/api/alm_settings/update_gitlab",
            {"key": key, "newKey": new_key, "url": url, "personalAccessToken": personal_access_token},
        )

    def create_azure(self, key: str, url: str, personal_access_token: str) -> None:
        self._post(
            "/api/alm_settings/create_azure",
            {"key": key, "url": url, "personalAccessToken": personal_access_token},
        )

    def update_azure(
        self,
        key: str,
        url: str,
        new_key: str | None = None,
        personal_access_token: str | None = None,
    ) -> None:
        self._post(
            "/api/alm_settings/update_azure",
            {"key": key, "newKey": new_key, "url": url, "personalAccessToken": personal_access_token},
        )

    def create_bitbucket(self, key: str, url: str, personal_access_token: str) -> None:
        """Bitbucket Server / Data Center."""
        self._post(
            "/api/alm_settings/create_bitbucket",
            {"key": key, "url": url, "personalAccessToken": personal_access_token},
        )

    def update_bitbucket(
        self,
        key: str,
        url: str,
        new_key: str | None = None,
        personal_access_token: str | None = None,
    ) -> None:
        self._post(
            "/api/alm_settings/update_bitbucket",
            {"key": key, "newKey": new_key, "url": url, "personalAccessToken": personal_access_token},
        )

    def create_bitbucketcloud(self, key: str, client_id: str, client_secret: str, workspace: str) -> None:
        self._post(
            "/api/alm_settings/create_bitbucketcloud",
            {"key": key, "clientId": client_id, "clientSecret": client_secret, "workspace": workspace},
        )

    def update_bitbucketcloud(
        self,
        key: str,
        client_id: str,
        workspace: str,
        new_key: str | None = None,
        client_secret: str | None = None,
    ) -> None:
        self._post(
            "/api/alm_settings/update_bitbucketcloud",
            {
                "key": key,
                "newKey": new_key,
                "clientId": client_id,
                "clientSecret": client_secret,
                "workspace": workspace,
            },
        )

    # ------------------------------------------------------------------
    # Bindings
    # ------------------------------------------------------------------

    def get_binding(self, project: str) -> ProjectBinding:
        return self._get("/api/alm_settings/get_binding", {"project": project})

    def delete_binding(self, project: str) -> None:
        self._post("/api/alm_settings/delete_binding", {"project": project})

    def set_github_binding(
        self,
        alm_setting: str,
        project: str,
        repository: str,
        summary_comment_enabled: bool | None = None,
        monorepo: bool = False,
    ) -> None:
        self._post(
            "/api/alm_settings/set_github_binding",
            {
                "almSetting": alm_setting,
                "project": project,
                "repository": repository,
                "summaryCommentEnabled": summary_comment_enabled,
                "monorepo": monorepo,
            },
        )

    def set_gitlab_binding(
        self, alm_setting: str, project: str, repository: str, monorepo: bool = False
    ) -> None:
        self._post(
            "/api/alm_settings/set_gitlab_binding",
            {"almSetting": alm_setting, "project": project, "repository": repository, "monorepo": monorepo},
        )

    def set_azure_binding(
        self,
        alm_setting: str,
        project: str,
        project_name: str,
        repository_name: str,
        monorepo: bool = False,
    ) -> None:
        self._post(
            "/api/alm_settings/set_azure_binding",
            {
                "almSetting": alm_setting,
                "project": project,
                "projectName": project_name,
                "repositoryName": repository_name,
                "monorepo": monorepo,
            },
        )

    def set_bitbucket_binding(
        self,
        alm_setting: str,
        project: str,
        repository: str,
        slug: str,
        monorepo: bool = False,
    ) -> None:
        self._post(
            "/api/alm_settings/set_bitbucket_binding",
            {
                "almSetting": alm_setting,
                "project": project,
                "repository": repository,
                "slug": slug,
                "monorepo": monorepo,
            },
        )

    def set_bitbucketcloud_binding(
        self, alm_setting: str, project: str, repository: str, monorepo: bool = False
    ) -> None:
        self._post(
            "/api/alm_settings/set_bitbucketcloud_binding",
            {"almSetting": alm_setting, "project": project, "repository": repository, "monorepo": monorepo},
        )
