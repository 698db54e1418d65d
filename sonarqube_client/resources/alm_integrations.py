"""DevOps platform integrations (``/api/alm_integrations``).

Lists the projects and repositories a configured ALM setting can see, so
they can be imported. Every call requires the 'Create Projects' permission.

Usage:
    client.alm_integrations.set_pat("bitbucket-cloud", "app-password", username="jane")
    for repo in client.alm_integrations.search_gitlab_repos("gitlab").with_project_name("api").all():
        print(repo["pathSlug"])
"""

from typing import TypedDict

from sonarqube_client.builders import PaginatedBuilder
from sonarqube_client.client import BaseClient
from sonarqube_client.errors import ValidationError


class AzureProject(TypedDict, total=False):
    name: str
    key: str
    description: str


class AzureRepository(TypedDict, total=False):
    name: str
    id: str
    project: str
    url: str


class BitbucketServerProject(TypedDict, total=False):
    key: str
    name: str
    id: int


class BitbucketServerRepository(TypedDict, total=False):
    id: int
    name: str
    slug: str
    projectKey: str
    sqProjectKey: str
    links: dict


class BitbucketCloudRepository(TypedDict, total=False):
    uuid: str
    name: str
    slug: str
    projectKey: str
    workspace: str
    sqProjectKey: str


class GitLabProject(TypedDict, total=False):
    id: str
    name: str
    pathName: str
    pathSlug: str
    sqProjectKey: str
    url: str


class ListAzureProjectsResponse(TypedDict, total=False):
    projects: list[AzureProject]
    paging: dict


class ListBitbucketServerProjectsResponse(TypedDict, total=False):
    projects: list[BitbucketServerProject]
    isLastPage: bool


class SearchReposResponse(TypedDict, total=False):
    repositories: list[dict]
    paging: dict
    isLastPage: bool


class SearchGitLabReposResponse(TypedDict, total=False):
    projects: list[GitLabProject]
    paging: dict


def _blank_to_none(value: str | None) -> str | None:
    return value or None


class _RepoSearchBuilder(PaginatedBuilder[SearchReposResponse, dict]):
    items_key = "repositories"
    required: tuple[tuple[str, str], ...] = (("almSetting", "ALM setting"),)

    def with_alm_setting(self, alm_setting: str):
        return self._set("almSetting", alm_setting)

    def validate(self) -> None:
        for key, label in self.required:
            value = self._params.get(key)
            if value is None or not str(value).strip():
                raise ValidationError(f"{label} is required", key)


class AzureReposSearchBuilder(_RepoSearchBuilder):
    required = (("almSetting", "ALM setting"), ("projectName", "Project name"))

    def in_project(self, project_name: str) -> "AzureReposSearchBuilder":
        return self._set("projectName", project_name)

    def with_query(self, search_query: str) -> "AzureReposSearchBuilder":
        return self._set("searchQuery", _blank_to_none(search_query))


class BitbucketServerReposSearchBuilder(_RepoSearchBuilder):
    required = (("almSetting", "ALM setting"), ("projectKey", "Project key"))

    def in_project(self, project_key: str) -> "BitbucketServerReposSearchBuilder":
        return self._set("projectKey", project_key)

    def with_repository_name(self, name: str) -> "BitbucketServerReposSearchBuilder":
        return self._set("repositoryName", _blank_to_none(name))


class BitbucketCloudReposSearchBuilder(_RepoSearchBuilder):
    required = (("almSetting", "ALM setting"), ("workspaceId", "Workspace ID"))

    def in_workspace(self, workspace_id: str) -> "BitbucketCloudReposSearchBuilder":
        return self._set("workspaceId", workspace_id)

    def with_repository_name(self, name: str) -> "BitbucketCloudReposSearchBuilder":
        return self._set("repositoryName", _blank_to_none(name))


class GitLabReposSearchBuilder(_RepoSearchBuilder):
    items_key = "projects"

    def with_project_name(self, project_name: str) -> "GitLabReposSearchBuilder":
        return self._set("projectName", _blank_to_none(project_name))

    def with_min_access_level(self, level: int) -> "GitLabReposSearchBuilder":
        """GitLab access level: 10 guest, 20 reporter, 30 developer, 40 maintainer, 50 owner."""
        return self._set("minAccessLevel", level)


class AlmIntegrationsClient(BaseClient):

    def set_pat(self, alm_setting: str, pat: str, username: str | None = None) -> None:
        """Store a personal access token for *alm_setting*.

        Bitbucket Cloud needs *username* alongside its app password.
        """
        self._post(
            "/api/alm_integrations/set_pat",
            {"almSetting": alm_setting, "pat": pat, "username": username},
        )

    def list_azure_projects(
        self, alm_setting: str, p: int | None = None, ps: int | None = None
    ) -> ListAzureProjectsResponse:
        return self._get(
            "/api/alm_integrations/list_azure_projects",
            {"almSetting": alm_setting, "p": p, "ps": ps},
        )

    def list_bitbucketserver_projects(
        self, alm_setting: str, p: int | None = None, ps: int | None = None
    ) -> ListBitbucketServerProjectsResponse:
        return self._get(
            "/api/alm_integrations/list_bitbucketserver_projects",
            {"almSetting": alm_setting, "p": p, "ps": ps},
        )

    def search_azure_repos(self, alm_setting: str, project_name: str) -> AzureReposSearchBuilder:
        builder = AzureReposSearchBuilder(
            lambda params: self._get("/api/alm_integrations/search_azure_repos", params)
        )
        return builder.with_alm_setting(alm_setting).in_project(project_name)

    def search_bitbucketserver_repos(self, alm_setting: str, project_key: str) -> BitbucketServerReposSearchBuilder:
        builder = BitbucketServerReposSearchBuilder(
            lambda params: self._get("/api/alm_integrations/search_bitbucketserver_repos", params)
        )
        return builder.with_alm_setting(alm_setting).in_project(project_key)

    def search_bitbucketcloud_repos(self, alm_setting: str, workspace_id: str) -> BitbucketCloudReposSearchBuilder:
        builder = BitbucketCloudReposSearchBuilder(
            lambda params: self._get("/api/alm_integrations/search_bitbucketcloud_repos", params)
        )
        return builder.with_alm_setting(alm_setting).in_workspace(workspace_id)

    def search_gitlab_repos(self, alm_setting: str) -> GitLabReposSearchBuilder:
        builder = GitLabReposSearchBuilder(
            lambda params: self._get("/api/alm_integrations/search_gitlab_repos", params)
        )
        return builder.with_alm_setting(alm_setting)
