"""Entry point bundling every resource client behind one object.

Usage:
    client = SonarQubeClient.with_token("https://sonar.example.com", "squ_xxx")
    print(client.server.version())

    for issue in client.issues.search().with_projects(["my-project"]).all():
        ...

All resource clients share one ``requests.Session``, one auth provider and
the optional organization.
"""

import logging

import requests
from requests.auth import AuthBase

from sonarqube_client.auth import BasicAuth, BearerTokenAuth, NoAuth, PasscodeAuth
from sonarqube_client.client import DEFAULT_TIMEOUT
from sonarqube_client.resources.alm_integrations import AlmIntegrationsClient
from sonarqube_client.resources.alm_settings import AlmSettingsClient
from sonarqube_client.resources.analysis import AnalysisClient
from sonarqube_client.resources.analysis_cache import AnalysisCacheClient
from sonarqube_client.resources.applications import ApplicationsClient
from sonarqube_client.resources.audit_logs import AuditLogsClient
from sonarqube_client.resources.authentication import AuthenticationClient
from sonarqube_client.resources.authorizations import AuthorizationsClient
from sonarqube_client.resources.ce import CEClient
from sonarqube_client.resources.components import ComponentsClient
from sonarqube_client.resources.duplications import DuplicationsClient
from sonarqube_client.resources.editions import EditionsClient
from sonarqube_client.resources.favorites import FavoritesClient
from sonarqube_client.resources.fix_suggestions import FixSuggestionsClient
from sonarqube_client.resources.hotspots import HotspotsClient
from sonarqube_client.resources.issues import IssuesClient
from sonarqube_client.resources.languages import LanguagesClient
from sonarqube_client.resources.measures import MeasuresClient
from sonarqube_client.resources.metrics import MetricsClient
from sonarqube_client.resources.new_code_periods import NewCodePeriodsClient
from sonarqube_client.resources.notifications import NotificationsClient
from sonarqube_client.resources.permissions import PermissionsClient
from sonarqube_client.resources.plugins import PluginsClient
from sonarqube_client.resources.project_analyses import ProjectAnalysesClient
from sonarqube_client.resources.project_badges import ProjectBadgesClient
from sonarqube_client.resources.project_branches import ProjectBranchesClient
from sonarqube_client.resources.project_dump import ProjectDumpClient
from sonarqube_client.resources.project_links import ProjectLinksClient
from sonarqube_client.resources.project_pull_requests import ProjectPullRequestsClient
from sonarqube_client.resources.project_tags import ProjectTagsClient
from sonarqube_client.resources.projects import ProjectsClient
from sonarqube_client.resources.quality_gates import QualityGatesClient
from sonarqube_client.resources.quality_profiles import QualityProfilesClient
from sonarqube_client.resources.rules import RulesClient
from sonarqube_client.resources.server import ServerClient
from sonarqube_client.resources.settings import SettingsClient
from sonarqube_client.resources.sources import SourcesClient
from sonarqube_client.resources.system import SystemClient
from sonarqube_client.resources.user_groups import UserGroupsClient
from sonarqube_client.resources.user_properties import UserPropertiesClient
from sonarqube_client.resources.user_tokens import UserTokensClient
from sonarqube_client.resources.users import UsersClient
from sonarqube_client.resources.views import ViewsClient
from sonarqube_client.resources.webhooks import WebhooksClient
from sonarqube_client.resources.webservices import WebservicesClient

logger = logging.getLogger(__name__)


class SonarQubeClient:
    """SonarQube / SonarCloud web API client.

    Args:
        base_url: server root, e.g. ``https://sonarcloud.io``
        token: user token, sent as a bearer token; ignored when *auth* is given
        organization: organization key, required by most SonarCloud calls
        timeout: per-request timeout in seconds
        session: ``requests.Session`` to reuse (one is created otherwise)
        auth: explicit auth provider (see ``sonarqube_client.auth``)
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        *,
        organization: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
        auth: AuthBase | None = None,
    ) -> None:
        if auth is None:
            auth = BearerTokenAuth(token) if token else NoAuth()
        self.base_url = base_url.rstrip("/")
        self.auth = auth
        self.organization = organization
        self.session = session or requests.Session()

        def make(client_class):
            return client_class(
                self.base_url,
                auth,
                organization=organization,
                session=self.session,
                timeout=timeout,
            )

        self.alm_integrations = make(AlmIntegrationsClient)
        self.alm_settings = make(AlmSettingsClient)
        self.analysis = make(AnalysisClient)
        self.analysis_cache = make(AnalysisCacheClient)
        self.applications = make(ApplicationsClient)
        self.audit_logs = make(AuditLogsClient)
        self.authentication = make(AuthenticationClient)
        self.authorizations = make(AuthorizationsClient)
        self.ce = make(CEClient)
        self.components = make(ComponentsClient)
        self.duplications = make(DuplicationsClient)
        self.editions = make(EditionsClient)
        self.favorites = make(FavoritesClient)
        self.fix_suggestions = make(FixSuggestionsClient)
        self.hotspots = make(HotspotsClient)
        self.issues = make(IssuesClient)
        self.languages = make(LanguagesClient)
        self.measures = make(MeasuresClient)
        self.metrics = make(MetricsClient)
        self.new_code_periods = make(NewCodePeriodsClient)
        self.notifications = make(NotificationsClient)
        self.permissions = make(PermissionsClient)
        self.plugins = make(PluginsClient)
        self.project_analyses = make(ProjectAnalysesClient)
        self.project_badges = make(ProjectBadgesClient)
        self.project_branches = make(ProjectBranchesClient)
        self.project_dump = make(ProjectDumpClient)
        self.project_links = make(ProjectLinksClient)
        self.project_pull_requests = make(ProjectPullRequestsClient)
        self.project_tags = make(ProjectTagsClient)
        self.projects = make(ProjectsClient)
        self.quality_gates = make(QualityGatesClient)
        self.quality_profiles = make(QualityProfilesClient)
        self.rules = make(RulesClient)
        self.server = make(ServerClient)
        self.settings = make(SettingsClient)
        self.sources = make(SourcesClient)
        self.system = make(SystemClient)
        self.user_groups = make(UserGroupsClient)
        self.user_properties = make(UserPropertiesClient)
        self.user_tokens = make(UserTokensClient)
        self.users = make(UsersClient)
        self.views = make(ViewsClient)
        self.webhooks = make(WebhooksClient)
        self.webservices = make(WebservicesClient)

        logger.debug("SonarQube client for %s (auth=%s)", self.base_url, getattr(auth, "auth_type", "custom"))

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def with_token(cls, base_url: str, token: str, **kwargs) -> "SonarQubeClient":
        return cls(base_url, auth=BearerTokenAuth(token), **kwargs)

    @classmethod
    def with_basic_auth(cls, base_url: str, username: str, password: str = "", **kwargs) -> "SonarQubeClient":
        """Basic credentials; pass a token as *username* with no password."""
        return cls(base_url, auth=BasicAuth(username, password), **kwargs)

    @classmethod
    def with_passcode(cls, base_url: str, passcode: str, **kwargs) -> "SonarQubeClient":
        return cls(base_url, auth=PasscodeAuth(passcode), **kwargs)

    @classmethod
    def with_auth(cls, base_url: str, auth: AuthBase, **kwargs) -> "SonarQubeClient":
        return cls(base_url, auth=auth, **kwargs)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "SonarQubeClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
