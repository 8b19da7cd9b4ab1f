"""Single-page-app page controllers.

Each page is a shell plus a script bundle; the page script fetches its
own data. A controller's job is the access check, the few values the
script needs at boot (``meta``), and registering the route.
"""

from collections.abc import Mapping
from typing import Any

from roost.controllers.base import SpaPageController
from roost.errors import NotFound
from roost.http.request import Request
from roost.routing.table import RouteTable
from roost.security import AuthenticationHelper, SecurityService
from roost.services import AnalyticsExtension, PipelineConfigService, ServerEnvironment
from roost.templating.integration import PageTemplates
from roost.toggles import Toggles, ToggleSource


class RolesController(SpaPageController):
    path = "/admin/security/roles"
    view_title = "Roles"
    page_name = "roles"


class AuthConfigsController(SpaPageController):
    path = "/admin/security/auth_configs"
    view_title = "Authorization Configurations"
    page_name = "auth_configs"


class AgentsController(SpaPageController):
    path = "/agents"
    view_title = "Agents"
    page_name = "agents"

    def __init__(
        self,
        auth: AuthenticationHelper,
        templates: PageTemplates,
        routes: RouteTable,
        security: SecurityService,
        environment: ServerEnvironment,
    ) -> None:
        super().__init__(auth, templates, routes)
        self.security = security
        self.environment = environment

    def check_access(self, request: Request) -> None:
        self.auth.check_user(request)

    def meta(self, request: Request) -> Mapping[str, Any]:
        return {
            "is_user_admin": _is_admin(self.security, request),
            "websockets_enabled": self.environment.websockets_enabled,
        }


class PluginsController(SpaPageController):
    path = "/admin/plugins"
    view_title = "Plugins"
    page_name = "plugins"

    def __init__(
        self,
        auth: AuthenticationHelper,
        templates: PageTemplates,
        routes: RouteTable,
        security: SecurityService,
    ) -> None:
        super().__init__(auth, templates, routes)
        self.security = security

    def check_access(self, request: Request) -> None:
        self.auth.check_user(request)

    def meta(self, request: Request) -> Mapping[str, Any]:
        return {"is_user_admin": _is_admin(self.security, request)}


class ElasticProfilesController(SpaPageController):
    path = "/admin/elastic_profiles"
    view_title = "Elastic Agent Profiles"
    page_name = "elastic_profiles"


class NewDashboardController(SpaPageController):
    path = "/dashboard"
    view_title = "Dashboard"
    page_name = "new_dashboard"

    def __init__(
        self,
        auth: AuthenticationHelper,
        templates: PageTemplates,
        routes: RouteTable,
        security: SecurityService,
        environment: ServerEnvironment,
        pipelines: PipelineConfigService,
    ) -> None:
        super().__init__(auth, templates, routes)
        self.security = security
        self.environment = environment
        self.pipelines = pipelines

    def check_access(self, request: Request) -> None:
        self.auth.check_user(request)

    def meta(self, request: Request) -> Mapping[str, Any]:
        is_admin = _is_admin(self.security, request)
        return {
            "should_show_analytics_icon": is_admin and self.environment.analytics_enabled,
            "pipeline_count": self.pipelines.pipeline_count(),
            "websockets_enabled": self.environment.websockets_enabled,
        }


class ArtifactStoresController(SpaPageController):
    path = "/admin/artifact_stores"
    view_title = "Artifact Stores"
    page_name = "artifact_stores"


class AnalyticsController(SpaPageController):
    path = "/analytics"
    view_title = "Analytics"
    page_name = "analytics"

    def __init__(
        self,
        auth: AuthenticationHelper,
        templates: PageTemplates,
        routes: RouteTable,
        environment: ServerEnvironment,
        analytics: AnalyticsExtension,
        pipelines: PipelineConfigService,
    ) -> None:
        super().__init__(auth, templates, routes)
        self.environment = environment
        self.analytics = analytics
        self.pipelines = pipelines

    def check_access(self, request: Request) -> None:
        if not self.environment.analytics_enabled:
            raise NotFound("Analytics is not enabled on this server.")
        self.auth.check_admin(request)

    def meta(self, request: Request) -> Mapping[str, Any]:
        return {
            "plugins": list(self.analytics.dashboard_plugins()),
            "pipeline_count": self.pipelines.pipeline_count(),
        }


class DataSharingSettingsController(SpaPageController):
    path = "/admin/data_sharing/settings"
    view_title = "Data Sharing"
    page_name = "data_sharing_settings"


class DrainModeController(SpaPageController):
    """Drain-mode page, hidden entirely until its toggle is on."""

    path = "/admin/drain_mode"
    view_title = "Server Drain Mode"
    page_name = "drain_mode"

    def __init__(
        self,
        auth: AuthenticationHelper,
        templates: PageTemplates,
        routes: RouteTable,
        toggles: ToggleSource,
    ) -> None:
        super().__init__(auth, templates, routes)
        self.toggles = toggles

    def check_access(self, request: Request) -> None:
        if not self.toggles.is_toggle_on(Toggles.SERVER_DRAIN_MODE):
            raise NotFound()
        self.auth.check_admin(request)


class ConfigReposController(SpaPageController):
    path = "/admin/config_repos"
    view_title = "Config Repositories"
    page_name = "config_repos"

    def check_access(self, request: Request) -> None:
        self.auth.check_admin_or_group_admin(request)


class KitchenSinkController(SpaPageController):
    """Component showcase. Open to everyone, so it takes no auth helper."""

    path = "/kitchen-sink"
    view_title = "Kitchen Sink"
    page_name = "kitchen_sink"

    def __init__(self, templates: PageTemplates, routes: RouteTable) -> None:
        self.auth = None
        self.templates = templates
        self.routes = routes

    def check_access(self, request: Request) -> None:
        return None


def _is_admin(security: SecurityService, request: Request) -> bool:
    if not security.is_security_enabled():
        return True
    return request.user is not None and security.is_user_admin(request.user)
