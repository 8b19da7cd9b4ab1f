"""The controller table: which pages exist and which shell each uses.

The layout column is rollout policy. It changes independently of the
controllers, so it lives here, one readable row per page, rather than
inside each controller.
"""

from roost.controllers.factory import ControllerSpec
from roost.layouts import (
    COMPONENT_LAYOUT,
    DEFAULT_LAYOUT,
    LayoutId,
    component_aware,
    fixed,
    legacy_when_on,
)
from roost.spa.pages import (
    AgentsController,
    AnalyticsController,
    ArtifactStoresController,
    AuthConfigsController,
    ConfigReposController,
    DataSharingSettingsController,
    DrainModeController,
    ElasticProfilesController,
    KitchenSinkController,
    NewDashboardController,
    PluginsController,
    RolesController,
)
from roost.toggles import Toggles, ToggleSource


def spa_controllers(
    toggles: ToggleSource,
    *,
    default_layout: LayoutId = DEFAULT_LAYOUT,
    component_layout: LayoutId = COMPONENT_LAYOUT,
) -> tuple[ControllerSpec, ...]:
    """The single-page-app controllers, in activation order."""
    default = fixed(default_layout)
    component = fixed(component_layout)
    plugins = component_aware(
        toggles, Toggles.COMPONENTS, component=component_layout, default=default_layout
    )
    elastic_profiles = legacy_when_on(
        toggles,
        Toggles.USE_OLD_ELASTIC_PROFILE_SPA,
        component=component_layout,
        default=default_layout,
    )

    return (
        ControllerSpec(RolesController, default),
        ControllerSpec(AuthConfigsController, default),
        ControllerSpec(AgentsController, default),
        ControllerSpec(PluginsController, plugins),
        ControllerSpec(ElasticProfilesController, elastic_profiles),
        ControllerSpec(NewDashboardController, default),
        ControllerSpec(ArtifactStoresController, default),
        ControllerSpec(AnalyticsController, default),
        ControllerSpec(DataSharingSettingsController, default),
        ControllerSpec(DrainModeController, component),
        ControllerSpec(ConfigReposController, component),
        ControllerSpec(KitchenSinkController, component),
    )
