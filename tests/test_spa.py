"""Tests for roost.spa — the page table and page-specific behavior."""

import json
import re
from collections.abc import Callable

from conftest import FakeSecurity

from roost.app import App
from roost.layouts import COMPONENT_LAYOUT, DEFAULT_LAYOUT, Fixed, ToggleGated
from roost.services import ServerEnvironment
from roost.spa import spa_controllers
from roost.spa.pages import (
    ElasticProfilesController,
    KitchenSinkController,
    PluginsController,
    RolesController,
)
from roost.testing import TestClient
from roost.toggles import FeatureToggles, Toggles


def _meta(html: str) -> dict:
    found = re.search(r'data-meta="([^"]*)"', html)
    assert found is not None
    raw = found[1].replace("&quot;", '"').replace("&#34;", '"').replace("&amp;", "&")
    return json.loads(raw)


class TestTable:
    def test_order(self, toggles: FeatureToggles) -> None:
        names = [spec.controller.__name__ for spec in spa_controllers(toggles)]
        assert names == [
            "RolesController",
            "AuthConfigsController",
            "AgentsController",
            "PluginsController",
            "ElasticProfilesController",
            "NewDashboardController",
            "ArtifactStoresController",
            "AnalyticsController",
            "DataSharingSettingsController",
            "DrainModeController",
            "ConfigReposController",
            "KitchenSinkController",
        ]

    def test_each_type_once(self, toggles: FeatureToggles) -> None:
        types = [spec.controller for spec in spa_controllers(toggles)]
        assert len(types) == len(set(types))

    def test_strategies(self, toggles: FeatureToggles) -> None:
        table = {spec.controller: spec.layout for spec in spa_controllers(toggles)}

        assert table[RolesController] == Fixed(DEFAULT_LAYOUT)
        assert table[KitchenSinkController] == Fixed(COMPONENT_LAYOUT)

        plugins = table[PluginsController]
        assert isinstance(plugins, ToggleGated)
        assert plugins.toggle == Toggles.COMPONENTS
        assert (plugins.on, plugins.off) == (COMPONENT_LAYOUT, DEFAULT_LAYOUT)

        elastic = table[ElasticProfilesController]
        assert isinstance(elastic, ToggleGated)
        assert elastic.toggle == Toggles.USE_OLD_ELASTIC_PROFILE_SPA
        assert (elastic.on, elastic.off) == (DEFAULT_LAYOUT, COMPONENT_LAYOUT)

    def test_custom_layout_names(self, toggles: FeatureToggles) -> None:
        specs = spa_controllers(toggles, default_layout="old.html", component_layout="new.html")
        assert {spec.layout.resolve() for spec in specs} == {"old.html", "new.html"}

    def test_toggle_source_shared(self, toggles: FeatureToggles) -> None:
        gated = [s.layout for s in spa_controllers(toggles) if isinstance(s.layout, ToggleGated)]
        assert len(gated) == 2
        assert all(strategy.toggles is toggles for strategy in gated)


class TestKitchenSink:
    def test_has_no_auth_helper(self, make_app: Callable[..., App]) -> None:
        app = make_app()
        app.start()
        sink = app.registry.controllers[-1]

        assert isinstance(sink, KitchenSinkController)
        assert sink.auth is None
        assert "kitchen-sink" in repr(sink)


class TestPageMeta:
    def test_agents(self, make_app: Callable[..., App]) -> None:
        app = make_app(environment=ServerEnvironment(websockets_enabled=True))
        with TestClient(app) as client:
            meta = _meta(client.get("/agents", user="someone").text)
        assert meta == {"is_user_admin": False, "websockets_enabled": True}

    def test_plugins_admin(self, make_app: Callable[..., App]) -> None:
        with TestClient(make_app()) as client:
            meta = _meta(client.get("/admin/plugins", user="admin").text)
        assert meta == {"is_user_admin": True}

    def test_dashboard(self, make_app: Callable[..., App]) -> None:
        with TestClient(make_app()) as client:
            meta = _meta(client.get("/dashboard", user="admin").text)
        assert meta == {
            "pipeline_count": 3,
            "should_show_analytics_icon": True,
            "websockets_enabled": False,
        }

    def test_dashboard_non_admin_has_no_analytics_icon(self, make_app: Callable[..., App]) -> None:
        with TestClient(make_app()) as client:
            meta = _meta(client.get("/dashboard", user="someone").text)
        assert meta["should_show_analytics_icon"] is False

    def test_analytics(self, make_app: Callable[..., App]) -> None:
        with TestClient(make_app()) as client:
            meta = _meta(client.get("/analytics", user="admin").text)
        assert meta == {"pipeline_count": 3, "plugins": ["com.example.analytics"]}

    def test_security_disabled_everyone_is_admin(self, make_app: Callable[..., App]) -> None:
        with TestClient(make_app(security=FakeSecurity(enabled=False))) as client:
            meta = _meta(client.get("/admin/plugins").text)
        assert meta == {"is_user_admin": True}

    def test_plain_page_has_empty_meta(self, make_app: Callable[..., App]) -> None:
        with TestClient(make_app()) as client:
            meta = _meta(client.get("/admin/artifact_stores", user="admin").text)
        assert meta == {}
