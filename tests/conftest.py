"""Shared fixtures: fake collaborators and a fully wired app."""

from collections.abc import Callable

import pytest

from roost.app import App
from roost.config import AppConfig
from roost.security import SecurityService
from roost.services import AnalyticsExtension, PipelineConfigService, ServerEnvironment
from roost.toggles import FeatureToggles, Toggles


class FakeSecurity:
    def __init__(
        self,
        *,
        enabled: bool = True,
        admins: tuple[str, ...] = ("admin",),
        group_admins: tuple[str, ...] = ("group-admin",),
    ) -> None:
        self.enabled = enabled
        self.admins = admins
        self.group_admins = group_admins

    def is_security_enabled(self) -> bool:
        return self.enabled

    def is_user_admin(self, user: str) -> bool:
        return user in self.admins

    def is_user_group_admin(self, user: str) -> bool:
        return user in self.group_admins


class FakePipelines:
    def __init__(self, count: int = 3) -> None:
        self.count = count

    def pipeline_count(self) -> int:
        return self.count


class FakeAnalytics:
    def dashboard_plugins(self) -> list[str]:
        return ["com.example.analytics"]


@pytest.fixture
def toggles() -> FeatureToggles:
    return FeatureToggles(
        {
            Toggles.COMPONENTS: False,
            Toggles.USE_OLD_ELASTIC_PROFILE_SPA: False,
            Toggles.SERVER_DRAIN_MODE: True,
        }
    )


@pytest.fixture
def make_app(toggles: FeatureToggles) -> Callable[..., App]:
    """Build an App with every service the default page table needs."""

    def _make(
        *,
        security: FakeSecurity | None = None,
        environment: ServerEnvironment | None = None,
        config: AppConfig | None = None,
    ) -> App:
        app = App(config, toggles=toggles)
        sec = security or FakeSecurity()
        env = environment or ServerEnvironment()
        pipelines = FakePipelines()
        analytics = FakeAnalytics()
        app.provide(SecurityService, lambda: sec)
        app.provide(ServerEnvironment, lambda: env)
        app.provide(PipelineConfigService, lambda: pipelines)
        app.provide(AnalyticsExtension, lambda: analytics)
        return app

    return _make
