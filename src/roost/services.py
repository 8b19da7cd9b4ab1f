"""Service interfaces page controllers depend on.

Only the calls the pages make are declared here. Register concrete
implementations with ``App.provide()``.
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class PipelineConfigService(Protocol):
    def pipeline_count(self) -> int: ...


@runtime_checkable
class AnalyticsExtension(Protocol):
    def dashboard_plugins(self) -> list[str]:
        """Ids of installed plugins that contribute dashboard analytics."""
        ...


@dataclass(frozen=True, slots=True)
class ServerEnvironment:
    """Server-wide settings surfaced to page scripts."""

    websockets_enabled: bool = False
    analytics_enabled: bool = True
