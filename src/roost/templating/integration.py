"""Kida environment setup and per-controller template engines.

``create_environment`` builds one kida Environment at startup.
``TemplateEngineFactory.create`` then hands each page controller its
own ``PageTemplates``, bound to the layout strategy chosen for that
controller. The strategy is consulted on every render.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from kida import ChoiceLoader, Environment, FileSystemLoader, PackageLoader

from roost.config import AppConfig
from roost.layouts import LayoutId, LayoutStrategy


@dataclass(frozen=True, slots=True)
class PageModel:
    """What a single-page-app shell needs to boot a page.

    Attributes:
        view_title: Text for ``<title>``.
        page_name: Name of the page's script bundle and mount point.
        meta: Values handed to the page script as ``data-meta`` JSON.
    """

    view_title: str
    page_name: str
    meta: Mapping[str, Any] = field(default_factory=dict)


def create_environment(config: AppConfig) -> Environment:
    """Create a kida Environment from app configuration.

    Application templates win over the packaged layouts, so an app can
    replace either shell by shipping a file with the same name.
    """
    loader = ChoiceLoader(
        [
            FileSystemLoader(str(config.template_dir)),
            PackageLoader("roost", "templates"),
        ]
    )
    return Environment(
        loader=loader,
        autoescape=config.autoescape,
        auto_reload=config.debug,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
    )


class PageTemplates:
    """Template engine for one page controller.

    Holds the controller's layout strategy for the controller's whole
    life; there is no way to swap it.
    """

    __slots__ = ("_assets_url", "_env", "_strategy", "controller")

    def __init__(
        self,
        env: Environment,
        controller: type,
        strategy: LayoutStrategy,
        *,
        assets_url: str = "/assets",
    ) -> None:
        self._env = env
        self._strategy = strategy
        self._assets_url = assets_url.rstrip("/")
        self.controller = controller

    @property
    def strategy(self) -> LayoutStrategy:
        return self._strategy

    @property
    def layout(self) -> LayoutId:
        """The layout a render started now would use."""
        return self._strategy.resolve()

    def render(self, model: PageModel) -> str:
        """Render *model* inside the layout resolved at call time."""
        template = self._env.get_template(self._strategy.resolve())
        return template.render(
            {
                "view_title": model.view_title,
                "page_name": model.page_name,
                "meta_json": json.dumps(dict(model.meta), sort_keys=True),
                "assets_url": self._assets_url,
            }
        )


class TemplateEngineFactory:
    """Creates one ``PageTemplates`` per controller, sharing an environment."""

    __slots__ = ("_assets_url", "_env")

    def __init__(self, env: Environment, *, assets_url: str = "/assets") -> None:
        self._env = env
        self._assets_url = assets_url

    @property
    def environment(self) -> Environment:
        return self._env

    def create(self, controller: type, strategy: LayoutStrategy) -> PageTemplates:
        return PageTemplates(self._env, controller, strategy, assets_url=self._assets_url)
