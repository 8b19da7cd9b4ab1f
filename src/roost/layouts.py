"""Layout strategies — deferred choice of a page's rendering shell.

A page controller is handed a strategy, not a layout name. The strategy
is asked again on every render, so a toggle flipped at runtime changes
the shell on the next request without re-registering anything.

Three construction patterns share one interface::

    fixed(COMPONENT_LAYOUT)                         # always the same shell
    component_aware(toggles, Toggles.COMPONENTS)    # on -> component layout
    legacy_when_on(toggles, Toggles.USE_OLD_...)    # on -> baseline layout

Polarity lives in the ``on``/``off`` arguments of ``ToggleGated``; the
mechanism itself has no opinion about which layout is "new".
"""

import logging
from collections.abc import Container
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from roost.toggles import ToggleSource

logger = logging.getLogger("roost.layouts")

type LayoutId = str

DEFAULT_LAYOUT: LayoutId = "layouts/single_page_app.html"
COMPONENT_LAYOUT: LayoutId = "layouts/component_layout.html"


@runtime_checkable
class LayoutStrategy(Protocol):
    """Zero-argument capability returning a layout template name.

    Implementations must be safe to call from many threads at once and
    must not cache their answer.
    """

    def resolve(self) -> LayoutId: ...

    def __call__(self) -> LayoutId: ...


@dataclass(frozen=True, slots=True)
class Fixed:
    """Always the same layout."""

    layout: LayoutId

    def resolve(self) -> LayoutId:
        return self.layout

    def __call__(self) -> LayoutId:
        return self.layout


@dataclass(frozen=True, slots=True)
class ToggleGated:
    """Pick between two layouts from a toggle's value at call time.

    Attributes:
        toggles: The toggle source, read on every call.
        toggle: Name of the gating toggle.
        on: Layout when the toggle is on.
        off: Layout when the toggle is off.
        fallback: Layout when the toggle is undeclared or the source
            fails. Undeclared is only detectable for sources that
            support ``in``; others go straight to ``is_toggle_on``.
    """

    toggles: ToggleSource
    toggle: str
    on: LayoutId
    off: LayoutId
    fallback: LayoutId = DEFAULT_LAYOUT

    def resolve(self) -> LayoutId:
        try:
            if isinstance(self.toggles, Container) and self.toggle not in self.toggles:
                logger.debug("Toggle %r is not declared; using %s", self.toggle, self.fallback)
                return self.fallback
            return self.on if self.toggles.is_toggle_on(self.toggle) else self.off
        except Exception:
            logger.debug("Reading toggle %r failed; using %s", self.toggle, self.fallback, exc_info=True)
            return self.fallback

    def __call__(self) -> LayoutId:
        return self.resolve()


def fixed(layout: LayoutId) -> Fixed:
    """A strategy for pages with a permanently known shell."""
    return Fixed(layout)


def component_aware(
    toggles: ToggleSource,
    toggle: str,
    *,
    component: LayoutId = COMPONENT_LAYOUT,
    default: LayoutId = DEFAULT_LAYOUT,
) -> ToggleGated:
    """Toggle on selects the component layout; off keeps the baseline."""
    return ToggleGated(toggles, toggle, on=component, off=default, fallback=default)


def legacy_when_on(
    toggles: ToggleSource,
    toggle: str,
    *,
    component: LayoutId = COMPONENT_LAYOUT,
    default: LayoutId = DEFAULT_LAYOUT,
) -> ToggleGated:
    """Toggle on keeps the old baseline layout; off uses the component layout.

    For deprecation-style toggles where "on" means "keep the old page".
    """
    return ToggleGated(toggles, toggle, on=default, off=component, fallback=default)
