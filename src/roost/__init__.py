"""Roost — a page controller registry with toggle-driven layouts.

Page controllers are declared in one table, built with their
dependencies at startup, and activated in order. Each controller gets
a layout strategy that is asked again on every render, so flipping a
feature toggle changes a page's shell without a restart.

Basic usage::

    from roost import App, AppConfig

    app = App(AppConfig(toggles_file="toggles.json"))
    app.provide(SecurityService, lambda: security)
    app.start()
"""

__version__ = "0.1.0"
__all__ = [
    "ActivationError",
    "App",
    "AppConfig",
    "COMPONENT_LAYOUT",
    "ConfigurationError",
    "ConstructionError",
    "ControllerFactory",
    "ControllerRegistry",
    "ControllerSpec",
    "DEFAULT_LAYOUT",
    "FeatureToggles",
    "Fixed",
    "LayoutStrategy",
    "PageController",
    "Request",
    "Response",
    "RoostError",
    "ToggleGated",
    "ToggleSource",
    "Toggles",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import roost`` fast and free of the template engine until
    something that renders is actually used.
    """
    if name == "App":
        from roost.app import App

        return App

    if name == "AppConfig":
        from roost.config import AppConfig

        return AppConfig

    if name in ("Request", "Response"):
        from roost.http import request as _req
        from roost.http import response as _resp

        return getattr(_req if name == "Request" else _resp, name)

    if name in ("COMPONENT_LAYOUT", "DEFAULT_LAYOUT", "Fixed", "LayoutStrategy", "ToggleGated"):
        from roost import layouts as _layouts

        return getattr(_layouts, name)

    if name in ("FeatureToggles", "ToggleSource", "Toggles"):
        from roost import toggles as _toggles

        return getattr(_toggles, name)

    if name in (
        "ControllerFactory",
        "ControllerRegistry",
        "ControllerSpec",
        "PageController",
    ):
        from roost import controllers as _controllers

        return getattr(_controllers, name)

    if name in ("ActivationError", "ConfigurationError", "ConstructionError", "RoostError"):
        from roost import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
