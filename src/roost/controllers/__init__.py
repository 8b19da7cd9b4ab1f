"""Page controllers, their factory, and the registry that activates them."""

from roost.controllers.base import PageController, SpaPageController
from roost.controllers.factory import ControllerFactory, ControllerSpec
from roost.controllers.registry import ControllerRegistry, RegistryState, assemble

__all__ = [
    "ControllerFactory",
    "ControllerRegistry",
    "ControllerSpec",
    "PageController",
    "RegistryState",
    "SpaPageController",
    "assemble",
]
