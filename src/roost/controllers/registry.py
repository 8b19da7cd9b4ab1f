"""Controller registry — ordered, assembled once, activated once.

Lifecycle::

    ASSEMBLING --seal()--> READY --activate_all()--> ACTIVATED

Registration order is activation order. Controllers may depend on it
(earlier routes take precedence), so the registry never reorders.

Activation is all-or-nothing from the caller's point of view: the first
controller that raises stops the loop, and the error names that
controller. A server with half its routes is not allowed to start.
"""

import logging
from collections.abc import Iterable, Iterator
from enum import Enum

from roost.controllers.base import PageController
from roost.controllers.factory import ControllerFactory, ControllerSpec
from roost.errors import ActivationError, ConfigurationError

logger = logging.getLogger("roost.registry")


class RegistryState(Enum):
    ASSEMBLING = "assembling"
    READY = "ready"
    ACTIVATED = "activated"


class ControllerRegistry:
    """Ordered collection of page controllers.

    Usage::

        registry = ControllerRegistry()
        registry.register(RolesController(...))
        registry.register(PluginsController(...))
        registry.activate_all()

    Not thread-safe during assembly; assembly and activation happen on
    the startup path before any request is served. After activation the
    registry is read-only.
    """

    __slots__ = ("_controllers", "_state", "_types")

    def __init__(self) -> None:
        self._controllers: list[PageController] = []
        self._types: set[type] = set()
        self._state = RegistryState.ASSEMBLING

    @property
    def state(self) -> RegistryState:
        return self._state

    @property
    def controllers(self) -> tuple[PageController, ...]:
        return tuple(self._controllers)

    def register(self, controller: PageController) -> None:
        """Append *controller*. Only allowed while assembling.

        Raises:
            ConfigurationError: The registry is sealed, or a controller
                of the same type is already registered.
        """
        if self._state is not RegistryState.ASSEMBLING:
            msg = (
                f"Cannot register {type(controller).__name__}: the registry is "
                f"{self._state.value}. Register controllers before activation."
            )
            raise ConfigurationError(msg)
        controller_type = type(controller)
        if controller_type in self._types:
            msg = f"Controller {controller_type.__name__} is already registered"
            raise ConfigurationError(msg)
        self._types.add(controller_type)
        self._controllers.append(controller)

    def seal(self) -> None:
        """Close registration. Idempotent."""
        if self._state is RegistryState.ASSEMBLING:
            self._state = RegistryState.READY

    def activate_all(self) -> None:
        """Activate every controller in registration order.

        The registry does not guard against repeat calls; a second call
        activates every controller again. Call this exactly once, from
        the startup path.

        Raises:
            ActivationError: The first controller that raised, chained
                to its original exception. Later controllers are not
                activated.
        """
        self.seal()
        if self._state is RegistryState.ACTIVATED:
            logger.warning("activate_all() called again on an activated registry")

        for controller in self._controllers:
            controller_type = type(controller)
            logger.debug("Activating %s", controller_type.__name__)
            try:
                controller.activate()
            except Exception as exc:
                logger.exception("Activation of %s failed", controller_type.__name__)
                raise ActivationError(controller_type, exc) from exc

        self._state = RegistryState.ACTIVATED
        logger.info("Activated %d page controllers", len(self._controllers))

    def __len__(self) -> int:
        return len(self._controllers)

    def __iter__(self) -> Iterator[PageController]:
        return iter(tuple(self._controllers))


def assemble(specs: Iterable[ControllerSpec], factory: ControllerFactory) -> ControllerRegistry:
    """Build and seal a registry from a controller table.

    One factory call per row, in table order. A ``ConstructionError``
    from any row propagates; nothing is returned half-built.
    """
    registry = ControllerRegistry()
    for spec in specs:
        registry.register(factory.create(spec))
    registry.seal()
    return registry
