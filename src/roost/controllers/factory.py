"""Controller construction.

``ControllerSpec`` is one row of the controller table: which controller
type to build and which layout strategy it gets. ``ControllerFactory``
turns a row into a live controller, injecting constructor parameters by
their type annotation.

Resolution for each constructor parameter:

1. ``PageTemplates`` — a fresh engine bound to the row's strategy
2. Registered providers — ``{annotation: zero-argument factory}``
3. A default value declared on the constructor

Anything else is a ``ConstructionError``: the registry is never
assembled around a controller that is missing a dependency.
"""

import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from roost.errors import ConstructionError
from roost.layouts import LayoutStrategy
from roost.templating.integration import PageTemplates, TemplateEngineFactory


def _constructor_parameters(controller: type) -> list[inspect.Parameter]:
    sig = inspect.signature(controller, eval_str=True)
    return [
        p
        for p in sig.parameters.values()
        if p.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    ]


@dataclass(frozen=True, slots=True)
class ControllerSpec:
    """A controller type and the layout strategy chosen for it."""

    controller: type
    layout: LayoutStrategy

    @property
    def dependencies(self) -> tuple[Any, ...]:
        """Service types the controller's constructor asks for."""
        return tuple(
            p.annotation
            for p in _constructor_parameters(self.controller)
            if p.annotation is not inspect.Parameter.empty and p.annotation is not PageTemplates
        )


class ControllerFactory:
    """Builds controllers from ``ControllerSpec`` rows.

    One ``create()`` call per row. Construction is eager: providers are
    called here, at startup, not on first request.
    """

    __slots__ = ("_providers", "_templates")

    def __init__(
        self,
        templates: TemplateEngineFactory,
        providers: Mapping[Any, Callable[[], Any]] | None = None,
    ) -> None:
        self._templates = templates
        self._providers: dict[Any, Callable[[], Any]] = dict(providers or {})

    def create(self, spec: ControllerSpec) -> Any:
        """Build the controller described by *spec*.

        Raises:
            ConstructionError: A required parameter has no provider, its
                provider raised, or the constructor raised.
        """
        controller = spec.controller
        kwargs: dict[str, Any] = {}

        for param in _constructor_parameters(controller):
            annotation = param.annotation
            if annotation is PageTemplates:
                kwargs[param.name] = self._templates.create(controller, spec.layout)
            elif annotation is not inspect.Parameter.empty and annotation in self._providers:
                try:
                    kwargs[param.name] = self._providers[annotation]()
                except Exception as exc:
                    raise ConstructionError(
                        controller, param.name, f"provider raised {exc!r}"
                    ) from exc
            elif param.default is not inspect.Parameter.empty:
                continue
            elif annotation is inspect.Parameter.empty:
                raise ConstructionError(controller, param.name, "is not annotated")
            else:
                type_name = getattr(annotation, "__name__", repr(annotation))
                raise ConstructionError(
                    controller, param.name, f"of type {type_name} has no provider"
                )

        try:
            return controller(**kwargs)
        except Exception as exc:
            raise ConstructionError(controller, None, f"constructor raised {exc!r}") from exc
