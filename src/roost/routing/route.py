"""Route and RouteMatch frozen dataclasses."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Created when a controller activates, compiled into the route table
    once every controller has activated.
    """

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str] = frozenset({"GET"})
    name: str | None = None


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: Mapping[str, Any]
