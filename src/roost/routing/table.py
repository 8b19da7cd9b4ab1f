"""Ordered route table.

Controllers add routes while they activate; the table is compiled once
startup finishes. Matching walks routes in registration order, so a
controller activated earlier wins when two patterns overlap.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from roost.errors import ConfigurationError, MethodNotAllowed, NotFound
from roost.routing.params import CONVERTERS, convert_param
from roost.routing.route import Route, RouteMatch

_PARAM = re.compile(r"\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::(?P<type>[a-z]+))?\}")


@dataclass(frozen=True, slots=True)
class _CompiledRoute:
    route: Route
    pattern: re.Pattern[str]
    param_types: dict[str, str]


def compile_path(path: str) -> tuple[re.Pattern[str], dict[str, str]]:
    """Compile a route path into a regex and its parameter types.

    A trailing slash is always optional. Examples::

        "/admin/roles"              -> ^/admin/roles$
        "/analytics/{plugin_id}"    -> ^/analytics/(?P<plugin_id>[^/]+)$
        "/agents/{uuid}/{job:int}"  -> ... (?P<job>\\d+)$
    """
    if "<" in path and ">" in path:
        msg = f"Route {path!r} uses <param> syntax; use {{param}} instead."
        raise ConfigurationError(msg)

    param_types: dict[str, str] = {}
    parts: list[str] = []
    position = 0
    normalized = "/" + path.strip("/")
    for match in _PARAM.finditer(normalized):
        parts.append(re.escape(normalized[position : match.start()]))
        name = match["name"]
        param_type = match["type"] or "str"
        if param_type not in CONVERTERS:
            msg = f"Unknown converter {param_type!r} in route {path!r}"
            raise ConfigurationError(msg)
        if name in param_types:
            msg = f"Duplicate parameter {name!r} in route {path!r}"
            raise ConfigurationError(msg)
        param_types[name] = param_type
        pattern, _ = CONVERTERS[param_type]
        parts.append(f"(?P<{name}>{pattern})")
        position = match.end()
    parts.append(re.escape(normalized[position:]))
    return re.compile("^" + "".join(parts) + "/?$"), param_types


class RouteTable:
    """The server route substrate page controllers register against.

    Usage::

        table = RouteTable()
        table.add(Route("/admin/roles", handler))
        table.compile()
        match = table.match("GET", "/admin/roles")
    """

    __slots__ = ("_compiled", "_routes")

    def __init__(self) -> None:
        self._routes: list[_CompiledRoute] = []
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        pattern, param_types = compile_path(route.path)
        self._routes.append(_CompiledRoute(route, pattern, param_types))

    def get(self, path: str, handler: Callable[..., Any], *, name: str | None = None) -> None:
        """Shorthand for adding a GET route."""
        self.add(Route(path, handler, frozenset({"GET"}), name))

    @property
    def routes(self) -> list[Route]:
        """All registered routes, in registration order."""
        return [compiled.route for compiled in self._routes]

    @property
    def compiled(self) -> bool:
        return self._compiled

    def compile(self) -> None:
        """Freeze the table. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request against the table, earliest registration first.

        Raises ``NotFound`` if no route matches the path.
        Raises ``MethodNotAllowed`` if the path matches but the method doesn't.
        """
        allowed: set[str] = set()
        for compiled in self._routes:
            found = compiled.pattern.match(path)
            if found is None:
                continue
            if method not in compiled.route.methods:
                allowed.update(compiled.route.methods)
                continue
            params = {
                name: convert_param(value, compiled.param_types[name])
                for name, value in found.groupdict().items()
            }
            return RouteMatch(route=compiled.route, path_params=params)

        if allowed:
            raise MethodNotAllowed(frozenset(allowed))
        raise NotFound(f"No route matches {method} {path!r}")

    def __len__(self) -> int:
        return len(self._routes)
