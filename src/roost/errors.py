"""Roost exception hierarchy.

Shared across the registry, factory, route table, and app so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class RoostError(Exception):
    """Base for all roost-specific errors."""


class ConfigurationError(RoostError):
    """Raised when startup configuration is invalid.

    Duplicate controller registrations, registration after the registry
    has been sealed, and malformed toggle files all end up here.
    """


class ConstructionError(RoostError):
    """A controller could not be built: a dependency is missing, or a
    provider or the constructor itself raised.

    Fatal at startup: the registry is never assembled with a gap in it.
    """

    def __init__(self, controller: type, dependency: str | None, reason: str = "") -> None:
        self.controller = controller
        self.dependency = dependency
        msg = f"Cannot construct {controller.__name__}: "
        if dependency is None:
            msg += reason or "constructor failed"
        else:
            msg += f"dependency {dependency!r} " + (reason or "has no provider")
        super().__init__(msg)


class ActivationError(RoostError):
    """A controller raised while registering its routes.

    ``controller`` is the failing controller's type; the original
    exception is available as ``cause`` and as ``__cause__``.
    """

    def __init__(self, controller: type, cause: BaseException) -> None:
        self.controller = controller
        self.cause = cause
        super().__init__(f"Activation of {controller.__name__} failed: {cause}")


class UnknownToggleError(RoostError, KeyError):
    """Raised when changing the value of a toggle that was never declared."""

    def __str__(self) -> str:
        return f"Unknown toggle: {self.args[0]!r}"


@dataclass(frozen=True, slots=True)
class HTTPError(RoostError):
    """An error that maps directly to an HTTP status code.

    Raised by the route table and by page handlers. ``App.handle``
    turns these into responses with the matching status.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class Forbidden(HTTPError):  # noqa: N818
    """403 — the current user may not see this page."""

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(status=403, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
