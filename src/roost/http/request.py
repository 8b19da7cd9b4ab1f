"""Immutable HTTP request.

Only the metadata page handlers need: method, path, headers, matched
path parameters, and the authenticated user name (if any).
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``user`` is the name put on the ASGI scope by whatever authentication
    layer sits in front of the app; ``None`` means anonymous.
    """

    method: str
    path: str
    headers: Mapping[str, str] = field(default_factory=dict)
    path_params: Mapping[str, Any] = field(default_factory=dict)
    user: str | None = None

    @property
    def is_fragment(self) -> bool:
        """True if this is an htmx fragment request (HX-Request header)."""
        return self.headers.get("hx-request") == "true"

    def with_path_params(self, path_params: Mapping[str, Any]) -> Request:
        """Return a copy carrying the parameters captured by the route."""
        return replace(self, path_params=dict(path_params))

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any]) -> Request:
        """Create a Request from an ASGI HTTP scope."""
        headers = {
            name.decode("latin-1").lower(): value.decode("latin-1")
            for name, value in scope.get("headers", ())
        }
        user = scope.get("user")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=headers,
            user=user if isinstance(user, str) else getattr(user, "username", None),
        )
