"""Page access checks.

The security model itself lives elsewhere; this module only asks a
``SecurityService`` about the request's user and turns a "no" into a
403 before a page renders.
"""

from typing import Protocol, runtime_checkable

from roost.errors import Forbidden
from roost.http.request import Request


@runtime_checkable
class SecurityService(Protocol):
    """What the access checks need to know about users."""

    def is_security_enabled(self) -> bool: ...

    def is_user_admin(self, user: str) -> bool: ...

    def is_user_group_admin(self, user: str) -> bool: ...


class AuthenticationHelper:
    """Access checks shared by page controllers.

    Each check returns ``None`` when the request may proceed and raises
    ``Forbidden`` otherwise. With security disabled, every check passes.
    """

    __slots__ = ("security",)

    def __init__(self, security: SecurityService) -> None:
        self.security = security

    def check_user(self, request: Request) -> None:
        """Any signed-in user."""
        if not self.security.is_security_enabled():
            return
        if request.user is None:
            raise Forbidden("You must be signed in to view this page.")

    def check_admin(self, request: Request) -> None:
        """System administrators only."""
        self.check_user(request)
        if not self.security.is_security_enabled():
            return
        if not self.security.is_user_admin(request.user):
            raise Forbidden("You are not authorized to view this page.")

    def check_admin_or_group_admin(self, request: Request) -> None:
        """System administrators or pipeline group administrators."""
        self.check_user(request)
        if not self.security.is_security_enabled():
            return
        user = request.user
        if not (self.security.is_user_admin(user) or self.security.is_user_group_admin(user)):
            raise Forbidden("You are not authorized to view this page.")
