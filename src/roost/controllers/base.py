"""Page controllers.

A page controller is built with everything it needs already bound and
exposes one operation, ``activate()``, which registers its routes on
the shared route table. The registry never looks any further inside.
"""

from collections.abc import Mapping
from typing import Any, ClassVar, Protocol, runtime_checkable

from roost.http.request import Request
from roost.http.response import Response
from roost.routing.table import RouteTable
from roost.security import AuthenticationHelper
from roost.templating.integration import PageModel, PageTemplates


@runtime_checkable
class PageController(Protocol):
    """Anything that can register its own routes."""

    def activate(self) -> None: ...


class SpaPageController:
    """Base for pages served as a single-page-app shell.

    Subclasses set ``path``, ``view_title`` and ``page_name``, pick an
    access check, and optionally contribute ``meta()`` values for the
    page script. Extra service dependencies go in the subclass
    constructor; the factory injects them by annotation.

    Example::

        class RolesController(SpaPageController):
            path = "/admin/security/roles"
            view_title = "Roles"
            page_name = "roles"
    """

    path: ClassVar[str]
    view_title: ClassVar[str]
    page_name: ClassVar[str]

    def __init__(
        self,
        auth: AuthenticationHelper,
        templates: PageTemplates,
        routes: RouteTable,
    ) -> None:
        self.auth = auth
        self.templates = templates
        self.routes = routes

    def check_access(self, request: Request) -> None:
        """Raise ``Forbidden`` unless *request* may see the page."""
        self.auth.check_admin(request)

    def meta(self, request: Request) -> Mapping[str, Any]:
        return {}

    def index(self, request: Request) -> Response:
        self.check_access(request)
        model = PageModel(self.view_title, self.page_name, self.meta(request))
        return Response(self.templates.render(model))

    def activate(self) -> None:
        self.routes.get(self.path, self.index, name=self.page_name)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.path!r} layout={self.templates.layout!r}>"
