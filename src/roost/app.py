"""Roost application class.

Mutable during setup (service providers, controller table).
Started exactly once: the controller registry is assembled, every
controller activates, and the route table is compiled. After that the
app is read-only shared state.
"""

import threading
from collections.abc import Callable, Iterable
from typing import Any

from kida import Environment

from roost._internal.asgi import Receive, Scope, Send
from roost.config import AppConfig
from roost.controllers.factory import ControllerFactory, ControllerSpec
from roost.controllers.registry import ControllerRegistry, assemble
from roost.errors import HTTPError
from roost.http.request import Request
from roost.http.response import Response
from roost.routing.table import RouteTable
from roost.security import AuthenticationHelper, SecurityService
from roost.server.errors import handle_http_error, handle_internal_error
from roost.server.sender import send_response
from roost.templating.integration import TemplateEngineFactory, create_environment
from roost.toggles import FeatureToggles, ToggleSource


class App:
    """The roost application.

    Usage::

        app = App(AppConfig(toggles_file="toggles.json"))
        app.provide(SecurityService, lambda: security)
        app.provide(ServerEnvironment, lambda: ServerEnvironment())
        ...
        app.start()  # or let the ASGI lifespan do it

    Thread safety:
        Setup is single-threaded. ``start()`` uses a Lock + double-check
        so exactly one thread assembles and activates, even if several
        ASGI workers hit the app at once.
    """

    __slots__ = (
        "_custom_kida_env",
        "_kida_env",
        "_providers",
        "_registry",
        "_routes",
        "_specs",
        "_start_error",
        "_start_lock",
        "_started",
        "config",
        "toggles",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        toggles: ToggleSource | None = None,
        kida_env: Environment | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        if toggles is None:
            if self.config.toggles_file is not None:
                toggles = FeatureToggles.from_files(
                    self.config.toggles_file, self.config.toggle_overrides_file
                )
            else:
                toggles = FeatureToggles()
        self.toggles: ToggleSource = toggles
        self._providers: dict[Any, Callable[[], Any]] = {}
        self._specs: tuple[ControllerSpec, ...] | None = None
        self._custom_kida_env: Environment | None = kida_env
        self._started: bool = False
        self._start_error: Exception | None = None
        self._start_lock: threading.Lock = threading.Lock()

        # Set during start()
        self._kida_env: Environment | None = None
        self._registry: ControllerRegistry | None = None
        self._routes: RouteTable | None = None

    # -- Setup --

    def provide(self, annotation: Any, factory: Callable[[], Any]) -> None:
        """Register a provider for controller constructor injection.

        When a controller constructor parameter is annotated with
        *annotation*, the factory is called (with no arguments) while the
        controller is built at startup::

            app.provide(PipelineConfigService, lambda: pipelines)
        """
        self._check_not_started()
        self._providers[annotation] = factory

    def controllers(self, specs: Iterable[ControllerSpec]) -> None:
        """Replace the default single-page-app controller table."""
        self._check_not_started()
        self._specs = tuple(specs)

    # -- Startup --

    def start(self) -> None:
        """Assemble the registry and activate every controller.

        Runs once; later calls return immediately. Any construction or
        activation error propagates and the app stays unstarted. A failed
        start is never retried: later calls re-raise the same error.
        """
        if self._started:
            return
        with self._start_lock:
            if self._started:
                return
            if self._start_error is not None:
                raise self._start_error
            try:
                self._start()
            except Exception as exc:
                self._start_error = exc
                raise

    def _start(self) -> None:
        """MUST only be called while holding _start_lock."""
        from roost.spa.table import spa_controllers

        env = self._custom_kida_env or create_environment(self.config)
        routes = RouteTable()
        templates = TemplateEngineFactory(env, assets_url=self.config.assets_url)
        factory = ControllerFactory(templates, self._build_providers(routes))

        specs = self._specs
        if specs is None:
            specs = spa_controllers(
                self.toggles,
                default_layout=self.config.default_layout,
                component_layout=self.config.component_layout,
            )

        registry = assemble(specs, factory)
        registry.activate_all()
        routes.compile()

        self._kida_env = env
        self._registry = registry
        self._routes = routes
        self._started = True

    def _build_providers(self, routes: RouteTable) -> dict[Any, Callable[[], Any]]:
        toggles = self.toggles
        providers: dict[Any, Callable[[], Any]] = {
            RouteTable: lambda: routes,
            ToggleSource: lambda: toggles,
        }
        providers.update(self._providers)

        security_factory = providers.get(SecurityService)
        if security_factory is not None and AuthenticationHelper not in providers:
            providers[AuthenticationHelper] = lambda: AuthenticationHelper(security_factory())
        return providers

    @property
    def started(self) -> bool:
        return self._started

    @property
    def registry(self) -> ControllerRegistry:
        if self._registry is None:
            msg = "The app has not been started."
            raise RuntimeError(msg)
        return self._registry

    @property
    def routes(self) -> RouteTable:
        if self._routes is None:
            msg = "The app has not been started."
            raise RuntimeError(msg)
        return self._routes

    # -- Requests --

    def handle(self, request: Request) -> Response:
        """Dispatch *request* to the matching page handler.

        An app whose startup failed answers every request with a 500.
        """
        try:
            self.start()
        except Exception as exc:
            return handle_internal_error(exc, request, self.config.debug)
        assert self._routes is not None

        try:
            match = self._routes.match(request.method, request.path)
            result = match.route.handler(request.with_path_params(match.path_params))
        except HTTPError as exc:
            return handle_http_error(exc, request, self.config.debug)
        except Exception as exc:
            return handle_internal_error(exc, request, self.config.debug)

        if isinstance(result, Response):
            return result
        return Response(body=str(result))

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        response = self.handle(Request.from_asgi(scope))
        await send_response(response, send)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Start the app during lifespan startup.

        A failed start is reported as ``lifespan.startup.failed`` so the
        server refuses to come up instead of serving half its routes.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self.start()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _check_not_started(self) -> None:
        if self._started:
            msg = (
                "Cannot modify the app after it has started. "
                "Register providers and controllers before calling app.start()."
            )
            raise RuntimeError(msg)
