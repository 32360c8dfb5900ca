"""The roost adapter.

Mutable during setup (base path, static assets, views, routes, queues).
Frozen when ``get_handler()`` is first called: the returned
``BoardHandler`` only ever sees the configuration as it was then.
"""

import threading
from collections.abc import Iterable, Sequence
from dataclasses import replace
from pathlib import Path
from typing import Any

from roost._internal.asgi import Receive, Scope, Send
from roost._internal.types import ApiHandler, ErrorHandler
from roost.config import AdapterConfig
from roost.errors import ConfigurationError
from roost.routing.route import ApiRoute, EntryRoute, as_list
from roost.routing.router import RouteTable
from roost.server.handler import BoardHandler
from roost.server.static import StaticFiles
from roost.templating.integration import ViewRenderer


class Adapter:
    """Serves a queue dashboard over ASGI.

    Setup calls return the adapter, so they chain::

        adapter = (
            Adapter()
            .set_base_path("/admin")
            .set_static_path("/static", "ui/dist")
            .set_views_path("ui/views")
            .set_ui_config({})
            .set_queues(registry)
            .set_error_handler(default_error_handler)
            .set_api_routes(api_routes)
            .set_entry_route(EntryRoute("/", entry))
        )
        app = adapter.get_handler()  # ASGI application; the adapter itself is one too

    Thread safety:
        Setup is single-threaded. The freeze in ``get_handler()`` takes a
        lock so concurrent first calls build exactly one handler.
    """

    __slots__ = (
        "_entry_route",
        "_error_handler",
        "_freeze_lock",
        "_frozen",
        "_handler",
        "_queues",
        "_routes",
        "config",
    )

    def __init__(self, config: AdapterConfig | None = None) -> None:
        self.config: AdapterConfig = config or AdapterConfig()
        self._routes = RouteTable()
        self._queues: Any = None
        self._error_handler: ErrorHandler | None = None
        self._entry_route: EntryRoute | None = None
        self._frozen = False
        self._freeze_lock = threading.Lock()
        self._handler: BoardHandler | None = None

    # -- Setup --

    def set_base_path(self, path: str) -> Adapter:
        """Mount the dashboard under *path* (default ``/``)."""
        self._check_not_frozen()
        self.config = replace(self.config, base_path=path)
        return self

    def set_static_path(self, static_route: str, static_dir: str | Path) -> Adapter:
        """Serve files from *static_dir* for URLs under *static_route*."""
        self._check_not_frozen()
        self.config = replace(self.config, static_route=static_route, static_dir=static_dir)
        return self

    def set_views_path(self, views_dir: str | Path) -> Adapter:
        """Directory the entry-route template is loaded from."""
        self._check_not_frozen()
        self.config = replace(self.config, views_dir=views_dir)
        return self

    def set_ui_config(self, ui_config: Any) -> Adapter:
        """Opaque dashboard UI settings, passed to the entry-route handler."""
        self._check_not_frozen()
        self.config = replace(self.config, ui_config=ui_config)
        return self

    def set_error_handler(self, handler: ErrorHandler) -> Adapter:
        """Handler that turns exceptions from API handlers into results."""
        self._check_not_frozen()
        self._error_handler = handler
        return self

    def set_queues(self, queues: Any) -> Adapter:
        """Opaque queue registry, forwarded to every API handler."""
        self._check_not_frozen()
        self._queues = queues
        return self

    def set_entry_route(self, entry_route: EntryRoute) -> Adapter:
        """The HTML entry view and the path(s) it answers on."""
        self._check_not_frozen()
        self._entry_route = entry_route
        return self

    def set_api_routes(self, routes: Iterable[ApiRoute]) -> Adapter:
        """Register every (method, pattern) pair of every route.

        Raises ``ConfigurationError`` unless ``set_queues()`` and
        ``set_error_handler()`` were called first.
        """
        self._check_not_frozen()
        if self._error_handler is None or self._queues is None:
            msg = "Call 'set_queues' and 'set_error_handler' before 'set_api_routes'."
            raise ConfigurationError(msg)

        for route in routes:
            for method in route.methods:
                self.register_route(route.patterns, method, route.handler)
        return self

    def register_route(
        self,
        route_or_routes: str | Sequence[str],
        method: str,
        handler: ApiHandler,
    ) -> Adapter:
        """Register *handler* for *method* under one or more patterns.

        Raises ``ConfigurationError`` unless ``set_queues()`` was called first.
        """
        self._check_not_frozen()
        if self._queues is None:
            msg = "Call 'set_queues' before 'register_route'."
            raise ConfigurationError(msg)

        for pattern in as_list(route_or_routes):
            self._routes.add(pattern, method, handler)
        return self

    # -- Handler --

    def get_handler(self) -> BoardHandler:
        """Validate the setup and return the ASGI handler.

        Raises ``ConfigurationError`` if the static path, entry route,
        views path or UI config is missing.
        """
        if self._handler is not None:
            return self._handler
        with self._freeze_lock:
            if self._handler is None:
                self._handler = self._freeze()
        return self._handler

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the dashboard with pounce."""
        from roost.server.dev import run_server

        handler = self.get_handler()
        config = self.config
        if host is not None:
            config = replace(config, host=host)
        if port is not None:
            config = replace(config, port=port)
        run_server(handler, config)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI entry point. Freezes the adapter on the first call."""
        await self.get_handler()(scope, receive, send)

    # -- Internal --

    def _freeze(self) -> BoardHandler:
        """Build the handler. MUST only be called while holding _freeze_lock."""
        config = self.config

        if not config.static_route or not config.static_dir:
            msg = "Call 'set_static_path' before 'get_handler'."
            raise ConfigurationError(msg)
        if self._entry_route is None:
            msg = "Call 'set_entry_route' before 'get_handler'."
            raise ConfigurationError(msg)
        if not config.views_dir:
            msg = "Call 'set_views_path' before 'get_handler'."
            raise ConfigurationError(msg)
        if config.ui_config is None:
            msg = "Call 'set_ui_config' before 'get_handler'."
            raise ConfigurationError(msg)

        self._routes.compile()
        self._frozen = True

        return BoardHandler(
            base_path=config.base_path,
            static=StaticFiles(
                config.static_dir,
                static_route=config.static_route,
                base_path=config.base_path,
            ),
            static_route=config.static_route,
            routes=self._routes,
            views=ViewRenderer(
                self._entry_route,
                views_dir=config.views_dir,
                base_path=config.base_path,
                ui_config=config.ui_config,
            ),
            queues=self._queues,
            error_handler=self._error_handler,
        )

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the adapter after get_handler() has been called. "
                "Finish setup before handing the handler to a server."
            )
            raise RuntimeError(msg)
