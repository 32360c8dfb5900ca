"""Request routing for the dashboard: the handler the adapter hands out.

Every request walks the same ladder and stops at the first rung that
answers:

1. raw path under ``/static`` -> static file
2. strip the base path (``/`` if nothing is left)
3. stripped path under the static route -> static file
4. a registered API route -> API dispatch
5. an entry route, with or without trailing slash -> entry view
6. raw path under the base path and not under ``/api`` -> entry view
7. 404 Not Found

``BoardHandler`` is also the ASGI application: ``__call__`` adapts the
ASGI scope to ``handle()`` and sends the result back.
"""

import logging
from typing import Any

from roost._internal.asgi import Receive, Scope, Send
from roost._internal.types import ErrorHandler
from roost.http.request import Request
from roost.http.response import Response
from roost.routing.router import RouteTable
from roost.server.dispatch import dispatch_api
from roost.server.sender import send_response
from roost.server.static import StaticFiles
from roost.templating.integration import ViewRenderer

logger = logging.getLogger("roost.server")


def strip_base_path(pathname: str, base_path: str) -> str:
    """Remove the base path prefix, keeping a leading slash."""
    path = pathname.removeprefix(base_path) or "/"
    if not path.startswith("/"):
        path = f"/{path}"
    return path


class BoardHandler:
    """Routes requests to static files, API handlers, or the entry view.

    Holds no per-request state; everything it owns is fixed when the
    adapter builds it, so one instance serves concurrent requests.
    """

    __slots__ = (
        "_base_path",
        "_error_handler",
        "_queues",
        "_routes",
        "_static",
        "_static_route",
        "_views",
    )

    def __init__(
        self,
        *,
        base_path: str,
        static: StaticFiles,
        static_route: str,
        routes: RouteTable,
        views: ViewRenderer,
        queues: Any = None,
        error_handler: ErrorHandler | None = None,
    ) -> None:
        self._base_path = base_path
        self._static = static
        self._static_route = static_route
        self._routes = routes
        self._views = views
        self._queues = queues
        self._error_handler = error_handler

    @property
    def base_path(self) -> str:
        return self._base_path

    @property
    def routes(self) -> RouteTable:
        return self._routes

    async def handle(self, request: Request) -> Response:
        """Produce the response for one request."""
        pathname = request.path

        if pathname.startswith("/static"):
            return await self._static.serve(pathname)

        path = strip_base_path(pathname, self._base_path)

        if path.startswith(self._static_route):
            return await self._static.serve(path)

        response = await dispatch_api(
            request,
            strip_base_path(request.raw_path or pathname, self._base_path),
            routes=self._routes,
            queues=self._queues,
            error_handler=self._error_handler,
        )
        if response is not None:
            return response

        if self._views.entry_route.matches(path):
            return await self._views.render()

        if pathname.startswith(self._base_path) and not path.startswith("/api"):
            return await self._views.render()

        logger.debug("404 %s %s", request.method, pathname)
        return Response.text("Not Found", status=404)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            return

        request = Request.from_asgi(scope, receive)
        response = await self.handle(request)
        await send_response(response, send)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Acknowledge lifespan startup and shutdown; nothing to set up."""
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
