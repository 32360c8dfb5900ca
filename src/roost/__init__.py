"""Roost: serve a queue dashboard from any ASGI server.

Static assets, JSON API routes and the HTML entry view behind one
ASGI application, optionally mounted under a sub-path.

Basic usage::

    from roost import Adapter, ApiRoute, ControllerResult, EntryRoute, Template

    def list_queues(ctx):
        return ControllerResult({"queues": sorted(ctx.queues)})

    def entry(*, base_path, ui_config):
        return Template("index.html", base_path=base_path, ui_config=ui_config)

    adapter = (
        Adapter()
        .set_base_path("/admin")
        .set_static_path("/static", "ui/dist")
        .set_views_path("ui/views")
        .set_ui_config({})
        .set_queues({"mail": mail_queue})
        .set_error_handler(default_error_handler)
        .set_api_routes([ApiRoute("get", "/api/queues", list_queues)])
        .set_entry_route(EntryRoute("/", entry))
    )
    app = adapter.get_handler()
"""

__version__ = "0.1.0"
__all__ = [
    "Adapter",
    "AdapterConfig",
    "ApiRoute",
    "BoardHandler",
    "ConfigurationError",
    "ControllerResult",
    "EntryRoute",
    "HTTPError",
    "NotFound",
    "Request",
    "RequestContext",
    "Response",
    "RoostError",
    "Template",
    "default_error_handler",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import roost`` fast while providing a clean top-level API.
    """
    if name == "Adapter":
        from roost.adapter import Adapter

        return Adapter

    if name == "AdapterConfig":
        from roost.config import AdapterConfig

        return AdapterConfig

    if name in ("ApiRoute", "EntryRoute"):
        from roost.routing import route as _route

        return getattr(_route, name)

    if name == "BoardHandler":
        from roost.server.handler import BoardHandler

        return BoardHandler

    if name in ("ControllerResult", "RequestContext", "default_error_handler"):
        from roost import controller as _controller

        return getattr(_controller, name)

    if name == "Request":
        from roost.http.request import Request

        return Request

    if name == "Response":
        from roost.http.response import Response

        return Response

    if name == "Template":
        from roost.templating.returns import Template

        return Template

    if name in ("ConfigurationError", "HTTPError", "NotFound", "RoostError"):
        from roost import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
