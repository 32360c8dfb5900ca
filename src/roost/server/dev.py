"""Serve a roost handler with pounce.

Pounce's ``run()`` takes an import string, but the adapter hands out a
live ``BoardHandler``. We build ``pounce.Server`` directly with the ASGI
callable.
"""

from roost._internal.asgi import ASGIApp
from roost.config import AdapterConfig


def run_server(
    app: ASGIApp,
    config: AdapterConfig,
    *,
    app_path: str | None = None,
) -> None:
    """Start a pounce server for *app* using the server fields of *config*.

    Args:
        app: ASGI callable (a ``BoardHandler``).
        config: Host, port, workers, reload and log level are read from here.
        app_path: Optional ``"module:attribute"`` import string. When
            provided, pounce reimports the app on each reload cycle.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    server_config = ServerConfig(
        host=config.host,
        port=config.port,
        workers=config.workers,
        reload=config.reload,
        log_level=config.log_level,
    )
    Server(server_config, app, app_path=app_path).run()
