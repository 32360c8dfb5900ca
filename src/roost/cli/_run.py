"""``roost run``: serve a resolved adapter with pounce."""

import argparse
import sys
from dataclasses import replace

from roost.cli._resolve import reload_path, resolve_app
from roost.errors import ConfigurationError


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it; CLI flags override the config."""
    try:
        handler, config = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    overrides = {
        name: value
        for name in ("host", "port", "workers")
        if (value := getattr(args, name)) is not None
    }
    config = replace(config, reload=args.reload or config.reload, **overrides)

    from roost.server.dev import run_server as serve

    serve(handler, config, app_path=reload_path(args.app) if config.reload else None)
