"""Adapter configuration.

AdapterConfig is a frozen dataclass, immutable after creation. The
adapter's ``set_*`` calls replace fields on it.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class AdapterConfig:
    """Adapter configuration. Immutable after creation.

    Seed it directly or build it up through the adapter's setters::

        config = AdapterConfig(base_path="/admin", static_route="/static",
                               static_dir="ui/dist", views_dir="ui/views",
                               ui_config={})
    """

    # Mount point of the dashboard
    base_path: str = "/"

    # Static assets: URL prefix and the directory it maps to
    static_route: str | None = None
    static_dir: str | Path | None = None

    # Entry view templates
    views_dir: str | Path | None = None

    # Opaque dashboard UI settings, passed through to the entry route
    ui_config: Any = None

    # Server (Adapter.run / roost run)
    host: str = "127.0.0.1"
    port: int = 8000
    workers: int = 1
    reload: bool = False
    log_level: str = "info"
