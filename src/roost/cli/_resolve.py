"""Import resolution: resolves ``"module:attribute"`` strings to handlers.

Accepts a configured ``Adapter``, a ``BoardHandler``, or a zero-argument
factory returning either.
"""

import importlib
from typing import Any

from roost.adapter import Adapter
from roost.config import AdapterConfig
from roost.server.handler import BoardHandler


def _lookup(import_string: str) -> tuple[str, str, Any]:
    """Split *import_string*, defaulting the attribute to ``adapter``."""
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "adapter"

    module = importlib.import_module(module_path)
    return module_path, attr_name, getattr(module, attr_name)


def _is_factory(obj: Any) -> bool:
    return callable(obj) and not isinstance(obj, (Adapter, BoardHandler))


def resolve_app(import_string: str) -> tuple[BoardHandler, AdapterConfig]:
    """Resolve an import string to a handler and the config to serve it with.

    When the attribute portion is omitted it defaults to ``"adapter"``
    (``"myboard"`` resolves to ``myboard.adapter``). A bare
    ``BoardHandler`` is served with a default ``AdapterConfig``.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not an Adapter or BoardHandler.
    """
    _, _, obj = _lookup(import_string)

    if _is_factory(obj):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if isinstance(obj, Adapter):
        return obj.get_handler(), obj.config
    if isinstance(obj, BoardHandler):
        return obj, AdapterConfig()

    msg = f"{import_string!r} resolved to {type(obj).__name__}, not a roost Adapter"
    raise TypeError(msg)


def reload_path(import_string: str) -> str:
    """The ``module:attribute`` string pounce re-imports on each reload.

    Fills in the default attribute and marks factories with pounce's
    ``()`` suffix so the re-import yields an ASGI callable.
    """
    module_path, attr_name, obj = _lookup(import_string)
    if _is_factory(obj):
        attr_name = f"{attr_name}()"
    return f"{module_path}:{attr_name}"
