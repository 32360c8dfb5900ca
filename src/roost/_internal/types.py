"""Shared type aliases used across roost modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# API route handler: receives a RequestContext, returns a ControllerResult
ApiHandler: TypeAlias = Callable[..., Any]

# Error handler: receives the raised exception, returns a ControllerResult
ErrorHandler: TypeAlias = Callable[[Exception], Any]

# Entry-route handler: receives base_path/ui_config, returns a Template
EntryHandler: TypeAlias = Callable[..., Any]
