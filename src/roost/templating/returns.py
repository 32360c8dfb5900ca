"""Template return type for the entry route.

A frozen dataclass the entry-route handler returns; the view renderer
loads ``name`` from the views directory and renders it with ``context``.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Template:
    """Render a kida template from the views directory.

    Usage::

        return Template("index.html", base_path=base_path, title="Queues")
    """

    name: str
    context: dict[str, Any] = field(default_factory=dict)

    def __init__(self, name: str, /, **context: Any) -> None:
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "context", context)
