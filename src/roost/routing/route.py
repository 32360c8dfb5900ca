"""ApiRoute and RouteMatch frozen dataclasses."""

from collections.abc import Sequence
from dataclasses import dataclass

from roost._internal.types import ApiHandler, EntryHandler


def as_list(value: str | Sequence[str]) -> list[str]:
    """Normalize a single string or a sequence of strings to a list."""
    if isinstance(value, str):
        return [value]
    return list(value)


@dataclass(frozen=True, slots=True)
class ApiRoute:
    """A dashboard API route definition.

    ``method`` and ``route`` each accept one value or several; every
    combination is registered::

        ApiRoute("get", "/api/queues", list_queues)
        ApiRoute(["put", "post"], ["/api/queues/:name/pause"], pause_queue)
    """

    method: str | Sequence[str]
    route: str | Sequence[str]
    handler: ApiHandler

    @property
    def methods(self) -> list[str]:
        """Lower-cased method names."""
        return [m.lower() for m in as_list(self.method)]

    @property
    def patterns(self) -> list[str]:
        return as_list(self.route)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route lookup."""

    pattern: str
    handler: ApiHandler
    params: dict[str, str]


@dataclass(frozen=True, slots=True)
class EntryRoute:
    """The dashboard's HTML entry point.

    ``handler`` is called with ``base_path`` and ``ui_config`` keyword
    arguments and returns a ``Template``::

        def entry(*, base_path, ui_config):
            return Template("index.html", base_path=base_path, ui_config=ui_config)

        EntryRoute(["/", "/queue/:name"], entry)
    """

    route: str | Sequence[str]
    handler: EntryHandler

    @property
    def routes(self) -> list[str]:
        return as_list(self.route)

    def matches(self, path: str) -> bool:
        """Exact match against a route, with or without a trailing slash."""
        return any(path in (route, f"{route}/") for route in self.routes)
