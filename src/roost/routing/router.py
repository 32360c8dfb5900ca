"""Ordered route table.

Patterns are kept in registration order as ``(pattern, method -> handler)``
pairs. Lookup walks them front to back, so when two patterns could both
fit a path, the one registered first wins.
"""

from roost._internal.types import ApiHandler
from roost.routing.matcher import match_path
from roost.routing.route import RouteMatch


class RouteTable:
    """Pattern -> per-method handler table with first-match-wins lookup.

    Usage::

        table = RouteTable()
        table.add("/api/queues/:name", "get", get_queue)
        table.add("/api/queues/:name", "delete", drop_queue)
        table.compile()
        match = table.lookup("/api/queues/mail", "GET")
    """

    __slots__ = ("_compiled", "_entries")

    def __init__(self) -> None:
        self._entries: list[tuple[str, dict[str, ApiHandler]]] = []
        self._compiled = False

    def add(self, pattern: str, method: str, handler: ApiHandler) -> None:
        """Register *handler* for *method* under *pattern*.

        Re-registering a known pattern merges into its method map and
        keeps its original position. Must be called before ``compile()``.
        """
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        method = method.lower()
        for existing, methods in self._entries:
            if existing == pattern:
                methods[method] = handler
                return
        self._entries.append((pattern, {method: handler}))

    def compile(self) -> None:
        """Freeze the table. No more routes can be added."""
        self._compiled = True

    def lookup(self, path: str, method: str) -> RouteMatch | None:
        """Return the first registered route matching *path* and *method*."""
        method = method.lower()
        for pattern, methods in self._entries:
            handler = methods.get(method)
            if handler is None:
                continue
            params = match_path(pattern, path)
            if params is not None:
                return RouteMatch(pattern=pattern, handler=handler, params=params)
        return None

    @property
    def patterns(self) -> list[str]:
        """Registered patterns in match order."""
        return [pattern for pattern, _ in self._entries]

    def methods_for(self, pattern: str) -> frozenset[str]:
        """Methods registered under *pattern* (empty if unknown)."""
        for existing, methods in self._entries:
            if existing == pattern:
                return frozenset(methods)
        return frozenset()

    def __len__(self) -> int:
        return len(self._entries)
