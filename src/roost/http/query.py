"""Query string parameters.

Plain indexing reads the last value for a name, the way a dashboard's
``?state=a&state=b`` filter is meant to be read.
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qsl


class QueryParams(Mapping[str, str]):
    """Immutable query parameters with last-value-wins access."""

    __slots__ = ("_last",)

    def __init__(self, query_string: bytes = b"") -> None:
        pairs = parse_qsl(query_string.decode("latin-1"), keep_blank_values=True)
        object.__setattr__(self, "_last", dict(pairs))

    def __getitem__(self, key: str) -> str:
        return self._last[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._last)

    def __len__(self) -> int:
        return len(self._last)

    def __repr__(self) -> str:
        return f"QueryParams({self._last!r})"

    def to_dict(self) -> dict[str, str]:
        """Name -> last value."""
        return dict(self._last)
