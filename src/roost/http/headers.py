"""Request headers, decoded once from the ASGI scope.

Names are lower-cased on construction, so every lookup is a plain string
comparison. Order and repeats are preserved.
"""

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive request headers.

    Indexing returns the first value sent for a name. ``to_dict`` is the
    flattened view API handlers receive.
    """

    __slots__ = ("_pairs",)

    _pairs: tuple[tuple[str, str], ...]

    def __init__(self, raw: Iterable[tuple[bytes, bytes]] = ()) -> None:
        pairs = tuple(
            (name.decode("latin-1").lower(), value.decode("latin-1")) for name, value in raw
        )
        object.__setattr__(self, "_pairs", pairs)

    def __getitem__(self, key: str) -> str:
        wanted = key.lower()
        for name, value in self._pairs:
            if name == wanted:
                return value
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and any(name == key.lower() for name, _ in self._pairs)

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(name for name, _ in self._pairs))

    def __len__(self) -> int:
        return len(dict.fromkeys(name for name, _ in self._pairs))

    def __repr__(self) -> str:
        return f"Headers({self.to_dict()!r})"

    def to_dict(self) -> dict[str, str]:
        """Lower-cased name -> value; repeated headers joined with ``", "``."""
        merged: dict[str, str] = {}
        for name, value in self._pairs:
            merged[name] = f"{merged[name]}, {value}" if name in merged else value
        return merged
