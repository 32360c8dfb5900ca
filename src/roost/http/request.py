"""Immutable HTTP request.

Frozen metadata with async body access, built once per ASGI scope.
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import unquote

from roost._internal.asgi import Receive, Scope
from roost.http.headers import Headers
from roost.http.query import QueryParams


async def _no_body() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Metadata (method, path, headers, query) is frozen at creation.
    ``path`` is percent-decoded; ``raw_path`` keeps encoded slashes
    inside segments.
    The body is read asynchronously via ``.body()`` or ``.json()``.
    """

    method: str
    path: str
    headers: Headers
    query: QueryParams

    # Path as sent, percent-encoding intact; API routes match on this
    raw_path: str = ""

    # ASGI receive; consumed once by body()
    _receive: Receive = field(default=_no_body, repr=False, compare=False)

    # Holds the body once read
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    async def body(self) -> bytes:
        """The whole request body, read from the ASGI receive on first call."""
        cached = self._cache.get("body")
        if cached is None:
            parts = bytearray()
            more = True
            while more:
                message = await self._receive()
                parts += message.get("body", b"")
                more = message.get("more_body", False)
            cached = self._cache["body"] = bytes(parts)
        return cached

    async def json(self) -> Any:
        """Parse the body as JSON.

        Raises ``ValueError`` (``JSONDecodeError`` or ``UnicodeDecodeError``)
        for bodies that are empty or not valid JSON.
        """
        raw = await self.body()
        return json_module.loads(raw)

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable.

        Falls back to the decoded path when the server sends no ``raw_path``.
        """
        raw_path = scope.get("raw_path")
        return cls(
            method=scope["method"],
            path=scope["path"],
            raw_path=raw_path.decode("latin-1") if raw_path else scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            _receive=receive,
        )

    @classmethod
    def build(
        cls,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        query_string: str = "",
        body: bytes = b"",
    ) -> Request:
        """Build a Request without an ASGI server (direct ``handle()`` calls).

        *path* is taken as it would appear in a URL, percent-encoded.
        """
        raw_headers = tuple(
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        )

        async def receive() -> dict[str, Any]:
            return {"type": "http.request", "body": body, "more_body": False}

        return cls(
            method=method.upper(),
            path=unquote(path),
            raw_path=path,
            headers=Headers(raw_headers),
            query=QueryParams(query_string.encode("latin-1")),
            _receive=receive,
        )
