"""Outgoing responses: static files, API results, the entry view, errors.

The ``text``, ``json`` and ``empty`` constructors cover every shape the
router produces; ``with_*`` returns a modified copy.
"""

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"
JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True, slots=True)
class Response:
    """A frozen HTTP response. Defaults to a 200 HTML page."""

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    # -- Constructors --

    @classmethod
    def text(cls, body: str, status: int = 200) -> Response:
        """Plain-text response (``text/plain; charset=utf-8``)."""
        return cls(body=body, status=status, content_type=TEXT_CONTENT_TYPE)

    @classmethod
    def json(cls, value: Any, status: int = 200) -> Response:
        """JSON response; non-JSON values fall back to ``str()``."""
        return cls(
            body=json_module.dumps(value, default=str),
            status=status,
            content_type=JSON_CONTENT_TYPE,
        )

    @classmethod
    def empty(cls, status: int = 204) -> Response:
        """Body-less response."""
        return cls(body=b"", status=status, content_type="")

    # -- Copies --

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        """Return a new Response with additional headers."""
        new = tuple(headers.items())
        return replace(self, headers=(*self.headers, *new))

    def with_content_type(self, content_type: str) -> Response:
        """Return a new Response with a different content type."""
        return replace(self, content_type=content_type)

    # -- Body access --

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def body_text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body
