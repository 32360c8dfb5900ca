"""Handler contracts: the context API handlers receive and what they return.

The queue registry and UI config are opaque here; roost forwards them
without looking inside.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from roost.errors import HTTPError

logger = logging.getLogger("roost.server")


@dataclass(frozen=True, slots=True)
class RequestContext:
    """Per-request input to an API handler.

    Built fresh for every dispatched request and dropped once the
    response is produced.
    """

    queues: Any
    params: dict[str, str] = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)
    body: Any = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ControllerResult:
    """What API and error handlers return.

    ``status=None`` means 200. A 204 from an API handler yields an empty
    response; ``body`` is then ignored.

    Usage::

        return ControllerResult({"queues": names})
        return ControllerResult(status=204)
        return ControllerResult("queue is paused", status=409)
    """

    body: Any = None
    status: int | None = None


def default_error_handler(exc: Exception) -> ControllerResult:
    """Map ``HTTPError`` to its status and detail, anything else to 500."""
    if isinstance(exc, HTTPError):
        return ControllerResult({"error": exc.detail or str(exc.status)}, status=exc.status)
    logger.error("API handler failed: %r", exc)
    return ControllerResult({"error": "Internal Server Error"}, status=500)
