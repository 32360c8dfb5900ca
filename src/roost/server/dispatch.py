"""API dispatch: route lookup, handler invocation, result shaping.

Turns a matched API handler's ``ControllerResult`` (or the exception it
raised) into a Response. Returns ``None`` when no API route matches so
the caller can fall through to the entry view.
"""

import logging
from typing import Any
from urllib.parse import unquote

from roost._internal.invoke import invoke
from roost._internal.types import ErrorHandler
from roost.controller import ControllerResult, RequestContext
from roost.http.request import Request
from roost.http.response import Response
from roost.routing.router import RouteTable

logger = logging.getLogger("roost.server")


async def read_json_body(request: Request) -> Any:
    """Parse the request body as JSON; ``{}`` when absent or malformed.

    GET requests never have their body read.
    """
    if request.method.lower() == "get":
        return {}
    try:
        return await request.json()
    except ValueError:
        logger.debug("Ignoring unparseable %s body for %s", request.method, request.path)
        return {}


def shape_result(result: ControllerResult) -> Response:
    """Map a handler's result to a Response."""
    if result.status == 204:
        return Response.empty(204)
    return Response.json(result.body, status=result.status or 200)


def shape_error_result(result: ControllerResult) -> Response:
    """Map an error handler's result to a Response.

    A 204 here is a contract violation and is demoted to 500. String
    bodies go out as plain text, anything else as JSON.
    """
    status = result.status or 200
    if status == 204:
        status = 500
    if isinstance(result.body, str):
        return Response.text(result.body, status=status)
    return Response.json(result.body, status=status)


async def dispatch_api(
    request: Request,
    path: str,
    *,
    routes: RouteTable,
    queues: Any,
    error_handler: ErrorHandler | None,
) -> Response | None:
    """Dispatch *request* to the first API route matching *path*.

    *path* is still percent-encoded, so an encoded ``/`` stays inside its
    segment; bound params are decoded after matching.

    Exceptions from the handler go through *error_handler*. With no
    error handler configured they propagate to the caller unchanged.
    """
    match = routes.lookup(path, request.method)
    if match is None:
        return None

    logger.debug("%s %s -> %s", request.method, path, match.pattern)

    try:
        context = RequestContext(
            queues=queues,
            params={name: unquote(value) for name, value in match.params.items()},
            query=request.query.to_dict(),
            body=await read_json_body(request),
            headers=request.headers.to_dict(),
        )
        result = await invoke(match.handler, context)
        return shape_result(result)
    except Exception as exc:
        if error_handler is None:
            raise
        logger.debug("API handler for %s raised %r", match.pattern, exc)
        return shape_error_result(await invoke(error_handler, exc))
