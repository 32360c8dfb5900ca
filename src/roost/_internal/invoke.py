"""Invoke helpers: call sync or async handlers uniformly.

API handlers, the error handler and the entry-route handler can all be
``def`` or ``async def``. Anything that calls one of them goes through
:func:`invoke` so the sync/async check lives in exactly one place.

Usage::

    from roost._internal.invoke import invoke

    result = await invoke(handler, context)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable.

    Works with both sync and async callables::

        # sync: returns immediately
        def list_queues(ctx):
            return ControllerResult({"queues": []})

        # async: returns a coroutine, awaited here
        async def list_queues(ctx):
            queues = await ctx.queues.describe()
            return ControllerResult({"queues": queues})
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
