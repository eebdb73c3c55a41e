"""Invoke helpers — call sync or async callables uniformly.

Handlers and middleware may be plain ``def`` or ``async def``. Every call
site that runs user code goes through ``invoke`` so the awaitable check
lives in one place.

Usage::

    from waypoint._internal.invoke import invoke

    response = await invoke(handler, request, context, params)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it is awaitable."""
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
