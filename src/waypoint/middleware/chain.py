"""Middleware chain composition.

The chain is folded right to left around a terminal callable, so the
first registered middleware is the outermost layer::

    use(A); use(B); handler H

    A before -> B before -> H -> B after -> A after

It is rebuilt for every request because the terminal differs per request
(matched handler, 404 responder, or preflight responder). Building it is
a handful of closure allocations.

Error handling depends on order: a middleware only sees exceptions raised
by layers inside it, so error-handling middleware must be registered
before the middleware and handlers it is meant to guard.
"""

from collections.abc import Awaitable, Callable, Sequence
from typing import Any, TypeAlias

from waypoint._internal.invoke import invoke
from waypoint.errors import ChainError
from waypoint.http.request import Request
from waypoint.http.response import Response
from waypoint.middleware.protocol import Middleware, Next

Terminal: TypeAlias = Callable[[], Response | Awaitable[Response]]


def build_chain(
    middleware: Sequence[Middleware],
    request: Request,
    context: Any,
    terminal: Terminal,
) -> Next:
    """Compose *middleware* around *terminal* for a single request.

    Returns a zero-argument coroutine function that runs the whole chain.
    Each ``next`` handed to a middleware may be called once; a second call
    raises ``ChainError`` instead of re-running the downstream layers.
    """

    async def innermost() -> Response:
        return await invoke(terminal)

    current: Next = innermost
    for mw in reversed(middleware):
        current = _wrap(mw, request, context, current)
    return current


def _wrap(mw: Middleware, request: Request, context: Any, downstream: Next) -> Next:
    """Bind *mw* to *downstream*, producing the next-outer layer."""

    async def layer() -> Response:
        called = False

        async def next_() -> Response:
            nonlocal called
            if called:
                name = getattr(mw, "__name__", type(mw).__name__)
                msg = f"Middleware {name!r} called next() more than once"
                raise ChainError(msg)
            called = True
            return await downstream()

        return await invoke(mw, request, context, next_)

    return layer
