"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(request: Request, context: Any, next: Next) -> Response: ...

No base class required. Plain ``def`` middleware works too; its return
value may be a Response or an awaitable of one.

``next`` takes no arguments and returns the response produced by the
rest of the chain. Call it at most once. To short-circuit, return a
Response without calling it.
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, TypeAlias

from waypoint.http.request import Request
from waypoint.http.response import Response

# The remainder of the middleware chain
Next: TypeAlias = Callable[[], Awaitable[Response]]


class Middleware(Protocol):
    """Protocol for waypoint middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def timing(request: Request, context: Any, next: Next) -> Response:
            start = time.monotonic()
            response = await next()
            elapsed = time.monotonic() - start
            return response.with_header("X-Time", f"{elapsed:.3f}")

        # Class middleware
        class RateLimiter:
            async def __call__(self, request, context, next) -> Response:
                ...
    """

    def __call__(self, request: Request, context: Any, next: Next) -> Response | Awaitable[Response]: ...
