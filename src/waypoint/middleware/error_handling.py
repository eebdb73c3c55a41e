"""Error handling middleware.

Converts exceptions raised by inner layers into a response, so they
never reach the router's generic 500. Only layers registered after this
middleware (and the route handler) are covered.
"""

import logging
from datetime import UTC, datetime
from typing import Any

from waypoint._internal.invoke import invoke
from waypoint._internal.types import ErrorHandler
from waypoint.context import get_value
from waypoint.http.request import Request
from waypoint.http.response import Response, json
from waypoint.middleware.protocol import Next

logger = logging.getLogger("waypoint.errors")


def default_error_response(request: Request, context: Any, exc: Exception) -> Response:
    """500 JSON body with the error message, request ID, and timestamp."""
    return json(
        {
            "error": "Internal Server Error",
            "message": str(exc),
            "requestId": get_value(context, "request_id"),
            "timestamp": datetime.now(UTC).isoformat(),
        },
        status=500,
    )


class ErrorHandlingMiddleware:
    """Catch downstream exceptions and answer with a response.

    Usage::

        router.use(ErrorHandlingMiddleware())

    Or with a custom responder (sync or async)::

        def on_error(request, context, exc):
            return json({"error": "unavailable"}, status=503)

        router.use(ErrorHandlingMiddleware(on_error))
    """

    __slots__ = ("handler",)

    def __init__(self, handler: ErrorHandler | None = None) -> None:
        self.handler = handler or default_error_response

    async def __call__(self, request: Request, context: Any, next: Next) -> Response:
        try:
            return await next()
        except Exception as exc:
            logger.exception("Unhandled error for %s %s", request.method, request.path)
            return await invoke(self.handler, request, context, exc)
