"""Access log middleware.

Logs one line when a request arrives and one when its response leaves,
with status and duration, through the ``waypoint.access`` logger.
"""

import logging
import time
from typing import Any

from waypoint.context import get_value
from waypoint.http.request import Request
from waypoint.http.response import Response
from waypoint.middleware.protocol import Next

logger = logging.getLogger("waypoint.access")


class AccessLogMiddleware:
    """Log request start and completion.

    Exceptions from inner layers are logged and re-raised; the router (or
    an outer ``ErrorHandlingMiddleware``) turns them into a response.
    """

    __slots__ = ("level",)

    def __init__(self, level: int = logging.INFO) -> None:
        self.level = level

    async def __call__(self, request: Request, context: Any, next: Next) -> Response:
        request_id = get_value(context, "request_id") or request.headers.get("x-request-id") or "-"
        logger.log(self.level, "--> %s %s [%s]", request.method, request.path, request_id)
        start = time.monotonic()
        try:
            response = await next()
        except Exception:
            elapsed_ms = (time.monotonic() - start) * 1000
            logger.log(
                self.level,
                "<-- %s %s failed %.1fms [%s]",
                request.method,
                request.path,
                elapsed_ms,
                request_id,
            )
            raise
        elapsed_ms = (time.monotonic() - start) * 1000
        logger.log(
            self.level,
            "<-- %s %s %d %.1fms [%s]",
            request.method,
            request.path,
            response.status,
            elapsed_ms,
            request_id,
        )
        return response
