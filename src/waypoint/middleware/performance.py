"""Response timing middleware.

Adds ``X-Response-Time`` and logs requests slower than a threshold
through the ``waypoint.performance`` logger.
"""

import logging
import math
import time
from typing import Any

from waypoint.http.request import Request
from waypoint.http.response import Response
from waypoint.middleware.protocol import Next

logger = logging.getLogger("waypoint.performance")


class PerformanceMiddleware:
    """Time the rest of the chain.

    Usage::

        router.use(PerformanceMiddleware(slow_ms=250))
    """

    __slots__ = ("header", "slow_ms")

    def __init__(self, slow_ms: float = 100, header: str = "X-Response-Time") -> None:
        self.slow_ms = slow_ms
        self.header = header

    async def __call__(self, request: Request, context: Any, next: Next) -> Response:
        start = time.perf_counter()
        response = await next()
        duration_ms = math.ceil((time.perf_counter() - start) * 1000)
        if duration_ms > self.slow_ms:
            logger.warning(
                "Slow request %s %s took %dms (threshold %sms)",
                request.method,
                request.path,
                duration_ms,
                self.slow_ms,
            )
        return response.with_header(self.header, f"{duration_ms}ms")
