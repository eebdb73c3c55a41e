"""Request body middleware: JSON parsing and size limits."""

import logging
from typing import Any

from waypoint.http.request import Request
from waypoint.http.response import Response, json
from waypoint.middleware.protocol import Next

logger = logging.getLogger("waypoint.body")

# Methods whose bodies are ignored
_BODYLESS = frozenset({"GET", "HEAD", "DELETE"})


class JSONBodyParser:
    """Parse JSON request bodies once, before the handler runs.

    For requests with a body-carrying method and a JSON content type,
    the parsed value is available afterwards as ``request.parsed_body``
    (and ``request.json()`` returns it without re-parsing). Invalid JSON
    is answered with 400 and the handler is not called.
    """

    __slots__ = ()

    async def __call__(self, request: Request, context: Any, next: Next) -> Response:
        content_type = request.content_type or ""
        if (
            request.method not in _BODYLESS
            and "application/json" in content_type
            and request.body.strip()
        ):
            try:
                request.json()
            except ValueError as exc:
                logger.warning("Invalid JSON body for %s %s: %s", request.method, request.path, exc)
                return json({"error": "Invalid JSON"}, status=400)
        return await next()


class RequestSizeLimit:
    """Reject requests whose body exceeds ``max_bytes`` with 413.

    Checks the declared ``Content-Length`` first, then the actual body.
    """

    __slots__ = ("max_bytes",)

    def __init__(self, max_bytes: int = 1024 * 1024) -> None:
        self.max_bytes = max_bytes

    def _too_large(self) -> Response:
        return json(
            {"error": "Request too large", "maxSize": f"{self.max_bytes} bytes"},
            status=413,
        )

    async def __call__(self, request: Request, context: Any, next: Next) -> Response:
        declared = request.content_length
        if declared is not None and declared > self.max_bytes:
            return self._too_large()
        if request.method not in _BODYLESS and len(request.body) > self.max_bytes:
            return self._too_large()
        return await next()
