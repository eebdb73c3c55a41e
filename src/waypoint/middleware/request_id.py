"""Request ID middleware.

Reuses the caller's ``X-Request-ID`` or generates one, stores it on the
context as ``request_id``, and echoes it on the response.
"""

import uuid
from typing import Any

from waypoint.context import set_value
from waypoint.http.request import Request
from waypoint.http.response import Response
from waypoint.middleware.protocol import Next

REQUEST_ID_HEADER = "X-Request-ID"


def generate_request_id() -> str:
    return f"req_{uuid.uuid4().hex}"


class RequestIdMiddleware:
    """Tag each request with an ID.

    Register it first so every other middleware (and the access log)
    can read ``context.request_id``.
    """

    __slots__ = ("header",)

    def __init__(self, header: str = REQUEST_ID_HEADER) -> None:
        self.header = header

    async def __call__(self, request: Request, context: Any, next: Next) -> Response:
        request_id = request.headers.get(self.header) or generate_request_id()
        set_value(context, "request_id", request_id)
        response = await next()
        return response.with_header(self.header, request_id)
