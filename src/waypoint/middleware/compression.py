"""Response compression middleware.

Gzips response bodies for clients that accept it. Compressed bodies are
bytes; the invocation adapter base64-encodes them in the reply.
"""

import gzip
from typing import Any

from waypoint.http.request import Request
from waypoint.http.response import Response
from waypoint.middleware.protocol import Next


class CompressionMiddleware:
    """Gzip bodies larger than ``min_size`` bytes.

    Always adds ``Vary: Accept-Encoding``. Responses that already carry a
    ``Content-Encoding`` are left as they are.
    """

    __slots__ = ("compresslevel", "min_size")

    def __init__(self, min_size: int = 100, compresslevel: int = 6) -> None:
        self.min_size = min_size
        self.compresslevel = compresslevel

    async def __call__(self, request: Request, context: Any, next: Next) -> Response:
        response = (await next()).with_header("Vary", "Accept-Encoding")
        accept = request.headers.get("accept-encoding") or ""
        if "gzip" not in accept or "content-encoding" in response.headers:
            return response

        body = response.body_bytes
        if len(body) <= self.min_size:
            return response

        compressed = gzip.compress(body, compresslevel=self.compresslevel)
        return (
            response.with_body(compressed)
            .with_header("Content-Encoding", "gzip")
            .with_header("Content-Length", str(len(compressed)))
        )
