"""Built-in middleware: CORS.

Answers OPTIONS requests itself and adds CORS headers to every other
response from an allowed origin.
"""

from dataclasses import dataclass
from typing import Any

from waypoint.http.request import Request
from waypoint.http.response import Response
from waypoint.middleware.protocol import Next


@dataclass(frozen=True, slots=True)
class CORSConfig:
    """CORS middleware configuration.

    Defaults are permissive (any origin, the usual methods and headers),
    matching what a public function endpoint typically serves. Narrow
    what you need::

        CORSConfig(
            allow_origins=("https://example.com",),
            allow_credentials=True,
        )
    """

    allow_origins: tuple[str, ...] = ("*",)
    allow_methods: tuple[str, ...] = ("GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS")
    allow_headers: tuple[str, ...] = ("Content-Type", "Authorization", "X-Requested-With")
    expose_headers: tuple[str, ...] = ()
    allow_credentials: bool = False
    max_age: int | None = None


class CORSMiddleware:
    """CORS middleware.

    Handles:
    - ``OPTIONS`` requests (returns 200 with CORS headers, ``next`` is not called)
    - Every other request (adds CORS headers to the response)
    - Credential support (``Access-Control-Allow-Credentials``)
    - Wildcard origins (``"*"``) when credentials are disabled

    Requests from an origin outside ``allow_origins`` pass through
    untouched.

    Usage::

        router.use(CORSMiddleware(CORSConfig(
            allow_origins=("https://example.com",),
        )))
    """

    __slots__ = ("config",)

    def __init__(self, config: CORSConfig | None = None) -> None:
        self.config = config or CORSConfig()

    def _allowed_origin(self, origin: str | None) -> str | None:
        """The ``Access-Control-Allow-Origin`` value, or None if not allowed."""
        cfg = self.config
        wildcard = "*" in cfg.allow_origins
        if wildcard and not cfg.allow_credentials:
            return "*"
        if origin is not None and (wildcard or origin in cfg.allow_origins):
            return origin
        return None

    def _add_cors_headers(self, response: Response, allow_origin: str) -> Response:
        cfg = self.config
        response = response.with_headers(
            {
                "Access-Control-Allow-Origin": allow_origin,
                "Access-Control-Allow-Methods": ", ".join(cfg.allow_methods),
                "Access-Control-Allow-Headers": ", ".join(cfg.allow_headers),
            }
        )
        if allow_origin != "*":
            response = response.with_header("Vary", "Origin")
        if cfg.allow_credentials:
            response = response.with_header("Access-Control-Allow-Credentials", "true")
        if cfg.expose_headers:
            response = response.with_header(
                "Access-Control-Expose-Headers", ", ".join(cfg.expose_headers)
            )
        return response

    def _preflight_response(self, allow_origin: str) -> Response:
        response = self._add_cors_headers(Response(body=None, status=200), allow_origin)
        if self.config.max_age is not None:
            response = response.with_header("Access-Control-Max-Age", str(self.config.max_age))
        return response

    async def __call__(self, request: Request, context: Any, next: Next) -> Response:
        allow_origin = self._allowed_origin(request.headers.get("origin"))
        if allow_origin is None:
            return await next()

        if request.method == "OPTIONS":
            return self._preflight_response(allow_origin)

        response = await next()
        return self._add_cors_headers(response, allow_origin)
