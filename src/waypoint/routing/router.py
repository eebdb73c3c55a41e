"""Router: route registration, mounting, and request dispatch.

A Router is mutable during a one-time composition phase (module import or
cold start) and read-only while serving. There is no lock and no freeze
step; callers must finish registering before the first ``handle`` call.

Dispatch for one call::

    prefix check --miss--> 404 (no middleware runs)
        |
    OPTIONS? --yes--> preflight terminal --+
        |                                  |
    route lookup --hit--> handler terminal +--> middleware chain --> Response
        |                                  |
        +--miss--> 404 terminal -----------+

Anything raised inside the chain that no middleware converted becomes a
500 response. ``handle`` never raises.
"""

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, overload

from waypoint._internal.invoke import invoke
from waypoint._internal.types import Handler
from waypoint.config import RouterConfig
from waypoint.context import RequestContext, set_value
from waypoint.errors import ConfigurationError
from waypoint.http.headers import Headers
from waypoint.http.request import Request
from waypoint.http.response import Response, json
from waypoint.middleware.chain import build_chain
from waypoint.middleware.protocol import Middleware
from waypoint.routing.route import Route
from waypoint.routing.table import RouteTable

if TYPE_CHECKING:
    from waypoint.invocation import AsyncEventHandler, SyncEventHandler

logger = logging.getLogger("waypoint.router")


def not_found(path: str, method: str) -> Response:
    """The 404 response for a routing miss."""
    return json({"error": "Route not found", "path": path, "method": method}, status=404)


def internal_error(exc: BaseException) -> Response:
    """The 500 response for a failure that escaped the chain."""
    return json({"error": "Internal server error", "message": str(exc)}, status=500)


class Router:
    """HTTP router with an onion middleware pipeline.

    Usage::

        router = Router()
        router.use(request_logger)

        @router.get("/users/:id")
        async def show_user(request, context, params):
            return json({"id": params["id"]})

        response = await router.handle(request, context)
    """

    __slots__ = ("_config", "_middleware", "_table")

    def __init__(self, config: RouterConfig | None = None) -> None:
        self._config: RouterConfig = config or RouterConfig()
        self._table: RouteTable = RouteTable()
        self._middleware: list[Middleware] = []

    # -- Composition --

    @overload
    def use(self, middleware: Middleware, /) -> None: ...

    @overload
    def use(self, prefix: str, router: "Router", /) -> None: ...

    def use(self, target: Middleware | str, router: "Router | None" = None, /) -> None:
        """Append a middleware, or mount *router* under the *target* prefix."""
        if isinstance(target, str):
            if router is None:
                msg = f"use({target!r}) needs a Router to mount"
                raise ConfigurationError(msg)
            self.mount(target, router)
            return
        if router is not None or not callable(target):
            msg = f"use() expects a middleware callable or (prefix, Router), got {target!r}"
            raise ConfigurationError(msg)
        self._middleware.append(target)

    def mount(self, prefix: str, router: "Router") -> None:
        """Copy every route and middleware of *router* under *prefix*.

        Routes are re-created with the prefixed path and a fresh matcher;
        the sub-router's middleware runs after this router's own. Later
        changes to *router* do not reach this one.
        """
        if not isinstance(router, Router):
            msg = f"Can only mount a Router, got {type(router).__name__}"
            raise ConfigurationError(msg)
        if router is self:
            msg = "A router cannot be mounted on itself"
            raise ConfigurationError(msg)
        if prefix and not prefix.startswith("/"):
            msg = f"Mount prefix must start with '/', got {prefix!r}"
            raise ConfigurationError(msg)
        self._table.extend(route.prefixed(prefix) for route in router.routes)
        self._middleware.extend(router.middleware)

    def add_route(self, method: str, path: str, handler: Handler) -> Route:
        """Register *handler* for *method* and *path*."""
        route = Route.create(method, path, handler)
        self._table.add(route)
        return route

    def route(
        self, method: str, path: str, handler: Handler | None = None
    ) -> Handler | Callable[[Handler], Handler]:
        """Register a handler directly or via decorator.

        ``router.route("GET", "/", index)`` and
        ``@router.route("GET", "/")`` are equivalent.
        """
        if handler is not None:
            self.add_route(method, path, handler)
            return handler

        def decorator(func: Handler) -> Handler:
            self.add_route(method, path, func)
            return func

        return decorator

    def get(self, path: str, handler: Handler | None = None) -> Any:
        """Register a GET route."""
        return self.route("GET", path, handler)

    def post(self, path: str, handler: Handler | None = None) -> Any:
        """Register a POST route."""
        return self.route("POST", path, handler)

    def put(self, path: str, handler: Handler | None = None) -> Any:
        """Register a PUT route."""
        return self.route("PUT", path, handler)

    def delete(self, path: str, handler: Handler | None = None) -> Any:
        """Register a DELETE route."""
        return self.route("DELETE", path, handler)

    def patch(self, path: str, handler: Handler | None = None) -> Any:
        """Register a PATCH route."""
        return self.route("PATCH", path, handler)

    def options(self, path: str, handler: Handler | None = None) -> Any:
        """Register an OPTIONS route.

        ``handle`` answers every OPTIONS request with the preflight
        response, so these routes are never dispatched by it.
        """
        return self.route("OPTIONS", path, handler)

    # -- Introspection --

    @property
    def config(self) -> RouterConfig:
        return self._config

    @property
    def routes(self) -> tuple[Route, ...]:
        """Registered routes in lookup order."""
        return self._table.routes

    @property
    def middleware(self) -> tuple[Middleware, ...]:
        """Registered middleware, outermost first."""
        return tuple(self._middleware)

    def __repr__(self) -> str:
        return f"<Router {len(self._table)} routes, {len(self._middleware)} middleware>"

    # -- Dispatch --

    async def handle(self, request: Request, context: Any = None) -> Response:
        """Resolve *request* to a response. Never raises.

        *context* is the platform's per-request context; a fresh
        ``RequestContext`` is used when omitted. For matched routes the
        router stores the path parameters on it as ``params``.
        """
        if context is None:
            context = RequestContext()

        method = request.method.upper()
        path = self._config.strip_prefix(request.path)
        if path is None:
            logger.debug("404 %s %s (outside mount prefixes)", method, request.path)
            return not_found(request.path, method)

        try:
            terminal = self._resolve(request, context, method, path)
            return await build_chain(self._middleware, request, context, terminal)()
        except Exception as exc:
            logger.exception("500 %s %s", method, request.path)
            return internal_error(exc)

    def _resolve(
        self, request: Request, context: Any, method: str, path: str
    ) -> Callable[[], Any]:
        """Pick the terminal target for this request."""
        if method == "OPTIONS":
            return self.preflight

        match = self._table.lookup(method, path)
        if match is None:
            logger.debug("404 %s %s", method, path)
            return lambda: not_found(path, method)

        handler = match.route.handler
        params = match.params
        set_value(context, "params", params)

        async def call_handler() -> Response:
            result = await invoke(handler, request, context, params)
            if not isinstance(result, Response):
                name = getattr(handler, "__name__", repr(handler))
                msg = f"Handler {name!r} returned {type(result).__name__}, expected Response"
                raise TypeError(msg)
            return result

        return call_handler

    def preflight(self) -> Response:
        """The fixed response to an OPTIONS request."""
        cfg = self._config
        headers = Headers(
            (
                ("Access-Control-Allow-Origin", cfg.preflight_allow_origin),
                ("Access-Control-Allow-Methods", cfg.preflight_allow_methods),
                ("Access-Control-Allow-Headers", cfg.preflight_allow_headers),
                ("Access-Control-Max-Age", str(cfg.preflight_max_age)),
            )
        )
        return Response(body=None, status=200, headers=headers)

    # -- Platform entry points --

    def handler(self) -> "AsyncEventHandler":
        """Return an ``async (event, context) -> reply`` platform entry point."""
        from waypoint.invocation import make_handler

        return make_handler(self)

    def sync_handler(self) -> "SyncEventHandler":
        """Return a blocking ``(event, context) -> reply`` entry point."""
        from waypoint.invocation import make_sync_handler

        return make_sync_handler(self)
