"""Waypoint — a small HTTP router with an onion middleware pipeline.

Built to sit behind a function-as-a-service entry point: compile path
templates, dispatch to handlers through middleware, mount sub-routers,
and translate platform invocation events.

Basic usage::

    from waypoint import Router, json

    router = Router()

    @router.get("/users/:id")
    async def show_user(request, context, params):
        return json({"id": params["id"]})

    handler = router.handler()   # async (event, context) -> reply
"""

__version__ = "0.1.0"
__all__ = [
    "ChainError",
    "ConfigurationError",
    "Headers",
    "Middleware",
    "Next",
    "Request",
    "RequestContext",
    "ResourceHandlers",
    "Response",
    "Router",
    "RouterConfig",
    "WaypointError",
    "create_resource_router",
    "html",
    "json",
    "make_handler",
    "make_sync_handler",
    "text",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypoint`` cheap on cold start while providing a flat
    top-level API.
    """
    if name == "Router":
        from waypoint.routing.router import Router

        return Router

    if name == "RouterConfig":
        from waypoint.config import RouterConfig

        return RouterConfig

    if name in ("ResourceHandlers", "create_resource_router"):
        from waypoint.routing import resource as _resource

        return getattr(_resource, name)

    if name == "Request":
        from waypoint.http.request import Request

        return Request

    if name == "Headers":
        from waypoint.http.headers import Headers

        return Headers

    if name in ("Response", "json", "text", "html"):
        from waypoint.http import response as _resp

        return getattr(_resp, name)

    if name == "RequestContext":
        from waypoint.context import RequestContext

        return RequestContext

    if name in ("Middleware", "Next"):
        from waypoint.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in ("make_handler", "make_sync_handler"):
        from waypoint import invocation as _invocation

        return getattr(_invocation, name)

    if name in ("WaypointError", "ConfigurationError", "ChainError"):
        from waypoint import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
