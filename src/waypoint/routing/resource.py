"""Resource routers: conventional CRUD routes from named handlers.

==========  ========  ========
handler     method    path
==========  ========  ========
index       GET       /
show        GET       /:id
create      POST      /
update      PUT       /:id
destroy     DELETE    /:id
==========  ========  ========

Only supplied handlers are registered. A missing one leaves its route
unregistered, so calling it gets the ordinary 404 (not a 405).
"""

from collections.abc import Mapping
from dataclasses import dataclass, fields

from waypoint._internal.types import Handler
from waypoint.config import RouterConfig
from waypoint.errors import ConfigurationError
from waypoint.routing.router import Router


@dataclass(frozen=True, slots=True)
class ResourceHandlers:
    """Handlers for the five conventional resource actions."""

    index: Handler | None = None
    show: Handler | None = None
    create: Handler | None = None
    update: Handler | None = None
    destroy: Handler | None = None


# (action, method, path) in registration order
_ACTIONS: tuple[tuple[str, str, str], ...] = (
    ("index", "GET", "/"),
    ("show", "GET", "/:id"),
    ("create", "POST", "/"),
    ("update", "PUT", "/:id"),
    ("destroy", "DELETE", "/:id"),
)


def create_resource_router(
    handlers: ResourceHandlers | Mapping[str, Handler],
    *,
    config: RouterConfig | None = None,
) -> Router:
    """Build a Router wired with the CRUD routes for *handlers*.

    Mount it where the resource lives::

        api.use("/users", create_resource_router(ResourceHandlers(
            index=list_users,
            show=get_user,
        )))
    """
    if isinstance(handlers, Mapping):
        known = {f.name for f in fields(ResourceHandlers)}
        unknown = set(handlers) - known
        if unknown:
            msg = f"Unknown resource actions: {', '.join(sorted(unknown))}"
            raise ConfigurationError(msg)
        handlers = ResourceHandlers(**handlers)

    router = Router(config)
    for action, method, path in _ACTIONS:
        handler = getattr(handlers, action)
        if handler is not None:
            router.add_route(method, path, handler)
    return router
