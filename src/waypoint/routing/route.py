"""Route and RouteMatch frozen dataclasses."""

from dataclasses import dataclass
from http import HTTPMethod

from waypoint._internal.types import Handler
from waypoint.errors import ConfigurationError
from waypoint.routing.matcher import PathMatcher, compile_path, join_paths

# Methods a route may be registered for
METHODS: frozenset[HTTPMethod] = frozenset(
    {
        HTTPMethod.GET,
        HTTPMethod.POST,
        HTTPMethod.PUT,
        HTTPMethod.DELETE,
        HTTPMethod.PATCH,
        HTTPMethod.OPTIONS,
    }
)


def parse_method(method: str) -> HTTPMethod:
    """Normalize *method* to an ``HTTPMethod`` in ``METHODS``.

    Raises ``ConfigurationError`` for anything else (including HEAD).
    """
    try:
        parsed = HTTPMethod(method.upper())
    except ValueError:
        parsed = None
    if parsed not in METHODS:
        allowed = ", ".join(sorted(METHODS))
        msg = f"Unsupported HTTP method {method!r}. Expected one of: {allowed}"
        raise ConfigurationError(msg)
    return parsed


@dataclass(frozen=True, slots=True)
class Route:
    """A registered endpoint.

    The matcher is compiled once, when the route is created, and never
    changes. Mounting produces a new Route rather than editing this one.
    """

    method: HTTPMethod
    path: str
    matcher: PathMatcher
    handler: Handler

    @classmethod
    def create(cls, method: str, path: str, handler: Handler) -> "Route":
        """Validate *method*, compile *path*, and build a Route."""
        if not callable(handler):
            msg = f"Handler for {method} {path!r} is not callable: {handler!r}"
            raise ConfigurationError(msg)
        matcher = compile_path(path)
        return cls(
            method=parse_method(method),
            path=matcher.template,
            matcher=matcher,
            handler=handler,
        )

    @property
    def param_names(self) -> tuple[str, ...]:
        """Parameter names in capture-group order."""
        return self.matcher.param_names

    def prefixed(self, prefix: str) -> "Route":
        """Return a copy of this route mounted under *prefix*.

        The copy gets a freshly compiled matcher; nothing is shared with
        the original except the handler.
        """
        return Route.create(self.method, join_paths(prefix, self.path), self.handler)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route lookup."""

    route: Route
    params: dict[str, str]
