"""Waypoint exception hierarchy.

Raised during route registration or inside a middleware chain. None of
these escape ``Router.handle``: the router converts anything that reaches
it into a 500 response.
"""


class WaypointError(Exception):
    """Base for all waypoint-specific errors."""


class ConfigurationError(WaypointError):
    """Raised when a route, mount, or middleware registration is invalid.

    Surfaces at composition time (module import, cold start), never
    while serving a request.
    """


class ChainError(WaypointError):
    """Raised when a middleware calls ``next()`` more than once."""
