"""Ordered, append-only route table with first-match-wins lookup.

Lookup is a linear scan in registration order. That is the precedence
rule: when two routes could both match, the one added first wins, even if
the other is "more specific".
"""

from collections.abc import Iterable, Iterator

from waypoint.routing.route import Route, RouteMatch


class RouteTable:
    """An append-only sequence of routes."""

    __slots__ = ("_routes",)

    def __init__(self, routes: Iterable[Route] = ()) -> None:
        self._routes: list[Route] = list(routes)

    def add(self, route: Route) -> None:
        """Append *route* after every existing route."""
        self._routes.append(route)

    def extend(self, routes: Iterable[Route]) -> None:
        """Append several routes, preserving their order."""
        self._routes.extend(routes)

    def lookup(self, method: str, path: str) -> RouteMatch | None:
        """Return the first route matching *method* and *path*, or ``None``."""
        for route in self._routes:
            if route.method != method:
                continue
            params = route.matcher.match(path)
            if params is not None:
                return RouteMatch(route=route, params=params)
        return None

    @property
    def routes(self) -> tuple[Route, ...]:
        """Snapshot of the registered routes in order."""
        return tuple(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(tuple(self._routes))

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        return f"<RouteTable {len(self._routes)} routes>"
