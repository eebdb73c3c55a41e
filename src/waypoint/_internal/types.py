"""Shared type aliases used across waypoint modules."""

from collections.abc import Awaitable, Callable
from typing import Any, TypeAlias

from waypoint.http.request import Request
from waypoint.http.response import Response

# Route handler: (request, context, params) -> Response, sync or async
Handler: TypeAlias = Callable[[Request, Any, dict[str, str]], Response | Awaitable[Response]]

# Error callable used by ErrorHandlingMiddleware: (request, context, exc)
ErrorHandler: TypeAlias = Callable[[Request, Any, Exception], Response | Awaitable[Response]]
