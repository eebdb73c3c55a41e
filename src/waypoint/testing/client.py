"""In-process test client for waypoint routers.

Uses the same Request and Response types as production and calls
``Router.handle`` directly. No HTTP, and no event translation unless asked
for via ``invoke``.
"""

import json as json_module
from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import urlencode

from waypoint.http.request import Request
from waypoint.http.response import Response
from waypoint.invocation import dispatch_event
from waypoint.routing.router import Router


class TestClient:
    __test__ = False  # Tell pytest this is not a test class
    """Async test client for waypoint routers.

    Paths are sent as given, so include the mount prefix::

        client = TestClient(router)
        response = await client.get("/api/users/42")
        assert response.status == 200

    ``context_factory`` builds the per-request context (a fresh
    ``RequestContext`` by default).
    """

    __slots__ = ("base_url", "context_factory", "router")

    def __init__(
        self,
        router: Router,
        *,
        context_factory: Callable[[], Any] | None = None,
        base_url: str | None = None,
    ) -> None:
        self.router = router
        self.context_factory = context_factory
        self.base_url = base_url or router.config.base_url

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        query: Mapping[str, str] | None = None,
        body: str | bytes | None = None,
        json: Any = None,
        context: Any = None,
    ) -> Response:
        """Send a request through the router and return its response."""
        request_headers = dict(headers or {})
        if json is not None:
            body = json_module.dumps(json)
            request_headers.setdefault("content-type", "application/json")

        url = self.base_url.rstrip("/") + path
        if query:
            url = f"{url}?{urlencode(query)}"

        if context is None and self.context_factory is not None:
            context = self.context_factory()

        request = Request.build(method, url, headers=request_headers, body=body)
        return await self.router.handle(request, context)

    async def get(self, path: str, **kwargs: Any) -> Response:
        """Send a GET request."""
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Response:
        """Send a POST request."""
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Response:
        """Send a PUT request."""
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> Response:
        """Send a PATCH request."""
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Response:
        """Send a DELETE request."""
        return await self.request("DELETE", path, **kwargs)

    async def options(self, path: str, **kwargs: Any) -> Response:
        """Send an OPTIONS request."""
        return await self.request("OPTIONS", path, **kwargs)

    async def invoke(self, event: Mapping[str, Any], context: Any = None) -> dict[str, Any]:
        """Send a legacy invocation event through the adapter."""
        if context is None and self.context_factory is not None:
            context = self.context_factory()
        return await dispatch_event(self.router, event, context)
