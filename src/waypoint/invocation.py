"""Invocation adapter — legacy function events to Request/Response and back.

The hosting platform calls the function with a plain event::

    {
        "httpMethod": "GET",
        "path": "/api/users/42",
        "queryStringParameters": {"expand": "profile"},
        "headers": {"accept": "application/json"},
        "body": null,
        "isBase64Encoded": false
    }

and expects a plain reply::

    {"statusCode": 200, "headers": {"content-type": "application/json"}, "body": "..."}

Binary bodies (compressed, or bytes that are not UTF-8) are base64-encoded
and flagged with ``"isBase64Encoded": true``.

Bodies are read fully into memory in both directions.
"""

import base64
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from functools import partial
from typing import TYPE_CHECKING, Any, TypeAlias

import anyio

from waypoint.http.query import QueryParams
from waypoint.http.request import Request
from waypoint.http.response import Response, json

if TYPE_CHECKING:
    from waypoint.routing.router import Router

logger = logging.getLogger("waypoint.invocation")

AsyncEventHandler: TypeAlias = Callable[[Mapping[str, Any], Any], Awaitable[dict[str, Any]]]
SyncEventHandler: TypeAlias = Callable[[Mapping[str, Any], Any], dict[str, Any]]


@dataclass(frozen=True, slots=True)
class InvocationEvent:
    """The fields of a legacy invocation event the router needs."""

    http_method: str = "GET"
    path: str = "/"
    query: Mapping[str, str | None] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)
    body: str | None = None
    is_base64_encoded: bool = False

    @classmethod
    def from_dict(cls, event: Mapping[str, Any]) -> "InvocationEvent":
        """Read an event mapping; missing or null fields take defaults."""
        return cls(
            http_method=(event.get("httpMethod") or "GET").upper(),
            path=event.get("path") or "/",
            query=event.get("queryStringParameters") or {},
            headers=event.get("headers") or {},
            body=event.get("body"),
            is_base64_encoded=bool(event.get("isBase64Encoded")),
        )

    def url(self, base_url: str) -> str:
        """Rebuild the canonical request URL from path and query."""
        url = base_url.rstrip("/") + self.path
        query = QueryParams.from_mapping(self.query)
        if query.raw:
            url = f"{url}?{query.raw}"
        return url

    def body_bytes(self) -> bytes:
        """The body as bytes, base64-decoded when flagged."""
        if not self.body:
            return b""
        if self.is_base64_encoded:
            return base64.b64decode(self.body)
        return self.body.encode("utf-8")


@dataclass(frozen=True, slots=True)
class InvocationReply:
    """The reply shape the platform expects.

    ``isBase64Encoded`` is only emitted for binary bodies.
    """

    status_code: int
    headers: dict[str, str]
    body: str
    is_base64_encoded: bool = False

    def to_dict(self) -> dict[str, Any]:
        reply: dict[str, Any] = {
            "statusCode": self.status_code,
            "headers": self.headers,
            "body": self.body,
        }
        if self.is_base64_encoded:
            reply["isBase64Encoded"] = True
        return reply


def event_to_request(event: Mapping[str, Any] | InvocationEvent, base_url: str) -> Request:
    """Translate a legacy event into a normalized Request."""
    if not isinstance(event, InvocationEvent):
        event = InvocationEvent.from_dict(event)
    return Request.build(
        event.http_method,
        event.url(base_url),
        headers=event.headers,
        body=event.body_bytes(),
    )


def _reply_body(response: Response) -> tuple[str, bool]:
    """The reply body and whether it is base64-encoded."""
    body = response.body
    if not isinstance(body, bytes):
        return response.text, False
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError:
        text = None
    if text is not None and "content-encoding" not in response.headers:
        return text, False
    return base64.b64encode(body).decode("ascii"), True


def response_to_reply(response: Response) -> InvocationReply:
    """Translate a Response into the legacy reply shape."""
    body, is_base64 = _reply_body(response)
    return InvocationReply(
        status_code=response.status,
        headers=response.headers.to_dict(),
        body=body,
        is_base64_encoded=is_base64,
    )


def failure_reply(exc: BaseException) -> InvocationReply:
    """The reply used when translation itself fails."""
    return InvocationReply(
        status_code=500,
        headers={"Content-Type": "application/json"},
        body=json({"error": str(exc)}).text,
    )


async def dispatch_event(
    router: "Router", event: Mapping[str, Any], context: Any = None
) -> dict[str, Any]:
    """Run one legacy event through *router* and return the reply dict.

    ``router.handle`` never raises; this catch only covers malformed
    events and bodies that cannot be decoded.
    """
    try:
        request = event_to_request(event, router.config.base_url)
        response = await router.handle(request, context)
        reply = response_to_reply(response)
    except Exception as exc:
        logger.exception("Invocation failed")
        reply = failure_reply(exc)
    return reply.to_dict()


def make_handler(router: "Router") -> AsyncEventHandler:
    """Bind *router* into an ``async (event, context) -> reply`` function.

    Usage::

        handler = make_handler(router)   # or router.handler()
    """

    async def handler(event: Mapping[str, Any], context: Any = None) -> dict[str, Any]:
        return await dispatch_event(router, event, context)

    return handler


def make_sync_handler(router: "Router") -> SyncEventHandler:
    """Bind *router* into a blocking ``(event, context) -> reply`` function.

    For platforms whose entry point is a plain function. Each call runs
    its own event loop via ``anyio.run``, so it must not be called from
    inside a running loop.
    """

    def handler(event: Mapping[str, Any], context: Any = None) -> dict[str, Any]:
        return anyio.run(partial(dispatch_event, router, event, context))

    return handler
