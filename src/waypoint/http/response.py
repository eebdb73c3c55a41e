"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response with its own Headers, so a
middleware that decorates a response never alters one another request
still holds.
"""

import json as json_module
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from http import HTTPStatus
from typing import Any

from waypoint.http.headers import Headers


def reason_phrase(status: int) -> str:
    """Standard reason phrase for *status*, ``""`` for unknown codes."""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    ``body`` is ``None`` for responses that carry no payload (preflight).
    ``status_text`` defaults to the standard reason phrase for ``status``.
    """

    body: str | bytes | None = None
    status: int = 200
    headers: Headers = field(default_factory=Headers)
    status_text: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.headers, Headers):
            object.__setattr__(self, "headers", Headers.from_mapping(self.headers))
        if not self.status_text:
            object.__setattr__(self, "status_text", reason_phrase(self.status))

    # -- Chainable transformations --

    def with_status(self, status: int, status_text: str = "") -> "Response":
        """Return a new Response with a different status code."""
        return replace(self, status=status, status_text=status_text or reason_phrase(status))

    def with_header(self, name: str, value: str) -> "Response":
        """Return a new Response with *name* set to *value* (replacing)."""
        return replace(self, headers=self.headers.set(name, value))

    def with_added_header(self, name: str, value: str) -> "Response":
        """Return a new Response with *value* appended to *name*."""
        return replace(self, headers=self.headers.add(name, value))

    def with_headers(
        self, headers: Headers | Mapping[str, str] | Iterable[tuple[str, str]]
    ) -> "Response":
        """Return a new Response with every given header set (replacing)."""
        return replace(self, headers=self.headers.merge(Headers.from_mapping(headers)))

    def without_header(self, name: str) -> "Response":
        """Return a new Response with *name* removed."""
        return replace(self, headers=self.headers.remove(name))

    def with_body(self, body: str | bytes | None) -> "Response":
        """Return a new Response with a different body."""
        return replace(self, body=body)

    # -- Accessors --

    @property
    def ok(self) -> bool:
        """True for 2xx statuses."""
        return 200 <= self.status < 300

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes (empty when there is no body)."""
        if self.body is None:
            return b""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string (empty when there is no body).

        Bytes that are not valid UTF-8 are replaced with U+FFFD.
        """
        if self.body is None:
            return ""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8", errors="replace")
        return self.body

    def json(self) -> Any:
        """Parse the body as JSON."""
        return json_module.loads(self.text)


# -- Helpers --


def json(data: Any, status: int = 200) -> Response:
    """A JSON response. *data* is serialized with ``json.dumps``."""
    return Response(
        body=json_module.dumps(data),
        status=status,
        headers=Headers((("Content-Type", "application/json"),)),
    )


def text(body: str, status: int = 200) -> Response:
    """A plain-text response."""
    return Response(body=body, status=status, headers=Headers((("Content-Type", "text/plain"),)))


def html(body: str, status: int = 200) -> Response:
    """An HTML response."""
    return Response(body=body, status=status, headers=Headers((("Content-Type", "text/html"),)))
