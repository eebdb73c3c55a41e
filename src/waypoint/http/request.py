"""Immutable HTTP request.

The body is materialized once, in memory, before the request reaches the
router. Parsed forms of the body (text, JSON) are cached on first access.
"""

import json as json_module
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlsplit

from waypoint.http.headers import Headers
from waypoint.http.query import QueryParams

_MISSING = object()


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``url`` is the full URL (scheme and host included when known);
    ``path`` and ``query`` are derived from it.
    """

    method: str
    url: str
    headers: Headers = field(default_factory=Headers)
    body: bytes = b""

    # Private: mutable cache for derived data (parsed URL, JSON body).
    # The dict contents change even though the field reference is frozen.
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def build(
        cls,
        method: str,
        url: str,
        *,
        headers: Headers | Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
        body: str | bytes | None = None,
    ) -> "Request":
        """Create a Request, normalizing method case, headers, and body."""
        if isinstance(body, str):
            body = body.encode("utf-8")
        return cls(
            method=method.upper(),
            url=url,
            headers=Headers.from_mapping(headers),
            body=body or b"",
        )

    # -- URL parts --

    @property
    def path(self) -> str:
        """The URL path, ``"/"`` when the URL has none."""
        return self._split().path or "/"

    @property
    def query(self) -> QueryParams:
        """Parsed query string parameters."""
        if "_query" not in self._cache:
            self._cache["_query"] = QueryParams(self._split().query)
        return self._cache["_query"]

    def _split(self) -> Any:
        if "_split" not in self._cache:
            self._cache["_split"] = urlsplit(self.url)
        return self._cache["_split"]

    # -- Headers --

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def content_length(self) -> int | None:
        """The Content-Length header as int."""
        value = self.headers.get("content-length")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None

    # -- Body access --

    @property
    def text(self) -> str:
        """The body decoded as UTF-8."""
        return self.body.decode("utf-8")

    def json(self) -> Any:
        """Parse the body as JSON.

        The parsed value is cached; later calls (and ``parsed_body``)
        return the same object. Raises ``ValueError`` on invalid JSON.
        """
        cached = self._cache.get("_json", _MISSING)
        if cached is not _MISSING:
            return cached
        result = json_module.loads(self.body)
        self._cache["_json"] = result
        return result

    @property
    def parsed_body(self) -> Any:
        """The JSON body if it has already been parsed, else ``None``.

        Populated by ``JSONBodyParser`` or an earlier ``json()`` call.
        """
        return self._cache.get("_json")
