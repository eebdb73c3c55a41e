"""Path templates compiled into anchored regular expressions.

Template syntax::

    "/users"              static
    "/users/:id"          named parameter, one segment (no "/")
    "/files/:name.:ext"   several parameters inside one segment
    "/static/*"           wildcard, any remainder, exposed as params["*"]

Every compiled matcher accepts one optional trailing slash, so
``/users`` and ``/users/`` are the same route.
"""

import re
from dataclasses import dataclass

from waypoint.errors import ConfigurationError

# A ":name" parameter or a bare "*" wildcard
_TOKEN = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)|\*")

PARAM_PATTERN = r"([^/]+)"
WILDCARD_PATTERN = r"(.*?)"
WILDCARD_NAME = "*"


@dataclass(frozen=True, slots=True)
class PathMatcher:
    """A compiled path template.

    ``param_names[i]`` names capture group ``i + 1`` of ``pattern``.
    """

    template: str
    pattern: re.Pattern[str]
    param_names: tuple[str, ...]

    def matches(self, path: str) -> bool:
        """True if *path* satisfies the template."""
        return self.pattern.fullmatch(path) is not None

    def match(self, path: str) -> dict[str, str] | None:
        """Extract parameters from *path*, or ``None`` if it does not match.

        Groups that did not participate in the match are left out of the
        result rather than mapped to an empty value.
        """
        m = self.pattern.fullmatch(path)
        if m is None:
            return None
        return {
            name: value
            for name, value in zip(self.param_names, m.groups(), strict=True)
            if value is not None
        }


def normalize_template(template: str) -> str:
    """Ensure a leading slash and drop trailing ones (``""`` -> ``"/"``)."""
    stripped = template.strip()
    if not stripped.startswith("/"):
        stripped = "/" + stripped
    return stripped.rstrip("/") or "/"


def compile_path(template: str) -> PathMatcher:
    """Compile *template* into a :class:`PathMatcher`.

    Raises ``ConfigurationError`` if a parameter name repeats or more than
    one wildcard is used.
    """
    normalized = normalize_template(template)
    body = "" if normalized == "/" else normalized

    parts: list[str] = []
    names: list[str] = []
    pos = 0
    for token in _TOKEN.finditer(body):
        parts.append(re.escape(body[pos : token.start()]))
        name = token.group(1) or WILDCARD_NAME
        if name in names:
            what = "wildcard" if name == WILDCARD_NAME else f"parameter {name!r}"
            msg = f"Duplicate {what} in route path {template!r}"
            raise ConfigurationError(msg)
        names.append(name)
        parts.append(WILDCARD_PATTERN if name == WILDCARD_NAME else PARAM_PATTERN)
        pos = token.end()
    parts.append(re.escape(body[pos:]))

    pattern = re.compile("".join(parts) + "/?")
    return PathMatcher(template=normalized, pattern=pattern, param_names=tuple(names))


def join_paths(prefix: str, path: str) -> str:
    """Join a mount *prefix* and a route *path* without doubling slashes.

    A route declared at ``/`` maps to the prefix itself::

        join_paths("/users/", "/")     -> "/users"
        join_paths("/users", "/:id")   -> "/users/:id"
    """
    base = normalize_template(prefix)
    tail = normalize_template(path)
    if base == "/":
        return tail
    if tail == "/":
        return base
    return base + tail
