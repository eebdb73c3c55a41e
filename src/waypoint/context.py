"""Per-request context bag.

The hosting platform passes its own context object to the function entry
point; waypoint treats it as opaque and only ever adds to it. The router
sets ``params`` before calling the matched handler, and built-in
middleware set keys such as ``request_id``.

When the caller supplies no context, ``RequestContext`` is used: a
mutable namespace that supports both attribute and item access.
"""

import logging
from collections.abc import Iterator, MutableMapping
from typing import Any

logger = logging.getLogger("waypoint.context")


class RequestContext(MutableMapping[str, Any]):
    """A mutable namespace for one request.

    Usage::

        ctx = RequestContext(client_context=platform_ctx)
        ctx.params = {"id": "42"}
        ctx["request_id"] = "req_1"
        ctx.request_id  # "req_1"
    """

    __slots__ = ("_store",)

    def __init__(self, **values: Any) -> None:
        object.__setattr__(self, "_store", dict(values))

    def __getattr__(self, name: str) -> Any:
        if name == "_store":
            raise AttributeError(name)
        try:
            return self._store[name]
        except KeyError:
            msg = f"request context has no attribute {name!r}"
            raise AttributeError(msg) from None

    def __setattr__(self, name: str, value: Any) -> None:
        self._store[name] = value

    def __delattr__(self, name: str) -> None:
        try:
            del self._store[name]
        except KeyError:
            msg = f"request context has no attribute {name!r}"
            raise AttributeError(msg) from None

    def __getitem__(self, key: str) -> Any:
        return self._store[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._store[key] = value

    def __delitem__(self, key: str) -> None:
        del self._store[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._store)

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return f"<RequestContext {self._store!r}>"


def set_value(context: Any, name: str, value: Any) -> None:
    """Store *value* on a context of any shape.

    Mappings get an item, anything else an attribute. Contexts that accept
    neither (e.g. ``None``) are left alone.
    """
    if isinstance(context, MutableMapping):
        context[name] = value
        return
    try:
        setattr(context, name, value)
    except (AttributeError, TypeError):
        logger.debug("Context of type %s does not accept %r", type(context).__name__, name)


def get_value(context: Any, name: str, default: Any = None) -> Any:
    """Read *name* from a context of any shape."""
    if isinstance(context, MutableMapping):
        return context.get(name, default)
    return getattr(context, name, default)
