"""Router import resolution — ``"module:attribute"`` strings to Routers."""

import importlib

from waypoint.routing.router import Router


def resolve_router(import_string: str) -> Router:
    """Resolve an import string to a Router instance.

    Accepts ``"module:attribute"``. When the attribute is omitted it
    defaults to ``"router"``. Factory functions are called with no
    arguments.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a Router or factory.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "router"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, Router):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, Router):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a waypoint.Router"
        raise TypeError(msg)

    return obj
