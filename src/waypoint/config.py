"""Router configuration.

RouterConfig is a frozen dataclass, immutable after creation, with
defaults that match the hosting platform's function mount points.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    Override what you need::

        config = RouterConfig(mount_prefixes=("/.functions/api",))
    """

    # Function mount points, tried in order; first match wins. An empty
    # string mounts the router at the root.
    mount_prefixes: tuple[str, ...] = ("/.netlify/functions/api", "/api")

    # OPTIONS preflight
    preflight_allow_origin: str = "*"
    preflight_allow_methods: str = "GET, POST, PUT, DELETE, PATCH, OPTIONS"
    preflight_allow_headers: str = "Content-Type, Authorization, X-Requested-With"
    preflight_max_age: int = 86400  # 24 hours

    # Invocation adapter: scheme + host used to rebuild request URLs
    base_url: str = "https://example.com"

    def strip_prefix(self, path: str) -> str | None:
        """Return *path* relative to the first matching mount prefix.

        Returns ``None`` when no prefix matches. An exact prefix match
        yields ``"/"``.
        """
        for prefix in self.mount_prefixes:
            if path == prefix or path.startswith(prefix + "/"):
                return path[len(prefix) :] or "/"
        return None
