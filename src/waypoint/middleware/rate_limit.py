"""Per-client rate limiting middleware.

A fixed-window, in-memory counter keyed by client address. State lives
in the middleware instance, so it is per warm function instance and is
lost on cold start.
"""

import math
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from waypoint.context import get_value
from waypoint.http.request import Request
from waypoint.http.response import Response, json
from waypoint.middleware.protocol import Next

# Checked in order; the first non-empty value identifies the client
_CLIENT_HEADERS = ("x-forwarded-for", "x-real-ip", "cf-connecting-ip")


@dataclass(frozen=True, slots=True)
class RateLimitConfig:
    """Configuration for per-client rate limiting."""

    max_requests: int = 100
    window_seconds: float = 60.0


class RateLimitMiddleware:
    """Answer 429 once a client exceeds ``max_requests`` per window.

    The client is identified by the first hop of ``X-Forwarded-For``,
    then ``X-Real-IP``, ``CF-Connecting-IP``, the context's ``ip``, and
    finally ``"unknown"``.

    Usage::

        router.use(RateLimitMiddleware(RateLimitConfig(max_requests=20)))
    """

    __slots__ = ("_clock", "_config", "_lock", "_state")

    def __init__(
        self,
        config: RateLimitConfig | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config or RateLimitConfig()
        self._clock = clock
        self._lock = threading.Lock()
        # client -> (count, window reset time)
        self._state: dict[str, tuple[int, float]] = {}

    @property
    def config(self) -> RateLimitConfig:
        return self._config

    def client_key(self, request: Request, context: Any) -> str:
        for name in _CLIENT_HEADERS:
            raw = request.headers.get(name)
            if raw:
                # Proxy chains are comma-separated, first hop is the client
                first = raw.split(",")[0].strip()
                if first:
                    return first
        return str(get_value(context, "ip") or "unknown")

    def _check_and_update(self, key: str, now: float) -> float | None:
        """Count one request; return seconds to wait when over the limit."""
        cfg = self._config
        with self._lock:
            count, reset_at = self._state.get(key, (0, 0.0))
            if now > reset_at:
                self._state[key] = (1, now + cfg.window_seconds)
                return None
            if count >= cfg.max_requests:
                return reset_at - now
            self._state[key] = (count + 1, reset_at)
            return None

    async def __call__(self, request: Request, context: Any, next: Next) -> Response:
        wait = self._check_and_update(self.client_key(request, context), self._clock())
        if wait is None:
            return await next()
        retry_after = max(1, math.ceil(wait))
        response = json({"error": "Too many requests", "retryAfter": retry_after}, status=429)
        return response.with_header("Retry-After", str(retry_after))
