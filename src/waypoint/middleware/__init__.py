"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, context: Any, next: Next) -> Response

Built-in middleware:
    AccessLogMiddleware -- Request/response logging with duration
    CompressionMiddleware -- Gzip response bodies
    CORSMiddleware -- Cross-Origin Resource Sharing
    ErrorHandlingMiddleware -- Turn downstream exceptions into responses
    JSONBodyParser -- Parse JSON bodies once, 400 on invalid JSON
    PerformanceMiddleware -- X-Response-Time and slow-request logging
    RateLimitMiddleware -- Per-client request limits, 429 with Retry-After
    RequestIdMiddleware -- X-Request-ID propagation
    RequestSizeLimit -- 413 for oversized bodies
    SecurityHeadersMiddleware -- X-Frame-Options, CSP, HSTS, and friends
"""

from waypoint.middleware.access_log import AccessLogMiddleware
from waypoint.middleware.body import JSONBodyParser, RequestSizeLimit
from waypoint.middleware.builtin import CORSConfig, CORSMiddleware
from waypoint.middleware.chain import build_chain
from waypoint.middleware.compression import CompressionMiddleware
from waypoint.middleware.error_handling import ErrorHandlingMiddleware
from waypoint.middleware.performance import PerformanceMiddleware
from waypoint.middleware.protocol import Middleware, Next
from waypoint.middleware.rate_limit import RateLimitConfig, RateLimitMiddleware
from waypoint.middleware.request_id import RequestIdMiddleware
from waypoint.middleware.security_headers import (
    SecurityHeadersConfig,
    SecurityHeadersMiddleware,
)

__all__ = [
    "AccessLogMiddleware",
    "CORSConfig",
    "CORSMiddleware",
    "CompressionMiddleware",
    "ErrorHandlingMiddleware",
    "JSONBodyParser",
    "Middleware",
    "Next",
    "PerformanceMiddleware",
    "RateLimitConfig",
    "RateLimitMiddleware",
    "RequestIdMiddleware",
    "RequestSizeLimit",
    "SecurityHeadersConfig",
    "SecurityHeadersMiddleware",
    "build_chain",
]
