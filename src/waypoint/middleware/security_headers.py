"""Security headers middleware.

Adds the common hardening headers (clickjacking, MIME sniffing, referrer
leakage, transport security, CSP) to responses.
"""

from dataclasses import dataclass
from typing import Any

from waypoint.http.request import Request
from waypoint.http.response import Response
from waypoint.middleware.protocol import Next


@dataclass(frozen=True, slots=True)
class SecurityHeadersConfig:
    """Configuration for security headers.

    Values are applied as-is. Set an optional header to ``None`` to omit it.
    ``html_only`` restricts the headers to ``text/html`` responses.
    """

    x_frame_options: str = "DENY"
    x_content_type_options: str = "nosniff"
    x_xss_protection: str | None = "1; mode=block"
    referrer_policy: str = "strict-origin-when-cross-origin"
    content_security_policy: str | None = "default-src 'self'"
    strict_transport_security: str | None = "max-age=31536000; includeSubDomains"
    html_only: bool = False


def _add_headers(response: Response, config: SecurityHeadersConfig) -> Response:
    headers = {
        "X-Content-Type-Options": config.x_content_type_options,
        "X-Frame-Options": config.x_frame_options,
        "X-XSS-Protection": config.x_xss_protection,
        "Strict-Transport-Security": config.strict_transport_security,
        "Referrer-Policy": config.referrer_policy,
        "Content-Security-Policy": config.content_security_policy,
    }
    return response.with_headers({k: v for k, v in headers.items() if v is not None})


class SecurityHeadersMiddleware:
    """Add security headers to responses.

    Usage::

        from waypoint.middleware import SecurityHeadersMiddleware

        router.use(SecurityHeadersMiddleware())

    Or with custom config::

        router.use(SecurityHeadersMiddleware(SecurityHeadersConfig(
            x_frame_options="SAMEORIGIN",
            strict_transport_security=None,
        )))
    """

    __slots__ = ("config",)

    def __init__(self, config: SecurityHeadersConfig | None = None) -> None:
        self.config = config or SecurityHeadersConfig()

    async def __call__(self, request: Request, context: Any, next: Next) -> Response:
        response = await next()
        if self.config.html_only and not (response.content_type or "").startswith("text/html"):
            return response
        return _add_headers(response, self.config)
