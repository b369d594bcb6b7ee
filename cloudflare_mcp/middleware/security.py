"""Response security headers and CORS helpers for the HTTP transport.

The gateway serves JSON and event streams only, so the content policy is
locked down to nothing: no scripts, styles or frames are ever expected.
"""

from __future__ import annotations

import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from cloudflare_mcp.config import settings

REQUEST_ID_HEADER = "X-Request-ID"

SECURITY_HEADERS = {
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains; preload",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Stamp every response with ``SECURITY_HEADERS`` and a request id.

    The request id is always added; the remaining headers only when
    ``settings.enable_security_headers`` is on.

    Usage:
        app.add_middleware(SecurityHeadersMiddleware)
    """

    def __init__(self, app: Callable, enabled: bool = True):
        super().__init__(app)
        self.enabled = enabled and settings.enable_security_headers

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)

        if self.enabled:
            for name, value in SECURITY_HEADERS.items():
                response.headers.setdefault(name, value)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def parse_cors_origins(origins_string: str) -> list[str]:
    """Split a comma-separated origin list; ``"*"`` stays a wildcard.

    >>> parse_cors_origins("https://a.example, https://b.example")
    ['https://a.example', 'https://b.example']
    """
    if origins_string.strip() == "*":
        return ["*"]
    return [origin.strip() for origin in origins_string.split(",") if origin.strip()]
