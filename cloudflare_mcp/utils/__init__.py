"""Utility modules for the Cloudflare MCP gateway."""

from cloudflare_mcp.utils.formatters import (
    format_error_response,
    format_response,
    format_success,
    format_text,
)
from cloudflare_mcp.utils.pagination import (
    build_pagination_query,
    create_paginated_response,
    empty_paginated_response,
    normalize_pagination_params,
)

__all__ = [
    "build_pagination_query",
    "create_paginated_response",
    "empty_paginated_response",
    "format_error_response",
    "format_response",
    "format_success",
    "format_text",
    "normalize_pagination_params",
]
