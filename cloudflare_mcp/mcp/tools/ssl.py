"""SSL/TLS certificate tools."""

from __future__ import annotations

from typing import Any

from mcp.types import CallToolResult, Tool

from cloudflare_mcp.client import CloudflareClient
from cloudflare_mcp.mcp.tools._shared import (
    FORMAT_PROPERTY,
    ToolHandler,
    object_schema,
    response_format,
    string_property,
    unpaginated,
)
from cloudflare_mcp.services import ssl_service
from cloudflare_mcp.utils.formatters import format_response

TOOL_DEFINITIONS: list[Tool] = [
    Tool(
        name="cloudflare_list_ssl_certificates",
        description="List SSL certificate packs for a zone with their hosts, status and expiry.",
        inputSchema=object_schema(
            {"zone_id": string_property("Zone ID"), "format": FORMAT_PROPERTY},
            ["zone_id"],
        ),
    ),
]


async def handle_list_ssl_certificates(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    certificates = await ssl_service.list_ssl_certificates(client, arguments["zone_id"])
    return format_response(unpaginated(certificates), response_format(arguments), "ssl_certificates")


TOOL_HANDLERS: dict[str, ToolHandler] = {
    "cloudflare_list_ssl_certificates": handle_list_ssl_certificates,
}
