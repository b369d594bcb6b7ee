"""Zone and DNS analytics tools."""

from __future__ import annotations

import json
from typing import Any

from mcp.types import CallToolResult, Tool

from cloudflare_mcp.client import CloudflareClient
from cloudflare_mcp.mcp.tools._shared import (
    FORMAT_PROPERTY,
    ToolHandler,
    object_schema,
    response_format,
    string_property,
)
from cloudflare_mcp.services import analytics_service
from cloudflare_mcp.utils.formatters import format_response

ZONE_ID = string_property("Zone ID")

TOOL_DEFINITIONS: list[Tool] = [
    Tool(
        name="cloudflare_get_zone_analytics",
        description=(
            "Get traffic analytics for a zone: requests, bandwidth, threats and page views. "
            "since/until accept ISO 8601 timestamps or relative minutes such as -1440."
        ),
        inputSchema=object_schema(
            {
                "zone_id": ZONE_ID,
                "since": string_property("Start time (ISO 8601 or -minutes)"),
                "until": string_property("End time (ISO 8601 or -minutes)"),
                "format": FORMAT_PROPERTY,
            },
            ["zone_id"],
        ),
    ),
    Tool(
        name="cloudflare_get_dns_analytics",
        description=(
            "Get a DNS analytics report for a zone. Dimensions include queryName, queryType "
            "and responseCode; metrics include queryCount and uncachedCount."
        ),
        inputSchema=object_schema(
            {
                "zone_id": ZONE_ID,
                "dimensions": string_property(
                    "Dimensions as JSON array (e.g., '[\"queryName\", \"queryType\"]')"
                ),
                "metrics": string_property("Metrics as JSON array (e.g., '[\"queryCount\"]')"),
                "since": string_property("Start time"),
                "until": string_property("End time"),
                "format": FORMAT_PROPERTY,
            },
            ["zone_id"],
        ),
    ),
]


def _lenient_list(raw: str | None) -> list[str] | None:
    """JSON array if it parses as one, otherwise the raw string as a single entry."""
    if not raw:
        return None
    try:
        value = json.loads(raw)
    except ValueError:
        return [raw]
    return [str(item) for item in value] if isinstance(value, list) else [raw]


async def handle_get_zone_analytics(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    analytics = await analytics_service.get_zone_analytics(
        client, arguments["zone_id"], since=arguments.get("since"), until=arguments.get("until")
    )
    return format_response(analytics, response_format(arguments), "zone_analytics")


async def handle_get_dns_analytics(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    analytics = await analytics_service.get_dns_analytics(
        client,
        arguments["zone_id"],
        dimensions=_lenient_list(arguments.get("dimensions")),
        metrics=_lenient_list(arguments.get("metrics")),
        since=arguments.get("since"),
        until=arguments.get("until"),
    )
    return format_response(analytics, response_format(arguments), "dns_analytics")


TOOL_HANDLERS: dict[str, ToolHandler] = {
    "cloudflare_get_zone_analytics": handle_get_zone_analytics,
    "cloudflare_get_dns_analytics": handle_get_dns_analytics,
}
