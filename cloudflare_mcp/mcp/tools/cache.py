"""Cache purge tools."""

from __future__ import annotations

from typing import Any

from mcp.types import CallToolResult, Tool

from cloudflare_mcp.client import CloudflareClient
from cloudflare_mcp.mcp.tools._shared import ToolHandler, object_schema, parse_string_array, string_property
from cloudflare_mcp.schemas.cloudflare import CachePurgeRequest
from cloudflare_mcp.services import cache_service
from cloudflare_mcp.utils.formatters import format_success

ZONE_ID = string_property("Zone ID")

TOOL_DEFINITIONS: list[Tool] = [
    Tool(
        name="cloudflare_purge_all_cache",
        description="Purge every cached file for a zone. Use with care: origin load will spike.",
        inputSchema=object_schema({"zone_id": ZONE_ID}, ["zone_id"]),
    ),
    Tool(
        name="cloudflare_purge_cache_by_url",
        description="Purge specific URLs from the cache.",
        inputSchema=object_schema(
            {
                "zone_id": ZONE_ID,
                "urls": string_property(
                    "JSON array of URLs to purge (e.g., '[\"https://example.com/file.js\"]')"
                ),
            },
            ["zone_id", "urls"],
        ),
    ),
    Tool(
        name="cloudflare_purge_cache_by_tag",
        description="Purge cached content by Cache-Tag header values (Enterprise plans).",
        inputSchema=object_schema(
            {
                "zone_id": ZONE_ID,
                "tags": string_property("JSON array of cache tags (e.g., '[\"tag1\", \"tag2\"]')"),
            },
            ["zone_id", "tags"],
        ),
    ),
    Tool(
        name="cloudflare_purge_cache_by_host",
        description="Purge cached content for specific hostnames (Enterprise plans).",
        inputSchema=object_schema(
            {
                "zone_id": ZONE_ID,
                "hosts": string_property(
                    "JSON array of hostnames (e.g., '[\"www.example.com\", \"api.example.com\"]')"
                ),
            },
            ["zone_id", "hosts"],
        ),
    ),
]


async def handle_purge_all_cache(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    result = await cache_service.purge_cache(
        client, arguments["zone_id"], CachePurgeRequest(purge_everything=True)
    )
    return format_success("All cache purged successfully", id=result.get("id"))


async def handle_purge_cache_by_url(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    urls = parse_string_array(arguments["urls"], field="urls")
    result = await cache_service.purge_cache(client, arguments["zone_id"], CachePurgeRequest(files=urls))
    return format_success(f"Purged {len(urls)} URL(s) from cache", urls=urls, id=result.get("id"))


async def handle_purge_cache_by_tag(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    tags = parse_string_array(arguments["tags"], field="tags")
    result = await cache_service.purge_cache(client, arguments["zone_id"], CachePurgeRequest(tags=tags))
    return format_success(f"Purged {len(tags)} tag(s) from cache", tags=tags, id=result.get("id"))


async def handle_purge_cache_by_host(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    hosts = parse_string_array(arguments["hosts"], field="hosts")
    result = await cache_service.purge_cache(client, arguments["zone_id"], CachePurgeRequest(hosts=hosts))
    return format_success(f"Purged cache for {len(hosts)} host(s)", hosts=hosts, id=result.get("id"))


TOOL_HANDLERS: dict[str, ToolHandler] = {
    "cloudflare_purge_all_cache": handle_purge_all_cache,
    "cloudflare_purge_cache_by_url": handle_purge_cache_by_url,
    "cloudflare_purge_cache_by_tag": handle_purge_cache_by_tag,
    "cloudflare_purge_cache_by_host": handle_purge_cache_by_host,
}
