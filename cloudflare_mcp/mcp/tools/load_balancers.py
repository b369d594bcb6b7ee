"""Load balancer, pool and monitor tools (read only)."""

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
from cloudflare_mcp.services import load_balancer_service
from cloudflare_mcp.utils.formatters import format_response

ZONE_ID = string_property("Zone ID")
ACCOUNT_ID = string_property("Account ID")

TOOL_DEFINITIONS: list[Tool] = [
    Tool(
        name="cloudflare_list_load_balancers",
        description="List load balancers configured on a zone.",
        inputSchema=object_schema({"zone_id": ZONE_ID, "format": FORMAT_PROPERTY}, ["zone_id"]),
    ),
    Tool(
        name="cloudflare_get_load_balancer",
        description="Get details of a load balancer, including pools and steering policy.",
        inputSchema=object_schema(
            {"zone_id": ZONE_ID, "lb_id": string_property("Load balancer ID"), "format": FORMAT_PROPERTY},
            ["zone_id", "lb_id"],
        ),
    ),
    Tool(
        name="cloudflare_list_load_balancer_pools",
        description="List origin pools available to load balancers in an account.",
        inputSchema=object_schema({"account_id": ACCOUNT_ID, "format": FORMAT_PROPERTY}, ["account_id"]),
    ),
    Tool(
        name="cloudflare_get_load_balancer_pool",
        description="Get details of an origin pool, including its origins and health.",
        inputSchema=object_schema(
            {"account_id": ACCOUNT_ID, "pool_id": string_property("Pool ID"), "format": FORMAT_PROPERTY},
            ["account_id", "pool_id"],
        ),
    ),
    Tool(
        name="cloudflare_list_load_balancer_monitors",
        description="List health-check monitors in an account.",
        inputSchema=object_schema({"account_id": ACCOUNT_ID, "format": FORMAT_PROPERTY}, ["account_id"]),
    ),
]


async def handle_list_load_balancers(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    lbs = await load_balancer_service.list_load_balancers(client, arguments["zone_id"])
    return format_response(unpaginated(lbs), response_format(arguments), "load_balancers")


async def handle_get_load_balancer(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    lb = await load_balancer_service.get_load_balancer(client, arguments["zone_id"], arguments["lb_id"])
    return format_response(lb, response_format(arguments), "load_balancer")


async def handle_list_load_balancer_pools(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    pools = await load_balancer_service.list_load_balancer_pools(client, arguments["account_id"])
    return format_response(unpaginated(pools), response_format(arguments), "load_balancer_pools")


async def handle_get_load_balancer_pool(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    pool = await load_balancer_service.get_load_balancer_pool(
        client, arguments["account_id"], arguments["pool_id"]
    )
    return format_response(pool, response_format(arguments), "load_balancer_pool")


async def handle_list_load_balancer_monitors(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    monitors = await load_balancer_service.list_load_balancer_monitors(client, arguments["account_id"])
    return format_response(unpaginated(monitors), response_format(arguments), "load_balancer_monitors")


TOOL_HANDLERS: dict[str, ToolHandler] = {
    "cloudflare_list_load_balancers": handle_list_load_balancers,
    "cloudflare_get_load_balancer": handle_get_load_balancer,
    "cloudflare_list_load_balancer_pools": handle_list_load_balancer_pools,
    "cloudflare_get_load_balancer_pool": handle_get_load_balancer_pool,
    "cloudflare_list_load_balancer_monitors": handle_list_load_balancer_monitors,
}
