"""Workers tools: scripts, routes, cron triggers and secret names."""

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
from cloudflare_mcp.services import worker_service
from cloudflare_mcp.utils.formatters import format_response, format_success, format_text

ACCOUNT_ID = string_property("Account ID")
SCRIPT_NAME = string_property("Worker script name")
ZONE_ID = string_property("Zone ID")

TOOL_DEFINITIONS: list[Tool] = [
    Tool(
        name="cloudflare_list_workers",
        description="List all Worker scripts in an account with their handlers and last modification time.",
        inputSchema=object_schema({"account_id": ACCOUNT_ID, "format": FORMAT_PROPERTY}, ["account_id"]),
    ),
    Tool(
        name="cloudflare_get_worker",
        description="Get the source code of a Worker script.",
        inputSchema=object_schema(
            {"account_id": ACCOUNT_ID, "script_name": SCRIPT_NAME},
            ["account_id", "script_name"],
        ),
    ),
    Tool(
        name="cloudflare_delete_worker",
        description="Delete a Worker script. Routes pointing at it stop working.",
        inputSchema=object_schema(
            {"account_id": ACCOUNT_ID, "script_name": SCRIPT_NAME},
            ["account_id", "script_name"],
        ),
    ),
    Tool(
        name="cloudflare_list_worker_routes",
        description="List the Worker routes configured for a zone.",
        inputSchema=object_schema({"zone_id": ZONE_ID, "format": FORMAT_PROPERTY}, ["zone_id"]),
    ),
    Tool(
        name="cloudflare_create_worker_route",
        description=(
            "Create a Worker route mapping a URL pattern to a script. "
            "Examples: 'example.com/*', '*.example.com/api/*'."
        ),
        inputSchema=object_schema(
            {
                "zone_id": ZONE_ID,
                "pattern": string_property('URL pattern (e.g., "example.com/*")'),
                "script": string_property("Worker script name"),
            },
            ["zone_id", "pattern"],
        ),
    ),
    Tool(
        name="cloudflare_delete_worker_route",
        description="Delete a Worker route.",
        inputSchema=object_schema(
            {"zone_id": ZONE_ID, "route_id": string_property("Route ID")},
            ["zone_id", "route_id"],
        ),
    ),
    Tool(
        name="cloudflare_get_worker_cron_triggers",
        description="Get the cron triggers (scheduled events) of a Worker script.",
        inputSchema=object_schema(
            {"account_id": ACCOUNT_ID, "script_name": SCRIPT_NAME, "format": FORMAT_PROPERTY},
            ["account_id", "script_name"],
        ),
    ),
    Tool(
        name="cloudflare_list_worker_secrets",
        description=(
            "List the secrets (environment variables) bound to a Worker. "
            "Only names and types are returned, never values."
        ),
        inputSchema=object_schema(
            {"account_id": ACCOUNT_ID, "script_name": SCRIPT_NAME, "format": FORMAT_PROPERTY},
            ["account_id", "script_name"],
        ),
    ),
]


async def handle_list_workers(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    workers = await worker_service.list_workers(client, arguments["account_id"])
    return format_response(unpaginated(workers), response_format(arguments), "workers")


async def handle_get_worker(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    script = await worker_service.get_worker(client, arguments["account_id"], arguments["script_name"])
    return format_text(script)


async def handle_delete_worker(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    script_name = arguments["script_name"]
    await worker_service.delete_worker(client, arguments["account_id"], script_name)
    return format_success(f"Worker {script_name} deleted successfully")


async def handle_list_worker_routes(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    routes = await worker_service.list_worker_routes(client, arguments["zone_id"])
    return format_response(unpaginated(routes), response_format(arguments), "worker_routes")


async def handle_create_worker_route(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    route = await worker_service.create_worker_route(
        client, arguments["zone_id"], arguments["pattern"], arguments.get("script")
    )
    return format_success("Worker route created", route=route)


async def handle_delete_worker_route(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    route_id = arguments["route_id"]
    await worker_service.delete_worker_route(client, arguments["zone_id"], route_id)
    return format_success(f"Worker route {route_id} deleted")


async def handle_get_worker_cron_triggers(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    triggers = await worker_service.get_worker_cron_triggers(
        client, arguments["account_id"], arguments["script_name"]
    )
    return format_response(unpaginated(triggers), response_format(arguments), "cron_triggers")


async def handle_list_worker_secrets(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    secrets = await worker_service.list_worker_secrets(
        client, arguments["account_id"], arguments["script_name"]
    )
    return format_response(unpaginated(secrets), response_format(arguments), "worker_secrets")


TOOL_HANDLERS: dict[str, ToolHandler] = {
    "cloudflare_list_workers": handle_list_workers,
    "cloudflare_get_worker": handle_get_worker,
    "cloudflare_delete_worker": handle_delete_worker,
    "cloudflare_list_worker_routes": handle_list_worker_routes,
    "cloudflare_create_worker_route": handle_create_worker_route,
    "cloudflare_delete_worker_route": handle_delete_worker_route,
    "cloudflare_get_worker_cron_triggers": handle_get_worker_cron_triggers,
    "cloudflare_list_worker_secrets": handle_list_worker_secrets,
}
