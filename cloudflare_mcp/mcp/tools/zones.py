"""Zone tools: list, inspect, create, update, delete, settings, activation."""

from __future__ import annotations

from typing import Any

from mcp.types import CallToolResult, Tool

from cloudflare_mcp.client import CloudflareClient
from cloudflare_mcp.mcp.tools._shared import (
    FORMAT_PROPERTY,
    PAGE_PROPERTY,
    PER_PAGE_PROPERTY,
    ToolHandler,
    object_schema,
    response_format,
    string_property,
)
from cloudflare_mcp.schemas.cloudflare import AccountRef, PlanRef, ZoneCreateInput, ZoneUpdateInput
from cloudflare_mcp.services import zone_service
from cloudflare_mcp.utils.formatters import format_response, format_success

ZONE_TYPE_PROPERTY = {"type": "string", "enum": ["full", "partial", "secondary"], "description": "Zone type"}

TOOL_DEFINITIONS: list[Tool] = [
    Tool(
        name="cloudflare_list_zones",
        description=(
            "List all zones (domains) in the account. Supports filtering by name and status. "
            "Returns id, name, status, plan and type for each zone."
        ),
        inputSchema=object_schema(
            {
                "name": string_property("Filter by zone name"),
                "status": string_property("Filter by status (active, pending, etc.)"),
                "page": PAGE_PROPERTY,
                "per_page": PER_PAGE_PROPERTY,
                "format": FORMAT_PROPERTY,
            }
        ),
    ),
    Tool(
        name="cloudflare_get_zone",
        description="Get detailed information about a specific zone, including name servers and plan.",
        inputSchema=object_schema(
            {"zone_id": string_property("Zone ID"), "format": FORMAT_PROPERTY},
            ["zone_id"],
        ),
    ),
    Tool(
        name="cloudflare_create_zone",
        description="Add a new zone (domain) to an account.",
        inputSchema=object_schema(
            {
                "name": string_property('Domain name (e.g., "example.com")'),
                "account_id": string_property("Account ID"),
                "type": {**ZONE_TYPE_PROPERTY, "default": "full"},
                "jump_start": {
                    "type": "boolean",
                    "default": True,
                    "description": "Scan for existing DNS records",
                },
            },
            ["name", "account_id"],
        ),
    ),
    Tool(
        name="cloudflare_update_zone",
        description="Update a zone: pause or unpause it, change its plan or type.",
        inputSchema=object_schema(
            {
                "zone_id": string_property("Zone ID"),
                "paused": {"type": "boolean", "description": "Pause the zone"},
                "plan_id": string_property("New plan ID"),
                "type": ZONE_TYPE_PROPERTY,
            },
            ["zone_id"],
        ),
    ),
    Tool(
        name="cloudflare_delete_zone",
        description="Delete a zone. This removes the domain and all of its DNS records. Cannot be undone.",
        inputSchema=object_schema({"zone_id": string_property("Zone ID to delete")}, ["zone_id"]),
    ),
    Tool(
        name="cloudflare_get_zone_settings",
        description="Get all settings for a zone (SSL mode, caching, security level, etc.).",
        inputSchema=object_schema(
            {"zone_id": string_property("Zone ID"), "format": FORMAT_PROPERTY},
            ["zone_id"],
        ),
    ),
    Tool(
        name="cloudflare_update_zone_setting",
        description=(
            "Update a single zone setting. Examples: ssl='full', always_use_https='on', "
            "min_tls_version='1.2', security_level='medium'."
        ),
        inputSchema=object_schema(
            {
                "zone_id": string_property("Zone ID"),
                "setting_id": string_property("Setting ID (e.g., ssl, always_use_https)"),
                "value": {"description": "New value for the setting"},
            },
            ["zone_id", "setting_id", "value"],
        ),
    ),
    Tool(
        name="cloudflare_zone_activation_check",
        description="Trigger a new activation check for a pending zone (re-checks name servers).",
        inputSchema=object_schema({"zone_id": string_property("Zone ID")}, ["zone_id"]),
    ),
]


async def handle_list_zones(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    result = await zone_service.list_zones(
        client,
        name=arguments.get("name"),
        status=arguments.get("status"),
        page=arguments.get("page"),
        per_page=arguments.get("per_page"),
    )
    return format_response(result, response_format(arguments), "zones")


async def handle_get_zone(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    zone = await zone_service.get_zone(client, arguments["zone_id"])
    return format_response(zone, response_format(arguments), "zone")


async def handle_create_zone(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    name = arguments["name"]
    zone = await zone_service.create_zone(
        client,
        ZoneCreateInput(
            name=name,
            account=AccountRef(id=arguments["account_id"]),
            type=arguments.get("type") or "full",
            jump_start=arguments.get("jump_start", True),
        ),
    )
    return format_success(f"Zone {name} created successfully", zone=zone)


async def handle_update_zone(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    plan_id = arguments.get("plan_id")
    changes = ZoneUpdateInput(
        paused=arguments.get("paused"),
        plan=PlanRef(id=plan_id) if plan_id else None,
        type=arguments.get("type"),
    )
    zone = await zone_service.update_zone(client, arguments["zone_id"], changes)
    return format_success("Zone updated successfully", zone=zone)


async def handle_delete_zone(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    result = await zone_service.delete_zone(client, arguments["zone_id"])
    return format_success(f"Zone {result.get('id', arguments['zone_id'])} deleted successfully")


async def handle_get_zone_settings(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    zone_settings = await zone_service.get_zone_settings(client, arguments["zone_id"])
    return format_response(zone_settings, response_format(arguments), "zone_settings")


async def handle_update_zone_setting(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    setting_id = arguments["setting_id"]
    setting = await zone_service.update_zone_setting(
        client, arguments["zone_id"], setting_id, arguments.get("value")
    )
    return format_success(f"Setting {setting_id} updated successfully", setting=setting)


async def handle_zone_activation_check(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    result = await zone_service.activation_check(client, arguments["zone_id"])
    return format_success("Activation check triggered", id=result.get("id"))


TOOL_HANDLERS: dict[str, ToolHandler] = {
    "cloudflare_list_zones": handle_list_zones,
    "cloudflare_get_zone": handle_get_zone,
    "cloudflare_create_zone": handle_create_zone,
    "cloudflare_update_zone": handle_update_zone,
    "cloudflare_delete_zone": handle_delete_zone,
    "cloudflare_get_zone_settings": handle_get_zone_settings,
    "cloudflare_update_zone_setting": handle_update_zone_setting,
    "cloudflare_zone_activation_check": handle_zone_activation_check,
}
