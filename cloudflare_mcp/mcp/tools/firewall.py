"""Firewall rule and filter tools."""

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
from cloudflare_mcp.schemas.cloudflare import (
    FIREWALL_ACTIONS,
    FirewallFilterInput,
    FirewallRuleCreateInput,
    FirewallRuleUpdateInput,
)
from cloudflare_mcp.services import firewall_service
from cloudflare_mcp.utils.formatters import format_response, format_success

ZONE_ID = string_property("Zone ID")
RULE_ID = string_property("Rule ID")

TOOL_DEFINITIONS: list[Tool] = [
    Tool(
        name="cloudflare_list_firewall_rules",
        description="List firewall rules for a zone.",
        inputSchema=object_schema({"zone_id": ZONE_ID, "format": FORMAT_PROPERTY}, ["zone_id"]),
    ),
    Tool(
        name="cloudflare_get_firewall_rule",
        description="Get details of a firewall rule, including its filter expression.",
        inputSchema=object_schema(
            {"zone_id": ZONE_ID, "rule_id": RULE_ID, "format": FORMAT_PROPERTY},
            ["zone_id", "rule_id"],
        ),
    ),
    Tool(
        name="cloudflare_create_firewall_rule",
        description=(
            "Create a firewall rule from a filter expression. Examples: "
            "'ip.src eq 192.0.2.1', '(http.request.uri.path contains \"/admin\")', "
            "'ip.geoip.country in {\"CN\" \"RU\"}'."
        ),
        inputSchema=object_schema(
            {
                "zone_id": ZONE_ID,
                "expression": string_property("Filter expression"),
                "action": {"type": "string", "enum": list(FIREWALL_ACTIONS), "description": "Action to take"},
                "description": string_property("Rule description"),
                "paused": {"type": "boolean", "default": False, "description": "Whether rule is paused"},
            },
            ["zone_id", "expression", "action"],
        ),
    ),
    Tool(
        name="cloudflare_update_firewall_rule",
        description="Update the action, description or paused state of a firewall rule.",
        inputSchema=object_schema(
            {
                "zone_id": ZONE_ID,
                "rule_id": RULE_ID,
                "action": {"type": "string", "enum": list(FIREWALL_ACTIONS), "description": "New action"},
                "description": string_property("New description"),
                "paused": {"type": "boolean", "description": "New paused status"},
            },
            ["zone_id", "rule_id"],
        ),
    ),
    Tool(
        name="cloudflare_delete_firewall_rule",
        description="Delete a firewall rule.",
        inputSchema=object_schema({"zone_id": ZONE_ID, "rule_id": RULE_ID}, ["zone_id", "rule_id"]),
    ),
    Tool(
        name="cloudflare_list_filters",
        description="List the filters (expressions) referenced by firewall rules in a zone.",
        inputSchema=object_schema({"zone_id": ZONE_ID, "format": FORMAT_PROPERTY}, ["zone_id"]),
    ),
]


async def handle_list_firewall_rules(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    rules = await firewall_service.list_firewall_rules(client, arguments["zone_id"])
    return format_response(unpaginated(rules), response_format(arguments), "firewall_rules")


async def handle_get_firewall_rule(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    rule = await firewall_service.get_firewall_rule(client, arguments["zone_id"], arguments["rule_id"])
    return format_response(rule, response_format(arguments), "firewall_rule")


async def handle_create_firewall_rule(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    rule = await firewall_service.create_firewall_rule(
        client,
        arguments["zone_id"],
        FirewallRuleCreateInput(
            action=arguments["action"],
            filter=FirewallFilterInput(expression=arguments["expression"]),
            description=arguments.get("description"),
            paused=arguments.get("paused", False),
        ),
    )
    return format_success("Firewall rule created", rule=rule)


async def handle_update_firewall_rule(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    changes = FirewallRuleUpdateInput(
        action=arguments.get("action"),
        description=arguments.get("description"),
        paused=arguments.get("paused"),
    )
    rule = await firewall_service.update_firewall_rule(
        client, arguments["zone_id"], arguments["rule_id"], changes
    )
    return format_success("Firewall rule updated", rule=rule)


async def handle_delete_firewall_rule(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    rule_id = arguments["rule_id"]
    await firewall_service.delete_firewall_rule(client, arguments["zone_id"], rule_id)
    return format_success(f"Firewall rule {rule_id} deleted")


async def handle_list_filters(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    filters = await firewall_service.list_filters(client, arguments["zone_id"])
    return format_response(unpaginated(filters), response_format(arguments), "filters")


TOOL_HANDLERS: dict[str, ToolHandler] = {
    "cloudflare_list_firewall_rules": handle_list_firewall_rules,
    "cloudflare_get_firewall_rule": handle_get_firewall_rule,
    "cloudflare_create_firewall_rule": handle_create_firewall_rule,
    "cloudflare_update_firewall_rule": handle_update_firewall_rule,
    "cloudflare_delete_firewall_rule": handle_delete_firewall_rule,
    "cloudflare_list_filters": handle_list_filters,
}
