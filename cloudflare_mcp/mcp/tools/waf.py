"""WAF package and rule tools."""

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
from cloudflare_mcp.schemas.cloudflare import WAF_RULE_MODES
from cloudflare_mcp.services import waf_service
from cloudflare_mcp.utils.formatters import format_response, format_success

ZONE_ID = string_property("Zone ID")
PACKAGE_ID = string_property("WAF package ID")

TOOL_DEFINITIONS: list[Tool] = [
    Tool(
        name="cloudflare_list_waf_packages",
        description="List WAF rule packages (e.g. the Cloudflare and OWASP rule sets) for a zone.",
        inputSchema=object_schema({"zone_id": ZONE_ID, "format": FORMAT_PROPERTY}, ["zone_id"]),
    ),
    Tool(
        name="cloudflare_list_waf_rules",
        description="List the rules in a WAF package.",
        inputSchema=object_schema(
            {"zone_id": ZONE_ID, "package_id": PACKAGE_ID, "format": FORMAT_PROPERTY},
            ["zone_id", "package_id"],
        ),
    ),
    Tool(
        name="cloudflare_update_waf_rule",
        description="Change the mode of a WAF rule: default, disable, simulate, block or challenge.",
        inputSchema=object_schema(
            {
                "zone_id": ZONE_ID,
                "package_id": PACKAGE_ID,
                "rule_id": string_property("Rule ID"),
                "mode": {"type": "string", "enum": list(WAF_RULE_MODES), "description": "Rule mode"},
            },
            ["zone_id", "package_id", "rule_id", "mode"],
        ),
    ),
]


async def handle_list_waf_packages(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    packages = await waf_service.list_waf_packages(client, arguments["zone_id"])
    return format_response(unpaginated(packages), response_format(arguments), "waf_packages")


async def handle_list_waf_rules(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    rules = await waf_service.list_waf_rules(client, arguments["zone_id"], arguments["package_id"])
    return format_response(unpaginated(rules), response_format(arguments), "waf_rules")


async def handle_update_waf_rule(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    rule_id, mode = arguments["rule_id"], arguments["mode"]
    rule = await waf_service.update_waf_rule(
        client, arguments["zone_id"], arguments["package_id"], rule_id, mode
    )
    return format_success(f"WAF rule {rule_id} mode updated to {mode}", rule=rule)


TOOL_HANDLERS: dict[str, ToolHandler] = {
    "cloudflare_list_waf_packages": handle_list_waf_packages,
    "cloudflare_list_waf_rules": handle_list_waf_rules,
    "cloudflare_update_waf_rule": handle_update_waf_rule,
}
