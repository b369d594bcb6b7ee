"""User, account and membership tools, plus the connection check."""

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
from cloudflare_mcp.services import account_service
from cloudflare_mcp.utils.formatters import format_response

TOOL_DEFINITIONS: list[Tool] = [
    Tool(
        name="cloudflare_test_connection",
        description="Test the connection to the Cloudflare API. Returns the authenticated user email if successful.",
        inputSchema=object_schema({}),
    ),
    Tool(
        name="cloudflare_get_user",
        description="Get the currently authenticated user's details (email, name, settings).",
        inputSchema=object_schema({"format": FORMAT_PROPERTY}),
    ),
    Tool(
        name="cloudflare_list_accounts",
        description="List the accounts the credentials can access.",
        inputSchema=object_schema(
            {"page": PAGE_PROPERTY, "per_page": PER_PAGE_PROPERTY, "format": FORMAT_PROPERTY}
        ),
    ),
    Tool(
        name="cloudflare_get_account",
        description="Get details of an account.",
        inputSchema=object_schema(
            {"account_id": string_property("Account ID"), "format": FORMAT_PROPERTY},
            ["account_id"],
        ),
    ),
    Tool(
        name="cloudflare_list_account_members",
        description="List members of an account with their roles and status.",
        inputSchema=object_schema(
            {
                "account_id": string_property("Account ID"),
                "page": PAGE_PROPERTY,
                "per_page": PER_PAGE_PROPERTY,
                "format": FORMAT_PROPERTY,
            },
            ["account_id"],
        ),
    ),
]


async def handle_test_connection(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    """Reports failure as `{"connected": false}` data rather than an error block."""
    result = await account_service.test_connection(client)
    return format_response(result)


async def handle_get_user(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    user = await account_service.get_user(client)
    return format_response(user, response_format(arguments), "user")


async def handle_list_accounts(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    result = await account_service.list_accounts(
        client, page=arguments.get("page"), per_page=arguments.get("per_page")
    )
    return format_response(result, response_format(arguments), "accounts")


async def handle_get_account(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    account = await account_service.get_account(client, arguments["account_id"])
    return format_response(account, response_format(arguments), "account")


async def handle_list_account_members(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    result = await account_service.list_account_members(
        client,
        arguments["account_id"],
        page=arguments.get("page"),
        per_page=arguments.get("per_page"),
    )
    return format_response(result, response_format(arguments), "account_members")


TOOL_HANDLERS: dict[str, ToolHandler] = {
    "cloudflare_test_connection": handle_test_connection,
    "cloudflare_get_user": handle_get_user,
    "cloudflare_list_accounts": handle_list_accounts,
    "cloudflare_get_account": handle_get_account,
    "cloudflare_list_account_members": handle_list_account_members,
}
