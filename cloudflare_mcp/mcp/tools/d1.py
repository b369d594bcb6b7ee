"""D1 database tools."""

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
    parse_json_array,
    response_format,
    string_property,
)
from cloudflare_mcp.services import d1_service
from cloudflare_mcp.utils.formatters import format_response, format_success

PARAMS_HINT = "params must be a valid JSON array (e.g., '[\"value1\", 123]')"

ACCOUNT_ID = string_property("Account ID")
DATABASE_ID = string_property("Database UUID")

TOOL_DEFINITIONS: list[Tool] = [
    Tool(
        name="cloudflare_list_d1_databases",
        description="List D1 databases in an account with table count and file size.",
        inputSchema=object_schema(
            {
                "account_id": ACCOUNT_ID,
                "page": PAGE_PROPERTY,
                "per_page": PER_PAGE_PROPERTY,
                "format": FORMAT_PROPERTY,
            },
            ["account_id"],
        ),
    ),
    Tool(
        name="cloudflare_get_d1_database",
        description="Get details of a D1 database.",
        inputSchema=object_schema(
            {"account_id": ACCOUNT_ID, "database_id": DATABASE_ID, "format": FORMAT_PROPERTY},
            ["account_id", "database_id"],
        ),
    ),
    Tool(
        name="cloudflare_create_d1_database",
        description="Create a new D1 database.",
        inputSchema=object_schema(
            {"account_id": ACCOUNT_ID, "name": string_property("Database name")},
            ["account_id", "name"],
        ),
    ),
    Tool(
        name="cloudflare_delete_d1_database",
        description="Delete a D1 database and all of its data.",
        inputSchema=object_schema(
            {"account_id": ACCOUNT_ID, "database_id": DATABASE_ID},
            ["account_id", "database_id"],
        ),
    ),
    Tool(
        name="cloudflare_query_d1_database",
        description=(
            "Execute SQL against a D1 database. Use ? placeholders with params for "
            "parameterised queries, e.g. sql='SELECT * FROM users WHERE id = ?' params='[1]'."
        ),
        inputSchema=object_schema(
            {
                "account_id": ACCOUNT_ID,
                "database_id": DATABASE_ID,
                "sql": string_property("SQL query"),
                "params": string_property("Query parameters as JSON array (e.g., '[\"value1\", 123]')"),
                "format": FORMAT_PROPERTY,
            },
            ["account_id", "database_id", "sql"],
        ),
    ),
]


async def handle_list_d1_databases(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    result = await d1_service.list_d1_databases(
        client,
        arguments["account_id"],
        page=arguments.get("page"),
        per_page=arguments.get("per_page"),
    )
    return format_response(result, response_format(arguments), "d1_databases")


async def handle_get_d1_database(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    database = await d1_service.get_d1_database(client, arguments["account_id"], arguments["database_id"])
    return format_response(database, response_format(arguments), "d1_database")


async def handle_create_d1_database(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    name = arguments["name"]
    database = await d1_service.create_d1_database(client, arguments["account_id"], name)
    return format_success(f'D1 database "{name}" created', database=database)


async def handle_delete_d1_database(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    database_id = arguments["database_id"]
    await d1_service.delete_d1_database(client, arguments["account_id"], database_id)
    return format_success(f"D1 database {database_id} deleted")


async def handle_query_d1_database(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    raw_params = arguments.get("params")
    params = (
        parse_json_array(raw_params, title="Invalid params format", hint=PARAMS_HINT)
        if raw_params
        else None
    )
    results = await d1_service.query_d1_database(
        client, arguments["account_id"], arguments["database_id"], arguments["sql"], params
    )
    return format_response(
        d1_service.summarize_query_results(results), response_format(arguments), "d1_query_results"
    )


TOOL_HANDLERS: dict[str, ToolHandler] = {
    "cloudflare_list_d1_databases": handle_list_d1_databases,
    "cloudflare_get_d1_database": handle_get_d1_database,
    "cloudflare_create_d1_database": handle_create_d1_database,
    "cloudflare_delete_d1_database": handle_delete_d1_database,
    "cloudflare_query_d1_database": handle_query_d1_database,
}
