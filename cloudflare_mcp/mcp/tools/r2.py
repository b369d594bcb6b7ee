"""R2 bucket tools."""

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
from cloudflare_mcp.services import r2_service
from cloudflare_mcp.utils.formatters import format_response, format_success

ACCOUNT_ID = string_property("Account ID")
BUCKET_NAME = string_property("Bucket name")

TOOL_DEFINITIONS: list[Tool] = [
    Tool(
        name="cloudflare_list_r2_buckets",
        description="List R2 storage buckets in an account.",
        inputSchema=object_schema({"account_id": ACCOUNT_ID, "format": FORMAT_PROPERTY}, ["account_id"]),
    ),
    Tool(
        name="cloudflare_get_r2_bucket",
        description="Get details of an R2 bucket.",
        inputSchema=object_schema(
            {"account_id": ACCOUNT_ID, "bucket_name": BUCKET_NAME, "format": FORMAT_PROPERTY},
            ["account_id", "bucket_name"],
        ),
    ),
    Tool(
        name="cloudflare_create_r2_bucket",
        description=(
            "Create an R2 bucket. Names must be 3-63 characters of lowercase letters, "
            "digits and hyphens."
        ),
        inputSchema=object_schema(
            {
                "account_id": ACCOUNT_ID,
                "name": BUCKET_NAME,
                "location_hint": string_property("Location hint (wnam, enam, weur, eeur, apac)"),
            },
            ["account_id", "name"],
        ),
    ),
    Tool(
        name="cloudflare_delete_r2_bucket",
        description="Delete an R2 bucket. The bucket must be empty.",
        inputSchema=object_schema(
            {"account_id": ACCOUNT_ID, "bucket_name": BUCKET_NAME},
            ["account_id", "bucket_name"],
        ),
    ),
]


async def handle_list_r2_buckets(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    buckets = await r2_service.list_r2_buckets(client, arguments["account_id"])
    return format_response(unpaginated(buckets), response_format(arguments), "r2_buckets")


async def handle_get_r2_bucket(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    bucket = await r2_service.get_r2_bucket(client, arguments["account_id"], arguments["bucket_name"])
    return format_response(bucket, response_format(arguments), "r2_bucket")


async def handle_create_r2_bucket(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    name = arguments["name"]
    bucket = await r2_service.create_r2_bucket(
        client, arguments["account_id"], name, arguments.get("location_hint")
    )
    return format_success(f'R2 bucket "{name}" created', bucket=bucket)


async def handle_delete_r2_bucket(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    bucket_name = arguments["bucket_name"]
    await r2_service.delete_r2_bucket(client, arguments["account_id"], bucket_name)
    return format_success(f'R2 bucket "{bucket_name}" deleted')


TOOL_HANDLERS: dict[str, ToolHandler] = {
    "cloudflare_list_r2_buckets": handle_list_r2_buckets,
    "cloudflare_get_r2_bucket": handle_get_r2_bucket,
    "cloudflare_create_r2_bucket": handle_create_r2_bucket,
    "cloudflare_delete_r2_bucket": handle_delete_r2_bucket,
}
