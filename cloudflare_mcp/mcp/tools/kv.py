"""Workers KV tools: namespaces, key listing and value access."""

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
from cloudflare_mcp.services import kv_service
from cloudflare_mcp.utils.formatters import format_response, format_success, format_text

DEFAULT_KEY_LIMIT = 1000

ACCOUNT_ID = string_property("Account ID")
NAMESPACE_ID = string_property("Namespace ID")

TOOL_DEFINITIONS: list[Tool] = [
    Tool(
        name="cloudflare_list_kv_namespaces",
        description="List all Workers KV namespaces in an account.",
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
        name="cloudflare_get_kv_namespace",
        description="Get details of a KV namespace.",
        inputSchema=object_schema(
            {"account_id": ACCOUNT_ID, "namespace_id": NAMESPACE_ID, "format": FORMAT_PROPERTY},
            ["account_id", "namespace_id"],
        ),
    ),
    Tool(
        name="cloudflare_create_kv_namespace",
        description="Create a new KV namespace.",
        inputSchema=object_schema(
            {"account_id": ACCOUNT_ID, "title": string_property("Namespace title")},
            ["account_id", "title"],
        ),
    ),
    Tool(
        name="cloudflare_rename_kv_namespace",
        description="Rename a KV namespace.",
        inputSchema=object_schema(
            {
                "account_id": ACCOUNT_ID,
                "namespace_id": NAMESPACE_ID,
                "title": string_property("New namespace title"),
            },
            ["account_id", "namespace_id", "title"],
        ),
    ),
    Tool(
        name="cloudflare_delete_kv_namespace",
        description="Delete a KV namespace and every key in it.",
        inputSchema=object_schema(
            {"account_id": ACCOUNT_ID, "namespace_id": NAMESPACE_ID},
            ["account_id", "namespace_id"],
        ),
    ),
    Tool(
        name="cloudflare_list_kv_keys",
        description=(
            "List keys in a KV namespace with optional metadata. "
            "Pass the returned cursor to fetch the next page."
        ),
        inputSchema=object_schema(
            {
                "account_id": ACCOUNT_ID,
                "namespace_id": NAMESPACE_ID,
                "prefix": string_property("Filter by key prefix"),
                "cursor": string_property("Pagination cursor from a previous response"),
                "limit": {
                    "type": "integer",
                    "minimum": 1,
                    "maximum": 1000,
                    "default": DEFAULT_KEY_LIMIT,
                    "description": "Max keys to return (1-1000)",
                },
                "format": FORMAT_PROPERTY,
            },
            ["account_id", "namespace_id"],
        ),
    ),
    Tool(
        name="cloudflare_get_kv_value",
        description="Get the raw value stored under a key.",
        inputSchema=object_schema(
            {"account_id": ACCOUNT_ID, "namespace_id": NAMESPACE_ID, "key": string_property("Key name")},
            ["account_id", "namespace_id", "key"],
        ),
    ),
    Tool(
        name="cloudflare_put_kv_value",
        description="Write a value under a key, optionally with an absolute or relative expiration.",
        inputSchema=object_schema(
            {
                "account_id": ACCOUNT_ID,
                "namespace_id": NAMESPACE_ID,
                "key": string_property("Key name"),
                "value": string_property("Value to store"),
                "expiration": {"type": "integer", "description": "Unix timestamp for expiration"},
                "expiration_ttl": {"type": "integer", "description": "TTL in seconds"},
            },
            ["account_id", "namespace_id", "key", "value"],
        ),
    ),
    Tool(
        name="cloudflare_delete_kv_value",
        description="Delete a key and its value.",
        inputSchema=object_schema(
            {"account_id": ACCOUNT_ID, "namespace_id": NAMESPACE_ID, "key": string_property("Key to delete")},
            ["account_id", "namespace_id", "key"],
        ),
    ),
]


async def handle_list_kv_namespaces(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    result = await kv_service.list_kv_namespaces(
        client,
        arguments["account_id"],
        page=arguments.get("page"),
        per_page=arguments.get("per_page"),
    )
    return format_response(result, response_format(arguments), "kv_namespaces")


async def handle_get_kv_namespace(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    namespace = await kv_service.get_kv_namespace(client, arguments["account_id"], arguments["namespace_id"])
    return format_response(namespace, response_format(arguments), "kv_namespace")


async def handle_create_kv_namespace(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    title = arguments["title"]
    namespace = await kv_service.create_kv_namespace(client, arguments["account_id"], title)
    return format_success(f'KV namespace "{title}" created', namespace=namespace)


async def handle_rename_kv_namespace(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    title = arguments["title"]
    await kv_service.rename_kv_namespace(client, arguments["account_id"], arguments["namespace_id"], title)
    return format_success(f'KV namespace renamed to "{title}"')


async def handle_delete_kv_namespace(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    namespace_id = arguments["namespace_id"]
    await kv_service.delete_kv_namespace(client, arguments["account_id"], namespace_id)
    return format_success(f"KV namespace {namespace_id} deleted")


async def handle_list_kv_keys(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    result = await kv_service.list_kv_keys(
        client,
        arguments["account_id"],
        arguments["namespace_id"],
        prefix=arguments.get("prefix"),
        cursor=arguments.get("cursor"),
        limit=arguments.get("limit") or DEFAULT_KEY_LIMIT,
    )
    return format_response(result, response_format(arguments), "kv_keys")


async def handle_get_kv_value(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    value = await kv_service.get_kv_value(
        client, arguments["account_id"], arguments["namespace_id"], arguments["key"]
    )
    return format_text(value)


async def handle_put_kv_value(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    key = arguments["key"]
    await kv_service.put_kv_value(
        client,
        arguments["account_id"],
        arguments["namespace_id"],
        key,
        arguments["value"],
        expiration=arguments.get("expiration"),
        expiration_ttl=arguments.get("expiration_ttl"),
    )
    return format_success(f'Key "{key}" set successfully')


async def handle_delete_kv_value(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    key = arguments["key"]
    await kv_service.delete_kv_value(client, arguments["account_id"], arguments["namespace_id"], key)
    return format_success(f'Key "{key}" deleted')


TOOL_HANDLERS: dict[str, ToolHandler] = {
    "cloudflare_list_kv_namespaces": handle_list_kv_namespaces,
    "cloudflare_get_kv_namespace": handle_get_kv_namespace,
    "cloudflare_create_kv_namespace": handle_create_kv_namespace,
    "cloudflare_rename_kv_namespace": handle_rename_kv_namespace,
    "cloudflare_delete_kv_namespace": handle_delete_kv_namespace,
    "cloudflare_list_kv_keys": handle_list_kv_keys,
    "cloudflare_get_kv_value": handle_get_kv_value,
    "cloudflare_put_kv_value": handle_put_kv_value,
    "cloudflare_delete_kv_value": handle_delete_kv_value,
}
