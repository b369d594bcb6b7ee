"""DNS record tools, including BIND zone-file import and export."""

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
from cloudflare_mcp.schemas.cloudflare import (
    DNS_RECORD_TYPES,
    DnsRecordCreateInput,
    DnsRecordUpdateInput,
)
from cloudflare_mcp.services import dns_service
from cloudflare_mcp.utils.formatters import format_response, format_success, format_text

RECORD_TYPE_PROPERTY = {"type": "string", "enum": list(DNS_RECORD_TYPES), "description": "Record type"}

TOOL_DEFINITIONS: list[Tool] = [
    Tool(
        name="cloudflare_list_dns_records",
        description=(
            "List DNS records for a zone. Filter by record type, name or content. "
            "Returns id, type, name, content, ttl and proxied status."
        ),
        inputSchema=object_schema(
            {
                "zone_id": string_property("Zone ID"),
                "type": string_property("Filter by record type (A, AAAA, CNAME, TXT, MX, etc.)"),
                "name": string_property("Filter by record name"),
                "content": string_property("Filter by record content"),
                "page": PAGE_PROPERTY,
                "per_page": PER_PAGE_PROPERTY,
                "format": FORMAT_PROPERTY,
            },
            ["zone_id"],
        ),
    ),
    Tool(
        name="cloudflare_get_dns_record",
        description="Get details of a specific DNS record.",
        inputSchema=object_schema(
            {
                "zone_id": string_property("Zone ID"),
                "record_id": string_property("DNS record ID"),
                "format": FORMAT_PROPERTY,
            },
            ["zone_id", "record_id"],
        ),
    ),
    Tool(
        name="cloudflare_create_dns_record",
        description=(
            "Create a new DNS record. Examples: A record name='www' content='192.0.2.1'; "
            "CNAME name='blog' content='example.com'; MX name='@' content='mail.example.com' priority=10."
        ),
        inputSchema=object_schema(
            {
                "zone_id": string_property("Zone ID"),
                "type": RECORD_TYPE_PROPERTY,
                "name": string_property("Record name (@ for root, or subdomain)"),
                "content": string_property("Record content (IP, domain, text, etc.)"),
                "ttl": {
                    "type": "integer",
                    "minimum": 1,
                    "default": 1,
                    "description": "TTL in seconds (1 = automatic)",
                },
                "proxied": {"type": "boolean", "default": False, "description": "Proxy through Cloudflare"},
                "priority": {"type": "integer", "description": "Priority for MX/SRV records"},
                "comment": string_property("Optional comment"),
            },
            ["zone_id", "type", "name", "content"],
        ),
    ),
    Tool(
        name="cloudflare_update_dns_record",
        description="Update an existing DNS record. Only the fields provided are changed.",
        inputSchema=object_schema(
            {
                "zone_id": string_property("Zone ID"),
                "record_id": string_property("DNS record ID"),
                "type": RECORD_TYPE_PROPERTY,
                "name": string_property("Record name"),
                "content": string_property("Record content"),
                "ttl": {"type": "integer", "minimum": 1, "description": "TTL in seconds"},
                "proxied": {"type": "boolean", "description": "Proxy through Cloudflare"},
                "comment": string_property("Comment"),
            },
            ["zone_id", "record_id"],
        ),
    ),
    Tool(
        name="cloudflare_delete_dns_record",
        description="Delete a DNS record.",
        inputSchema=object_schema(
            {
                "zone_id": string_property("Zone ID"),
                "record_id": string_property("DNS record ID to delete"),
            },
            ["zone_id", "record_id"],
        ),
    ),
    Tool(
        name="cloudflare_export_dns_records",
        description="Export all DNS records of a zone in BIND zone-file format.",
        inputSchema=object_schema({"zone_id": string_property("Zone ID")}, ["zone_id"]),
    ),
    Tool(
        name="cloudflare_import_dns_records",
        description="Import DNS records from BIND zone-file content.",
        inputSchema=object_schema(
            {
                "zone_id": string_property("Zone ID"),
                "file_content": string_property("Zone file content in BIND format"),
            },
            ["zone_id", "file_content"],
        ),
    ),
]


async def handle_list_dns_records(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    result = await dns_service.list_dns_records(
        client,
        arguments["zone_id"],
        record_type=arguments.get("type"),
        name=arguments.get("name"),
        content=arguments.get("content"),
        page=arguments.get("page"),
        per_page=arguments.get("per_page"),
    )
    return format_response(result, response_format(arguments), "dns_records")


async def handle_get_dns_record(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    record = await dns_service.get_dns_record(client, arguments["zone_id"], arguments["record_id"])
    return format_response(record, response_format(arguments), "dns_record")


async def handle_create_dns_record(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    record = await dns_service.create_dns_record(
        client,
        arguments["zone_id"],
        DnsRecordCreateInput(
            type=arguments["type"],
            name=arguments["name"],
            content=arguments["content"],
            ttl=arguments.get("ttl") or 1,
            proxied=arguments.get("proxied", False),
            priority=arguments.get("priority"),
            comment=arguments.get("comment"),
        ),
    )
    return format_success(
        f"DNS record created: {record.get('type')} {record.get('name')}", dns_record=record
    )


async def handle_update_dns_record(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    changes = DnsRecordUpdateInput(
        **{
            field: arguments[field]
            for field in ("type", "name", "content", "ttl", "proxied", "comment")
            if arguments.get(field) is not None
        }
    )
    record = await dns_service.update_dns_record(
        client, arguments["zone_id"], arguments["record_id"], changes
    )
    return format_success(
        f"DNS record updated: {record.get('type')} {record.get('name')}", dns_record=record
    )


async def handle_delete_dns_record(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    result = await dns_service.delete_dns_record(client, arguments["zone_id"], arguments["record_id"])
    return format_success(f"DNS record {result.get('id', arguments['record_id'])} deleted successfully")


async def handle_export_dns_records(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    zone_file = await dns_service.export_dns_records(client, arguments["zone_id"])
    return format_text(zone_file)


async def handle_import_dns_records(client: CloudflareClient, arguments: dict[str, Any]) -> CallToolResult:
    result = await dns_service.import_dns_records(client, arguments["zone_id"], arguments["file_content"])
    extra = {key: value for key, value in result.items() if key not in ("success", "message")}
    return format_success(f"Imported {result.get('total_records_parsed', 0)} DNS records", **extra)


TOOL_HANDLERS: dict[str, ToolHandler] = {
    "cloudflare_list_dns_records": handle_list_dns_records,
    "cloudflare_get_dns_record": handle_get_dns_record,
    "cloudflare_create_dns_record": handle_create_dns_record,
    "cloudflare_update_dns_record": handle_update_dns_record,
    "cloudflare_delete_dns_record": handle_delete_dns_record,
    "cloudflare_export_dns_records": handle_export_dns_records,
    "cloudflare_import_dns_records": handle_import_dns_records,
}
