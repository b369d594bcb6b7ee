"""DNS record operations, including BIND import/export."""

from __future__ import annotations

from typing import Any

from cloudflare_mcp.client import TEXT_CONTENT_TYPE, CloudflareClient
from cloudflare_mcp.schemas.cloudflare import DnsRecordCreateInput, DnsRecordUpdateInput, to_body
from cloudflare_mcp.schemas.common import PaginatedResult
from cloudflare_mcp.utils.pagination import build_pagination_query, create_paginated_response


async def list_dns_records(
    client: CloudflareClient,
    zone_id: str,
    record_type: str | None = None,
    name: str | None = None,
    content: str | None = None,
    page: int | None = None,
    per_page: int | None = None,
) -> PaginatedResult:
    params = build_pagination_query(page, per_page)
    if record_type:
        params["type"] = record_type
    if name:
        params["name"] = name
    if content:
        params["content"] = content
    envelope = await client.request(f"/zones/{zone_id}/dns_records", params=params)
    return create_paginated_response(envelope.result, envelope.result_info)


async def get_dns_record(client: CloudflareClient, zone_id: str, record_id: str) -> dict[str, Any]:
    envelope = await client.request(f"/zones/{zone_id}/dns_records/{record_id}")
    return envelope.result


async def create_dns_record(
    client: CloudflareClient, zone_id: str, record: DnsRecordCreateInput
) -> dict[str, Any]:
    envelope = await client.request(
        f"/zones/{zone_id}/dns_records", method="POST", json_body=to_body(record)
    )
    return envelope.result


async def update_dns_record(
    client: CloudflareClient, zone_id: str, record_id: str, changes: DnsRecordUpdateInput
) -> dict[str, Any]:
    envelope = await client.request(
        f"/zones/{zone_id}/dns_records/{record_id}",
        method="PATCH",
        json_body=to_body(changes),
    )
    return envelope.result


async def delete_dns_record(client: CloudflareClient, zone_id: str, record_id: str) -> dict[str, Any]:
    envelope = await client.request(f"/zones/{zone_id}/dns_records/{record_id}", method="DELETE")
    return envelope.result or {"id": record_id}


async def export_dns_records(client: CloudflareClient, zone_id: str) -> str:
    """Return the zone as BIND zone-file text."""
    return await client.request_raw(f"/zones/{zone_id}/dns_records/export")


async def import_dns_records(client: CloudflareClient, zone_id: str, zone_file: str) -> dict[str, Any]:
    """Upload BIND zone-file text.  The body is sent as-is, not JSON-encoded."""
    envelope = await client.request(
        f"/zones/{zone_id}/dns_records/import",
        method="POST",
        content=zone_file,
        headers={"Content-Type": TEXT_CONTENT_TYPE},
    )
    return envelope.result or {}
