"""Zone (domain) operations."""

from __future__ import annotations

from typing import Any

from cloudflare_mcp.client import CloudflareClient
from cloudflare_mcp.schemas.cloudflare import ZoneCreateInput, ZoneUpdateInput, to_body
from cloudflare_mcp.schemas.common import PaginatedResult
from cloudflare_mcp.utils.pagination import build_pagination_query, create_paginated_response


async def list_zones(
    client: CloudflareClient,
    name: str | None = None,
    status: str | None = None,
    page: int | None = None,
    per_page: int | None = None,
) -> PaginatedResult:
    """List zones, optionally filtered by exact name or status."""
    params = build_pagination_query(page, per_page)
    if name:
        params["name"] = name
    if status:
        params["status"] = status
    envelope = await client.request("/zones", params=params)
    return create_paginated_response(envelope.result, envelope.result_info)


async def get_zone(client: CloudflareClient, zone_id: str) -> dict[str, Any]:
    envelope = await client.request(f"/zones/{zone_id}")
    return envelope.result


async def create_zone(client: CloudflareClient, zone: ZoneCreateInput) -> dict[str, Any]:
    envelope = await client.request("/zones", method="POST", json_body=to_body(zone))
    return envelope.result


async def update_zone(
    client: CloudflareClient, zone_id: str, changes: ZoneUpdateInput
) -> dict[str, Any]:
    envelope = await client.request(
        f"/zones/{zone_id}", method="PATCH", json_body=to_body(changes)
    )
    return envelope.result


async def delete_zone(client: CloudflareClient, zone_id: str) -> dict[str, Any]:
    """Returns ``{"id": ...}`` as confirmation."""
    envelope = await client.request(f"/zones/{zone_id}", method="DELETE")
    return envelope.result or {"id": zone_id}


async def get_zone_settings(client: CloudflareClient, zone_id: str) -> list[dict[str, Any]]:
    envelope = await client.request(f"/zones/{zone_id}/settings")
    return envelope.result or []


async def update_zone_setting(
    client: CloudflareClient, zone_id: str, setting_id: str, value: Any
) -> dict[str, Any]:
    envelope = await client.request(
        f"/zones/{zone_id}/settings/{setting_id}",
        method="PATCH",
        json_body={"value": value},
    )
    return envelope.result


async def activation_check(client: CloudflareClient, zone_id: str) -> dict[str, Any]:
    """Ask Cloudflare to re-check nameservers of a pending zone."""
    envelope = await client.request(f"/zones/{zone_id}/activation_check", method="PUT")
    return envelope.result or {"id": zone_id}
