"""SSL/TLS certificate packs."""

from __future__ import annotations

from typing import Any

from cloudflare_mcp.client import CloudflareClient


async def list_ssl_certificates(client: CloudflareClient, zone_id: str) -> list[dict[str, Any]]:
    envelope = await client.request(f"/zones/{zone_id}/ssl/certificate_packs")
    return envelope.result or []
