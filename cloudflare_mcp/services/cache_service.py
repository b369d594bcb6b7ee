"""Cache purge."""

from __future__ import annotations

from typing import Any

from cloudflare_mcp.client import CloudflareClient
from cloudflare_mcp.schemas.cloudflare import CachePurgeRequest, to_body


async def purge_cache(
    client: CloudflareClient, zone_id: str, purge: CachePurgeRequest
) -> dict[str, Any]:
    """Purge everything, or by files / tags / hosts, depending on which field is set."""
    envelope = await client.request(
        f"/zones/{zone_id}/purge_cache", method="POST", json_body=to_body(purge)
    )
    return envelope.result or {}
