"""Zone traffic and DNS analytics."""

from __future__ import annotations

from typing import Any, Sequence

from cloudflare_mcp.client import CloudflareClient


async def get_zone_analytics(
    client: CloudflareClient,
    zone_id: str,
    since: str | None = None,
    until: str | None = None,
) -> dict[str, Any]:
    """Dashboard totals and timeseries.  ``since`` may be relative, e.g. ``-1440`` minutes."""
    envelope = await client.request(
        f"/zones/{zone_id}/analytics/dashboard",
        params={"since": since or None, "until": until or None},
    )
    return envelope.result


async def get_dns_analytics(
    client: CloudflareClient,
    zone_id: str,
    dimensions: Sequence[str] | None = None,
    metrics: Sequence[str] | None = None,
    since: str | None = None,
    until: str | None = None,
) -> dict[str, Any]:
    params = {
        "dimensions": ",".join(dimensions) if dimensions else None,
        "metrics": ",".join(metrics) if metrics else None,
        "since": since or None,
        "until": until or None,
    }
    envelope = await client.request(f"/zones/{zone_id}/dns_analytics/report", params=params)
    return envelope.result
