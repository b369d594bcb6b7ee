"""R2 object-storage buckets."""

from __future__ import annotations

from typing import Any

from cloudflare_mcp.client import CloudflareClient


async def list_r2_buckets(client: CloudflareClient, account_id: str) -> list[dict[str, Any]]:
    """Cloudflare nests the bucket array under ``result.buckets``."""
    envelope = await client.request(f"/accounts/{account_id}/r2/buckets")
    return (envelope.result or {}).get("buckets", [])


async def get_r2_bucket(client: CloudflareClient, account_id: str, bucket_name: str) -> dict[str, Any]:
    envelope = await client.request(f"/accounts/{account_id}/r2/buckets/{bucket_name}")
    return envelope.result


async def create_r2_bucket(
    client: CloudflareClient,
    account_id: str,
    name: str,
    location_hint: str | None = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {"name": name}
    if location_hint:
        body["locationHint"] = location_hint
    envelope = await client.request(f"/accounts/{account_id}/r2/buckets", method="POST", json_body=body)
    return envelope.result


async def delete_r2_bucket(client: CloudflareClient, account_id: str, bucket_name: str) -> None:
    await client.request(f"/accounts/{account_id}/r2/buckets/{bucket_name}", method="DELETE")
