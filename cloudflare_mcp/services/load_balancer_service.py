"""Load balancers (zone scoped), pools and monitors (account scoped)."""

from __future__ import annotations

from typing import Any

from cloudflare_mcp.client import CloudflareClient


async def list_load_balancers(client: CloudflareClient, zone_id: str) -> list[dict[str, Any]]:
    envelope = await client.request(f"/zones/{zone_id}/load_balancers")
    return envelope.result or []


async def get_load_balancer(client: CloudflareClient, zone_id: str, lb_id: str) -> dict[str, Any]:
    envelope = await client.request(f"/zones/{zone_id}/load_balancers/{lb_id}")
    return envelope.result


async def list_load_balancer_pools(client: CloudflareClient, account_id: str) -> list[dict[str, Any]]:
    envelope = await client.request(f"/accounts/{account_id}/load_balancers/pools")
    return envelope.result or []


async def get_load_balancer_pool(
    client: CloudflareClient, account_id: str, pool_id: str
) -> dict[str, Any]:
    envelope = await client.request(f"/accounts/{account_id}/load_balancers/pools/{pool_id}")
    return envelope.result


async def list_load_balancer_monitors(client: CloudflareClient, account_id: str) -> list[dict[str, Any]]:
    envelope = await client.request(f"/accounts/{account_id}/load_balancers/monitors")
    return envelope.result or []
