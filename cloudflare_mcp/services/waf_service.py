"""WAF packages and rules (legacy managed rules API)."""

from __future__ import annotations

from typing import Any

from cloudflare_mcp.client import CloudflareClient


def _packages_path(zone_id: str) -> str:
    return f"/zones/{zone_id}/firewall/waf/packages"


async def list_waf_packages(client: CloudflareClient, zone_id: str) -> list[dict[str, Any]]:
    envelope = await client.request(_packages_path(zone_id))
    return envelope.result or []


async def list_waf_rules(client: CloudflareClient, zone_id: str, package_id: str) -> list[dict[str, Any]]:
    envelope = await client.request(f"{_packages_path(zone_id)}/{package_id}/rules")
    return envelope.result or []


async def update_waf_rule(
    client: CloudflareClient, zone_id: str, package_id: str, rule_id: str, mode: str
) -> dict[str, Any]:
    envelope = await client.request(
        f"{_packages_path(zone_id)}/{package_id}/rules/{rule_id}",
        method="PATCH",
        json_body={"mode": mode},
    )
    return envelope.result
