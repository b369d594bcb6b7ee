"""Firewall rules and filters."""

from __future__ import annotations

from typing import Any

from cloudflare_mcp.client import CloudflareClient
from cloudflare_mcp.schemas.cloudflare import (
    FirewallRuleCreateInput,
    FirewallRuleUpdateInput,
    to_body,
)


def _rules_path(zone_id: str, rule_id: str | None = None) -> str:
    path = f"/zones/{zone_id}/firewall/rules"
    return f"{path}/{rule_id}" if rule_id else path


async def list_firewall_rules(client: CloudflareClient, zone_id: str) -> list[dict[str, Any]]:
    envelope = await client.request(_rules_path(zone_id))
    return envelope.result or []


async def get_firewall_rule(client: CloudflareClient, zone_id: str, rule_id: str) -> dict[str, Any]:
    envelope = await client.request(_rules_path(zone_id, rule_id))
    return envelope.result


async def create_firewall_rule(
    client: CloudflareClient, zone_id: str, rule: FirewallRuleCreateInput
) -> dict[str, Any] | None:
    """The endpoint takes and returns a list; we send one rule and hand back the first."""
    envelope = await client.request(
        _rules_path(zone_id), method="POST", json_body=[to_body(rule)]
    )
    created = envelope.result or []
    return created[0] if created else None


async def update_firewall_rule(
    client: CloudflareClient, zone_id: str, rule_id: str, changes: FirewallRuleUpdateInput
) -> dict[str, Any]:
    envelope = await client.request(
        _rules_path(zone_id, rule_id), method="PATCH", json_body=to_body(changes)
    )
    return envelope.result


async def delete_firewall_rule(client: CloudflareClient, zone_id: str, rule_id: str) -> None:
    await client.request(_rules_path(zone_id, rule_id), method="DELETE")


async def list_filters(client: CloudflareClient, zone_id: str) -> list[dict[str, Any]]:
    envelope = await client.request(f"/zones/{zone_id}/filters")
    return envelope.result or []
