"""Workers scripts, routes, cron triggers and secrets."""

from __future__ import annotations

from typing import Any

from cloudflare_mcp.client import CloudflareClient


def _script_path(account_id: str, script_name: str) -> str:
    return f"/accounts/{account_id}/workers/scripts/{script_name}"


async def list_workers(client: CloudflareClient, account_id: str) -> list[dict[str, Any]]:
    envelope = await client.request(f"/accounts/{account_id}/workers/scripts")
    return envelope.result or []


async def get_worker(client: CloudflareClient, account_id: str, script_name: str) -> str:
    """Return the script source.  The endpoint answers with raw text, not an envelope."""
    return await client.request_raw(_script_path(account_id, script_name))


async def delete_worker(client: CloudflareClient, account_id: str, script_name: str) -> None:
    await client.request(_script_path(account_id, script_name), method="DELETE")


async def list_worker_routes(client: CloudflareClient, zone_id: str) -> list[dict[str, Any]]:
    envelope = await client.request(f"/zones/{zone_id}/workers/routes")
    return envelope.result or []


async def create_worker_route(
    client: CloudflareClient,
    zone_id: str,
    pattern: str,
    script: str | None = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {"pattern": pattern}
    if script:
        body["script"] = script
    envelope = await client.request(f"/zones/{zone_id}/workers/routes", method="POST", json_body=body)
    return envelope.result


async def delete_worker_route(client: CloudflareClient, zone_id: str, route_id: str) -> None:
    await client.request(f"/zones/{zone_id}/workers/routes/{route_id}", method="DELETE")


async def get_worker_cron_triggers(
    client: CloudflareClient, account_id: str, script_name: str
) -> list[dict[str, Any]]:
    """Cron schedules for a script.  Cloudflare nests them under ``result.schedules``."""
    envelope = await client.request(f"{_script_path(account_id, script_name)}/schedules")
    return (envelope.result or {}).get("schedules", [])


async def list_worker_secrets(
    client: CloudflareClient, account_id: str, script_name: str
) -> list[dict[str, Any]]:
    """Secret names and types only; values are never returned by the API."""
    envelope = await client.request(f"{_script_path(account_id, script_name)}/secrets")
    return envelope.result or []
