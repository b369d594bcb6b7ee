"""Pages projects and deployments."""

from __future__ import annotations

from typing import Any

from cloudflare_mcp.client import CloudflareClient

DEFAULT_PRODUCTION_BRANCH = "main"


def _project_path(account_id: str, project_name: str | None = None) -> str:
    path = f"/accounts/{account_id}/pages/projects"
    return f"{path}/{project_name}" if project_name else path


def _deployment_path(account_id: str, project_name: str, deployment_id: str) -> str:
    return f"{_project_path(account_id, project_name)}/deployments/{deployment_id}"


async def list_pages_projects(client: CloudflareClient, account_id: str) -> list[dict[str, Any]]:
    envelope = await client.request(_project_path(account_id))
    return envelope.result or []


async def get_pages_project(client: CloudflareClient, account_id: str, project_name: str) -> dict[str, Any]:
    envelope = await client.request(_project_path(account_id, project_name))
    return envelope.result


async def create_pages_project(
    client: CloudflareClient,
    account_id: str,
    name: str,
    production_branch: str | None = None,
) -> dict[str, Any]:
    envelope = await client.request(
        _project_path(account_id),
        method="POST",
        json_body={"name": name, "production_branch": production_branch or DEFAULT_PRODUCTION_BRANCH},
    )
    return envelope.result


async def delete_pages_project(client: CloudflareClient, account_id: str, project_name: str) -> None:
    await client.request(_project_path(account_id, project_name), method="DELETE")


async def list_pages_deployments(
    client: CloudflareClient, account_id: str, project_name: str
) -> list[dict[str, Any]]:
    envelope = await client.request(f"{_project_path(account_id, project_name)}/deployments")
    return envelope.result or []


async def get_pages_deployment(
    client: CloudflareClient, account_id: str, project_name: str, deployment_id: str
) -> dict[str, Any]:
    envelope = await client.request(_deployment_path(account_id, project_name, deployment_id))
    return envelope.result


async def delete_pages_deployment(
    client: CloudflareClient, account_id: str, project_name: str, deployment_id: str
) -> None:
    await client.request(_deployment_path(account_id, project_name, deployment_id), method="DELETE")


async def rollback_pages_deployment(
    client: CloudflareClient, account_id: str, project_name: str, deployment_id: str
) -> dict[str, Any]:
    """Promote an earlier deployment back to production."""
    envelope = await client.request(
        f"{_deployment_path(account_id, project_name, deployment_id)}/rollback", method="POST"
    )
    return envelope.result
