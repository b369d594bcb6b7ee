"""D1 (serverless SQLite) databases."""

from __future__ import annotations

from typing import Any

from cloudflare_mcp.client import CloudflareClient
from cloudflare_mcp.schemas.cloudflare import D1QueryRequest, to_body
from cloudflare_mcp.schemas.common import PaginatedResult
from cloudflare_mcp.utils.pagination import build_pagination_query, create_paginated_response


def _database_path(account_id: str, database_id: str | None = None) -> str:
    path = f"/accounts/{account_id}/d1/database"
    return f"{path}/{database_id}" if database_id else path


async def list_d1_databases(
    client: CloudflareClient,
    account_id: str,
    page: int | None = None,
    per_page: int | None = None,
) -> PaginatedResult:
    envelope = await client.request(
        _database_path(account_id), params=build_pagination_query(page, per_page)
    )
    return create_paginated_response(envelope.result, envelope.result_info)


async def get_d1_database(client: CloudflareClient, account_id: str, database_id: str) -> dict[str, Any]:
    envelope = await client.request(_database_path(account_id, database_id))
    return envelope.result


async def create_d1_database(client: CloudflareClient, account_id: str, name: str) -> dict[str, Any]:
    envelope = await client.request(_database_path(account_id), method="POST", json_body={"name": name})
    return envelope.result


async def delete_d1_database(client: CloudflareClient, account_id: str, database_id: str) -> None:
    await client.request(_database_path(account_id, database_id), method="DELETE")


async def query_d1_database(
    client: CloudflareClient,
    account_id: str,
    database_id: str,
    sql: str,
    params: list[Any] | None = None,
) -> list[dict[str, Any]]:
    """Run SQL.  Cloudflare returns one result set per statement."""
    envelope = await client.request(
        f"{_database_path(account_id, database_id)}/query",
        method="POST",
        json_body=to_body(D1QueryRequest(sql=sql, params=params)),
    )
    return envelope.result or []


def summarize_query_results(results: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Trim per-statement metadata down to what callers usually need."""
    summary = []
    for index, result in enumerate(results, start=1):
        meta = result.get("meta") or {}
        summary.append(
            {
                "statement": index,
                "success": result.get("success"),
                "results": result.get("results", []),
                "meta": {
                    "duration_ms": meta.get("duration"),
                    "changes": meta.get("changes"),
                    "rows_read": meta.get("rows_read"),
                    "rows_written": meta.get("rows_written"),
                },
            }
        )
    return summary
