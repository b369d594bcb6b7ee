"""User, account and membership operations."""

from __future__ import annotations

from typing import Any

from cloudflare_mcp.client import CloudflareClient
from cloudflare_mcp.errors import ToolError
from cloudflare_mcp.schemas.common import PaginatedResult
from cloudflare_mcp.utils.pagination import build_pagination_query, create_paginated_response


async def get_user(client: CloudflareClient) -> dict[str, Any]:
    envelope = await client.request("/user")
    return envelope.result


async def test_connection(client: CloudflareClient) -> dict[str, Any]:
    """Check the credentials with ``GET /user``.

    Unlike every other operation this one reports a classified failure as
    data instead of raising it.
    """
    try:
        user = await get_user(client)
    except ToolError as exc:
        return {"connected": False, "message": exc.message}
    return {"connected": True, "message": f"Connected as {(user or {}).get('email')}"}


async def list_accounts(
    client: CloudflareClient,
    page: int | None = None,
    per_page: int | None = None,
) -> PaginatedResult:
    envelope = await client.request("/accounts", params=build_pagination_query(page, per_page))
    return create_paginated_response(envelope.result, envelope.result_info)


async def get_account(client: CloudflareClient, account_id: str) -> dict[str, Any]:
    envelope = await client.request(f"/accounts/{account_id}")
    return envelope.result


async def list_account_members(
    client: CloudflareClient,
    account_id: str,
    page: int | None = None,
    per_page: int | None = None,
) -> PaginatedResult:
    envelope = await client.request(
        f"/accounts/{account_id}/members",
        params=build_pagination_query(page, per_page),
    )
    return create_paginated_response(envelope.result, envelope.result_info)
