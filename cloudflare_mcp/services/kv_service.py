"""Workers KV namespaces, keys and values.

Key listings use cursor pagination: the continuation token arrives in
``result_info.cursor`` and there is no total count, so completeness is
"no cursor returned".  Keys are percent-encoded into the path and values
travel as raw text.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from cloudflare_mcp.client import TEXT_CONTENT_TYPE, CloudflareClient
from cloudflare_mcp.schemas.common import PaginatedResult
from cloudflare_mcp.utils.pagination import build_pagination_query, create_paginated_response


def _namespace_path(account_id: str, namespace_id: str | None = None) -> str:
    path = f"/accounts/{account_id}/storage/kv/namespaces"
    return f"{path}/{namespace_id}" if namespace_id else path


def _value_path(account_id: str, namespace_id: str, key: str) -> str:
    return f"{_namespace_path(account_id, namespace_id)}/values/{quote(key, safe='')}"


async def list_kv_namespaces(
    client: CloudflareClient,
    account_id: str,
    page: int | None = None,
    per_page: int | None = None,
) -> PaginatedResult:
    envelope = await client.request(
        _namespace_path(account_id), params=build_pagination_query(page, per_page)
    )
    return create_paginated_response(envelope.result, envelope.result_info)


async def get_kv_namespace(client: CloudflareClient, account_id: str, namespace_id: str) -> dict[str, Any]:
    envelope = await client.request(_namespace_path(account_id, namespace_id))
    return envelope.result


async def create_kv_namespace(client: CloudflareClient, account_id: str, title: str) -> dict[str, Any]:
    envelope = await client.request(
        _namespace_path(account_id), method="POST", json_body={"title": title}
    )
    return envelope.result


async def rename_kv_namespace(
    client: CloudflareClient, account_id: str, namespace_id: str, title: str
) -> None:
    await client.request(
        _namespace_path(account_id, namespace_id), method="PUT", json_body={"title": title}
    )


async def delete_kv_namespace(client: CloudflareClient, account_id: str, namespace_id: str) -> None:
    await client.request(_namespace_path(account_id, namespace_id), method="DELETE")


async def list_kv_keys(
    client: CloudflareClient,
    account_id: str,
    namespace_id: str,
    prefix: str | None = None,
    cursor: str | None = None,
    limit: int | None = None,
) -> PaginatedResult:
    """One page of keys.  ``cursor`` on the result feeds the next call."""
    params = {"prefix": prefix or None, "cursor": cursor or None, "limit": limit or None}
    envelope = await client.request(
        f"{_namespace_path(account_id, namespace_id)}/keys", params=params
    )
    keys = list(envelope.result or [])
    next_cursor = envelope.result_info.cursor if envelope.result_info else None
    return PaginatedResult(
        items=keys,
        count=len(keys),
        has_more=bool(next_cursor),
        cursor=next_cursor or None,
    )


async def get_kv_value(client: CloudflareClient, account_id: str, namespace_id: str, key: str) -> str:
    return await client.request_raw(_value_path(account_id, namespace_id, key))


async def put_kv_value(
    client: CloudflareClient,
    account_id: str,
    namespace_id: str,
    key: str,
    value: str,
    expiration: int | None = None,
    expiration_ttl: int | None = None,
) -> None:
    """Write *value* verbatim.  ``expiration`` is a Unix time, ``expiration_ttl`` seconds."""
    await client.request(
        _value_path(account_id, namespace_id, key),
        method="PUT",
        params={"expiration": expiration or None, "expiration_ttl": expiration_ttl or None},
        content=value,
        headers={"Content-Type": TEXT_CONTENT_TYPE},
    )


async def delete_kv_value(client: CloudflareClient, account_id: str, namespace_id: str, key: str) -> None:
    await client.request(_value_path(account_id, namespace_id, key), method="DELETE")
