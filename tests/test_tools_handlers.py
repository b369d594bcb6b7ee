"""Tests for tool dispatch: argument parsing, formatting and error blocks.

Every call goes through ``call_tool`` with a client factory that points the
freshly built ``CloudflareClient`` at the scripted stub API.
"""

from __future__ import annotations

import httpx
import pytest

from conftest import TOKEN_CREDENTIALS, envelope, result_json

from cloudflare_mcp.auth.credentials import TenantCredentials
from cloudflare_mcp.client import CloudflareClient
from cloudflare_mcp.mcp.server import call_tool


async def _call(stub, name, arguments=None, credentials=TOKEN_CREDENTIALS):
    return await call_tool(name, arguments, credentials, client_factory=stub.client)


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_unknown_tool(stub):
    result = await _call(stub, "cloudflare_does_not_exist")
    assert result.isError is True
    assert "Unknown tool 'cloudflare_does_not_exist'" in result_json(result)["error"]
    assert stub.requests == []


@pytest.mark.asyncio
async def test_missing_credentials_fail_without_network(stub):
    def factory(credentials):
        return CloudflareClient(credentials, transport=httpx.MockTransport(stub.handle))

    result = await call_tool(
        "cloudflare_list_zones", {}, TenantCredentials(), client_factory=factory
    )

    assert result.isError is True
    payload = result_json(result)
    assert payload["details"]["name"] == "AuthenticationError"
    assert "No credentials provided" in payload["error"]
    assert stub.requests == []


@pytest.mark.asyncio
async def test_unexpected_exception_becomes_error_block(stub):
    def factory(credentials):
        raise RuntimeError("factory exploded")

    result = await call_tool("cloudflare_list_zones", {}, TOKEN_CREDENTIALS, client_factory=factory)

    assert result.isError is True
    assert result_json(result)["error"] == "Error: factory exploded"


@pytest.mark.asyncio
async def test_none_arguments_are_treated_as_empty(stub):
    stub.add("GET", "/zones", envelope([]))
    result = await _call(stub, "cloudflare_list_zones", None)
    assert result.isError is False


# ---------------------------------------------------------------------------
# Schema validation
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_missing_required_argument_is_rejected(stub):
    result = await _call(stub, "cloudflare_get_zone", {})

    assert result.isError is True
    assert result_json(result) == {
        "error": "Invalid arguments for cloudflare_get_zone",
        "message": "'zone_id' is a required property",
    }
    assert stub.requests == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "arguments, message",
    [
        ({"per_page": "50"}, "per_page: '50' is not of type 'integer'"),
        ({"per_page": 500}, "per_page: 500 is greater than the maximum of 100"),
        ({"page": 0}, "page: 0 is less than the minimum of 1"),
        ({"format": "xml"}, "format: 'xml' is not one of ['json', 'markdown']"),
    ],
)
async def test_wrongly_typed_arguments_are_rejected(stub, arguments, message):
    result = await _call(stub, "cloudflare_list_zones", arguments)

    assert result.isError is True
    payload = result_json(result)
    assert payload["error"] == "Invalid arguments for cloudflare_list_zones"
    assert payload["message"] == message
    assert stub.requests == []


@pytest.mark.asyncio
async def test_non_object_arguments_are_rejected(stub):
    result = await _call(stub, "cloudflare_list_zones", ["zone-1"])

    assert result.isError is True
    assert "is not of type 'object'" in result_json(result)["message"]
    assert stub.requests == []


# ---------------------------------------------------------------------------
# Output formats
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_list_zones_json_payload(stub):
    stub.add(
        "GET",
        "/zones",
        envelope(
            [{"id": "z1", "name": "example.com"}],
            result_info={"page": 1, "per_page": 20, "count": 1, "total_count": 2, "total_pages": 2},
        ),
    )

    result = await _call(stub, "cloudflare_list_zones", {"per_page": 20})

    assert result.isError is False
    assert result_json(result) == {
        "items": [{"id": "z1", "name": "example.com"}],
        "count": 1,
        "total": 2,
        "hasMore": True,
        "page": 1,
        "totalPages": 2,
    }


@pytest.mark.asyncio
async def test_list_workers_markdown_table(stub):
    stub.add(
        "GET",
        "/accounts/acc-1/workers/scripts",
        envelope([{"id": "hello", "handlers": ["fetch"], "modified_on": "2024-05-01T00:00:00Z"}]),
    )

    result = await _call(stub, "cloudflare_list_workers", {"account_id": "acc-1", "format": "markdown"})

    text = result.content[0].text
    assert text.startswith("## Workers")
    assert "| ID | Handlers | Modified |" in text
    assert "| hello | fetch | 2024-05-01T00:00:00Z |" in text


@pytest.mark.asyncio
async def test_get_worker_returns_script_text(stub):
    stub.add("GET", "/accounts/acc-1/workers/scripts/hello", text="addEventListener('fetch', () => {})")
    result = await _call(stub, "cloudflare_get_worker", {"account_id": "acc-1", "script_name": "hello"})
    assert result.content[0].text == "addEventListener('fetch', () => {})"


@pytest.mark.asyncio
async def test_create_zone_success_block(stub):
    stub.add("POST", "/zones", envelope({"id": "z1", "name": "example.com", "status": "pending"}))

    result = await _call(stub, "cloudflare_create_zone", {"name": "example.com", "account_id": "acc-1"})

    payload = result_json(result)
    assert payload["success"] is True
    assert payload["message"] == "Zone example.com created successfully"
    assert payload["zone"]["id"] == "z1"
    assert stub.last_json() == {
        "name": "example.com",
        "account": {"id": "acc-1"},
        "type": "full",
        "jump_start": True,
    }


@pytest.mark.asyncio
async def test_import_dns_records_reports_counts(stub):
    stub.add(
        "POST",
        "/zones/zone-1/dns_records/import",
        envelope({"recs_added": 2, "total_records_parsed": 2}),
    )

    result = await _call(
        stub,
        "cloudflare_import_dns_records",
        {"zone_id": "zone-1", "file_content": "a.example.com. 300 IN A 192.0.2.1"},
    )

    assert result_json(result) == {
        "success": True,
        "message": "Imported 2 DNS records",
        "recs_added": 2,
        "total_records_parsed": 2,
    }


# ---------------------------------------------------------------------------
# String-encoded JSON arguments
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_purge_by_url_success(stub):
    stub.add("POST", "/zones/zone-1/purge_cache", envelope({"id": "purge-1"}))
    urls = ["https://example.com/app.js", "https://example.com/app.css"]

    result = await _call(
        stub,
        "cloudflare_purge_cache_by_url",
        {"zone_id": "zone-1", "urls": '["https://example.com/app.js", "https://example.com/app.css"]'},
    )

    assert result.isError is False
    assert result_json(result) == {
        "success": True,
        "message": "Purged 2 URL(s) from cache",
        "urls": urls,
        "id": "purge-1",
    }
    assert stub.last_json() == {"files": urls}


@pytest.mark.asyncio
@pytest.mark.parametrize("raw", ["not json", '{"url": "x"}', "[1, 2]"])
async def test_purge_by_url_rejects_bad_input_before_any_request(stub, raw):
    result = await _call(stub, "cloudflare_purge_cache_by_url", {"zone_id": "zone-1", "urls": raw})

    assert result.isError is True
    assert result_json(result) == {
        "error": "Invalid URLs format",
        "message": "urls must be a valid JSON array of strings",
    }
    assert stub.requests == []


@pytest.mark.asyncio
async def test_purge_by_tag_rejects_bad_input(stub):
    result = await _call(stub, "cloudflare_purge_cache_by_tag", {"zone_id": "zone-1", "tags": "blog"})
    assert result_json(result)["error"] == "Invalid tags format"
    assert stub.requests == []


@pytest.mark.asyncio
async def test_d1_query_rejects_bad_params(stub):
    result = await _call(
        stub,
        "cloudflare_query_d1_database",
        {"account_id": "acc-1", "database_id": "db-1", "sql": "SELECT ?", "params": "[1,"},
    )

    assert result.isError is True
    assert result_json(result)["error"] == "Invalid params format"
    assert stub.requests == []


@pytest.mark.asyncio
async def test_d1_query_summarises_results(stub):
    stub.add(
        "POST",
        "/accounts/acc-1/d1/database/db-1/query",
        envelope([{"success": True, "results": [{"n": 1}], "meta": {"duration": 0.3, "rows_read": 1}}]),
    )

    result = await _call(
        stub,
        "cloudflare_query_d1_database",
        {"account_id": "acc-1", "database_id": "db-1", "sql": "SELECT ? AS n", "params": "[1]"},
    )

    assert stub.last_json() == {"sql": "SELECT ? AS n", "params": [1]}
    summary = result_json(result)
    assert summary[0]["statement"] == 1
    assert summary[0]["results"] == [{"n": 1}]
    assert summary[0]["meta"]["duration_ms"] == 0.3


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "dimensions, expected",
    [
        ('["queryName", "queryType"]', "queryName,queryType"),
        ("queryName", "queryName"),
    ],
)
async def test_dns_analytics_accepts_lenient_lists(stub, dimensions, expected):
    stub.add("GET", "/zones/zone-1/dns_analytics/report", envelope({"rows": 0}))

    result = await _call(stub, "cloudflare_get_dns_analytics", {"zone_id": "zone-1", "dimensions": dimensions})

    assert result.isError is False
    assert stub.last.url.params["dimensions"] == expected


# ---------------------------------------------------------------------------
# Provider failures
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_rate_limit_error_block(stub):
    stub.add("GET", "/zones", envelope(success=False), status=429, headers={"Retry-After": "30"})

    result = await _call(stub, "cloudflare_list_zones", {})

    assert result.isError is True
    payload = result_json(result)
    assert payload["error"] == "Error: Rate limit exceeded (retryable)"
    assert payload["details"]["retry_after"] == 30


@pytest.mark.asyncio
async def test_api_error_block(stub):
    stub.add(
        "GET",
        "/zones/missing",
        envelope(success=False, errors=[{"code": 1001, "message": "Invalid zone identifier"}]),
        status=404,
    )

    result = await _call(stub, "cloudflare_get_zone", {"zone_id": "missing"})

    payload = result_json(result)
    assert payload["error"] == "Error: Invalid zone identifier"
    assert payload["details"]["status_code"] == 404


@pytest.mark.asyncio
async def test_test_connection_reports_failure_as_data(stub):
    stub.add("GET", "/user", envelope(success=False), status=403)

    result = await _call(stub, "cloudflare_test_connection", {})

    assert result.isError is False
    assert result_json(result) == {
        "connected": False,
        "message": "Authentication failed. Check your API credentials.",
    }


@pytest.mark.asyncio
async def test_test_connection_success(stub):
    stub.add("GET", "/user", envelope({"email": "ops@example.com"}))
    result = await _call(stub, "cloudflare_test_connection", {})
    assert result_json(result) == {"connected": True, "message": "Connected as ops@example.com"}
