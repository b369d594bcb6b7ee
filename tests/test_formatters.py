"""Tests for JSON / markdown projection and error blocks."""

from __future__ import annotations

import json

import pytest

from conftest import result_json

from cloudflare_mcp.errors import (
    AuthenticationError,
    CloudflareApiError,
    InvalidArgumentError,
    RateLimitError,
)
from cloudflare_mcp.schemas.common import PaginatedResult, ResponseFormat
from cloudflare_mcp.utils.formatters import (
    NO_ITEMS,
    TABLE_RENDERERS,
    ResultShape,
    format_error_response,
    format_response,
    format_success,
    format_text,
    render_generic_table,
    result_shape,
    to_markdown,
    truncate_text,
)


def _markdown(data, entity_type):
    return format_response(data, ResponseFormat.MARKDOWN, entity_type).content[0].text


def _table_rows(text: str) -> list[str]:
    return [line for line in text.splitlines() if line.startswith("|")]


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "data",
    [
        {"id": "z1", "plan": {"name": "Free"}, "name_servers": ["a.ns", "b.ns"], "paused": False},
        [1, "two", None, {"three": 3.5}],
        "plain text",
        42,
        None,
    ],
)
def test_json_round_trips(data):
    result = format_response(data, "json", "zone")
    assert result.isError is False
    assert json.loads(result.content[0].text) == data


def test_json_is_indented():
    text = format_response({"a": 1}, "json", "x").content[0].text
    assert text == '{\n  "a": 1\n}'


def test_json_paginated_uses_wire_keys():
    data = PaginatedResult(items=[{"id": "z1"}], count=1, total=3, has_more=True, page=1, total_pages=3)
    assert result_json(format_response(data)) == {
        "items": [{"id": "z1"}],
        "count": 1,
        "total": 3,
        "hasMore": True,
        "page": 1,
        "totalPages": 3,
    }


def test_json_is_never_truncated():
    data = {"blob": "x" * 80_000}
    assert result_json(format_response(data, "json", "blob")) == data


# ---------------------------------------------------------------------------
# Markdown: paginated
# ---------------------------------------------------------------------------


def test_empty_paginated_renders_no_items_marker():
    text = _markdown(PaginatedResult(items=[], count=0), "zones")
    assert NO_ITEMS in text
    assert "|" not in text


def test_paginated_header_and_summary():
    data = PaginatedResult(
        items=[{"id": "z1", "name": "example.com", "status": "active", "plan": {"name": "Free"}, "type": "full"}],
        count=1,
        total=7,
        has_more=True,
        page=1,
        total_pages=7,
    )
    text = _markdown(data, "zones")
    assert text.startswith("## Zones")
    assert "**Total:** 7 | **Showing:** 1" in text
    assert "**More available:** Yes (page 1)" in text
    assert "| z1 | example.com | active | Free | full |" in text


def test_paginated_without_total_shows_count_only():
    text = _markdown(PaginatedResult(items=[{"name": "k"}], count=1), "kv_keys")
    assert "**Showing:** 1" in text
    assert "**Total:**" not in text
    assert "More available" not in text


def test_cursor_pagination_shows_cursor():
    text = _markdown(PaginatedResult(items=[{"name": "k"}], count=1, has_more=True, cursor="abc"), "kv_keys")
    assert "**More available:** Yes (cursor `abc`)" in text


# ---------------------------------------------------------------------------
# Markdown: entity tables
# ---------------------------------------------------------------------------


def test_known_entity_tables_are_registered():
    assert set(TABLE_RENDERERS) == {
        "zones",
        "dns_records",
        "workers",
        "kv_namespaces",
        "d1_databases",
        "r2_buckets",
        "pages_projects",
        "deployments",
        "load_balancers",
    }


def test_dns_content_is_truncated_and_table_keeps_six_columns():
    content = "v=spf1 include:_spf.example.com include:mail.example.net ~all"
    record = {"id": "r1", "type": "TXT", "name": "example.com", "content": content, "ttl": 1, "proxied": False}

    rows = _table_rows(_markdown([record], "dns_records"))

    assert rows[0] == "| ID | Type | Name | Content | TTL | Proxied |"
    assert f"{content[:40]}..." in rows[2]
    assert content not in rows[2]
    assert rows[2].count("|") == 7
    assert rows[2].endswith("| 1 | No |")


def test_d1_table_sizes_in_kilobytes():
    rows = _table_rows(
        to_markdown(
            [
                {"uuid": "d1", "name": "main", "num_tables": 0, "file_size": 2048},
                {"uuid": "d2", "name": "empty"},
            ],
            "d1_databases",
        )
    )
    assert rows[2] == "| d1 | main | 0 | 2.00 KB |"
    assert rows[3] == "| d2 | empty | - | - |"


def test_load_balancer_table():
    rows = _table_rows(
        to_markdown(
            [{"id": "lb1", "name": "www", "enabled": True, "default_pools": ["p1", "p2"]}],
            "load_balancers",
        )
    )
    assert rows[2] == "| lb1 | www | Yes | 2 | off |"


def test_deployment_status_comes_from_build_stage():
    deployment = {
        "short_id": "abc123",
        "environment": "production",
        "url": "https://abc123.site.pages.dev",
        "stages": [{"name": "queued", "status": "success"}, {"name": "build", "status": "failure"}],
        "created_on": "2024-01-01T00:00:00Z",
    }
    rows = _table_rows(to_markdown([deployment], "deployments"))
    assert rows[2] == "| abc123 | production | https://abc123.site.pages.dev | failure | 2024-01-01T00:00:00Z |"


def test_pages_project_subdomain_and_domains():
    rows = _table_rows(
        to_markdown(
            [{"name": "site", "subdomain": "site", "domains": ["site.pages.dev", "example.com"]}],
            "pages_projects",
        )
    )
    assert rows[2] == "| site | site.pages.dev | site.pages.dev, example.com | - |"


def test_generic_table_limits_columns_and_cells():
    item = {
        "a": None,
        "b": {"nested": True},
        "c": "y" * 45,
        "d": True,
        "e": 3,
        "f": "hidden",
    }
    rows = _table_rows(render_generic_table([item]))
    assert rows[0] == "| a | b | c | d | e |"
    assert rows[2] == f"| - | [object] | {'y' * 30}... | true | 3 |"


def test_generic_table_for_scalars():
    assert _table_rows(render_generic_table(["a", "b"])) == ["| Value |", "|---|", "| a |", "| b |"]


def test_array_markdown_uses_entity_table():
    text = to_markdown([{"id": "w1", "handlers": ["fetch", "scheduled"]}], "workers")
    assert "| w1 | fetch, scheduled | - |" in text


def test_empty_array_markdown():
    assert to_markdown([], "workers") == NO_ITEMS


# ---------------------------------------------------------------------------
# Markdown: single objects and scalars
# ---------------------------------------------------------------------------


def test_object_markdown():
    zone = {"id": "z1", "name_servers": ["a.ns", "b.ns"], "paused": False, "owner": None}
    text = _markdown(zone, "zone")
    lines = text.splitlines()
    assert lines[0] == "## Zone"
    assert "**Id:** z1" in lines
    assert "**Paused:** false" in lines
    assert "**Name Servers:**" in lines
    assert "```json" in lines
    assert "Owner" not in text


def test_object_header_is_singular_with_spaces():
    assert to_markdown({"id": 1}, "dns_records").startswith("## Dns record")
    assert to_markdown({"id": 1}, "zone_analytics").startswith("## Zone analytic")


def test_scalar_markdown():
    assert to_markdown("hello", "value") == "hello"
    assert to_markdown(None, "value") == "_No data returned._"


@pytest.mark.parametrize(
    "data, shape",
    [
        (PaginatedResult(), ResultShape.PAGINATED),
        ([], ResultShape.ARRAY),
        ({}, ResultShape.OBJECT),
        ("x", ResultShape.SCALAR),
        (None, ResultShape.SCALAR),
    ],
)
def test_result_shape(data, shape):
    assert result_shape(data) is shape


def test_explicit_shape_overrides_detection():
    text = to_markdown({"items": []}, "zones", shape=ResultShape.OBJECT)
    assert text.startswith("## Zone")


# ---------------------------------------------------------------------------
# Truncation, success and text blocks
# ---------------------------------------------------------------------------


def test_truncate_text():
    assert truncate_text("short", limit=10) == "short"
    cut = truncate_text("x" * 25, limit=10)
    assert cut.startswith("x" * 10 + "\n\n")
    assert "truncated" in cut


def test_format_text_passes_raw_payload():
    result = format_text("example.com. 300 IN A 192.0.2.1")
    assert result.content[0].text == "example.com. 300 IN A 192.0.2.1"
    assert result.isError is False


def test_format_success():
    payload = result_json(format_success("Zone deleted", id="z1"))
    assert payload == {"success": True, "message": "Zone deleted", "id": "z1"}


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


def test_api_error_block():
    result = format_error_response(CloudflareApiError("Zone not found", 404))
    assert result.isError is True
    payload = result_json(result)
    assert payload["error"] == "Error: Zone not found"
    assert payload["details"] == {
        "name": "CloudflareApiError",
        "message": "Zone not found",
        "status_code": 404,
        "retryable": False,
    }


def test_retryable_errors_are_flagged():
    payload = result_json(format_error_response(CloudflareApiError("Service unavailable", 503)))
    assert payload["error"] == "Error: Service unavailable (retryable)"
    assert payload["details"]["retryable"] is True


def test_rate_limit_block_carries_retry_after():
    payload = result_json(format_error_response(RateLimitError("Rate limit exceeded", 120)))
    assert payload["error"] == "Error: Rate limit exceeded (retryable)"
    assert payload["details"]["retry_after"] == 120
    assert payload["details"]["status_code"] == 429


def test_authentication_block():
    payload = result_json(format_error_response(AuthenticationError("Bad credentials")))
    assert payload["error"] == "Error: Bad credentials"
    assert payload["details"]["name"] == "AuthenticationError"


def test_unclassified_exception_block():
    payload = result_json(format_error_response(RuntimeError("boom")))
    assert payload == {"error": "Error: boom", "details": {"name": "RuntimeError", "message": "boom"}}


def test_invalid_argument_block():
    result = format_error_response(
        InvalidArgumentError("Invalid URLs format", "urls must be a valid JSON array of strings")
    )
    assert result.isError is True
    assert result_json(result) == {
        "error": "Invalid URLs format",
        "message": "urls must be a valid JSON array of strings",
    }
