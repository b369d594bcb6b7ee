"""Integration tests for the MCP tool catalogue and server bootstrap."""

from __future__ import annotations

import pytest
from mcp import types

from conftest import TOKEN_CREDENTIALS

from cloudflare_mcp.config import settings
from cloudflare_mcp.mcp.server import create_mcp_server, list_tools
from cloudflare_mcp.mcp.tools import TOOL_CATEGORIES, TOOL_DEFINITIONS, TOOL_HANDLERS

EXPECTED_CATEGORY_SIZES = {
    "accounts": 5,
    "zones": 8,
    "dns": 7,
    "workers": 8,
    "kv": 9,
    "d1": 5,
    "r2": 4,
    "pages": 8,
    "cache": 4,
    "firewall": 6,
    "waf": 3,
    "load_balancers": 5,
    "ssl": 1,
    "analytics": 2,
}


def test_tool_count():
    assert len(TOOL_DEFINITIONS) == 75
    assert list_tools() == TOOL_DEFINITIONS


def test_tool_names_are_unique_and_prefixed():
    names = [tool.name for tool in TOOL_DEFINITIONS]
    assert len(names) == len(set(names))
    assert all(name.startswith("cloudflare_") for name in names)


def test_every_tool_has_a_handler():
    assert set(TOOL_HANDLERS) == {tool.name for tool in TOOL_DEFINITIONS}


def test_categories_cover_every_tool():
    assert {name: len(tools) for name, tools in TOOL_CATEGORIES.items()} == EXPECTED_CATEGORY_SIZES
    flattened = [name for tools in TOOL_CATEGORIES.values() for name in tools]
    assert sorted(flattened) == sorted(tool.name for tool in TOOL_DEFINITIONS)


@pytest.mark.parametrize("tool", TOOL_DEFINITIONS, ids=lambda tool: tool.name)
def test_tool_schema_shape(tool):
    assert tool.description
    schema = tool.inputSchema
    assert schema["type"] == "object"
    assert isinstance(schema["properties"], dict)
    assert set(schema.get("required", [])) <= set(schema["properties"])


def test_format_property_is_offered_on_list_tools():
    list_tools_without_format = {
        tool.name
        for tool in TOOL_DEFINITIONS
        if tool.name.startswith("cloudflare_list_") and "format" not in tool.inputSchema["properties"]
    }
    assert list_tools_without_format == set()


def test_json_string_arguments_are_declared_as_strings():
    by_name = {tool.name: tool for tool in TOOL_DEFINITIONS}
    assert by_name["cloudflare_purge_cache_by_url"].inputSchema["properties"]["urls"]["type"] == "string"
    assert by_name["cloudflare_query_d1_database"].inputSchema["properties"]["params"]["type"] == "string"


def test_create_mcp_server_registers_handlers():
    server = create_mcp_server(TOKEN_CREDENTIALS)
    assert server.name == settings.mcp_server_name
    assert types.ListToolsRequest in server.request_handlers
    assert types.CallToolRequest in server.request_handlers
