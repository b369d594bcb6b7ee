"""Tool registry: every MCP tool the gateway exposes, grouped by resource family."""

from __future__ import annotations

from mcp.types import Tool

from cloudflare_mcp.mcp.tools import (
    accounts,
    analytics,
    cache,
    d1,
    dns,
    firewall,
    kv,
    load_balancers,
    pages,
    r2,
    ssl,
    waf,
    workers,
    zones,
)
from cloudflare_mcp.mcp.tools._shared import ToolHandler

TOOL_MODULES = (
    accounts,
    zones,
    dns,
    workers,
    kv,
    d1,
    r2,
    pages,
    cache,
    firewall,
    waf,
    load_balancers,
    ssl,
    analytics,
)

TOOL_DEFINITIONS: list[Tool] = [tool for module in TOOL_MODULES for tool in module.TOOL_DEFINITIONS]

TOOL_HANDLERS: dict[str, ToolHandler] = {
    name: handler for module in TOOL_MODULES for name, handler in module.TOOL_HANDLERS.items()
}

# Catalogue served by the HTTP root endpoint.
TOOL_CATEGORIES: dict[str, list[str]] = {
    module.__name__.rsplit(".", 1)[-1]: [tool.name for tool in module.TOOL_DEFINITIONS]
    for module in TOOL_MODULES
}

__all__ = ["TOOL_CATEGORIES", "TOOL_DEFINITIONS", "TOOL_HANDLERS", "ToolHandler"]
