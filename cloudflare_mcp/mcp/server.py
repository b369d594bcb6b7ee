"""MCP server bootstrap: tool listing and dispatch for one tenant.

Every ``call_tool`` builds its own ``CloudflareClient`` from the caller's
credentials, so no client, connection or auth header outlives the call.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

import jsonschema
from mcp.server import Server
from mcp.types import CallToolResult, Tool

from cloudflare_mcp.auth.credentials import TenantCredentials
from cloudflare_mcp.client import CloudflareClient, create_cloudflare_client
from cloudflare_mcp.config import settings
from cloudflare_mcp.errors import InvalidArgumentError, ToolError, format_error_for_logging
from cloudflare_mcp.mcp.tools import TOOL_DEFINITIONS, TOOL_HANDLERS
from cloudflare_mcp.utils.formatters import format_error_response, text_result, to_json

logger = logging.getLogger("mcp.server")

ClientFactory = Callable[[TenantCredentials], CloudflareClient]

_TOOLS_BY_NAME: dict[str, Tool] = {tool.name: tool for tool in TOOL_DEFINITIONS}


def list_tools() -> list[Tool]:
    return TOOL_DEFINITIONS


def _unknown_tool(name: str) -> CallToolResult:
    payload = {
        "error": f"Error: Unknown tool '{name}'",
        "details": {"name": "UnknownTool", "message": f"No tool named '{name}' is registered"},
    }
    return text_result(to_json(payload), is_error=True)


def validate_arguments(name: str, arguments: dict[str, Any]) -> None:
    """Check *arguments* against the tool's declared ``inputSchema``.

    Raises ``InvalidArgumentError`` naming the first offending field.
    """
    try:
        jsonschema.validate(arguments, _TOOLS_BY_NAME[name].inputSchema)
    except jsonschema.ValidationError as exc:
        field = ".".join(str(part) for part in exc.absolute_path)
        message = f"{field}: {exc.message}" if field else exc.message
        raise InvalidArgumentError(f"Invalid arguments for {name}", message) from exc


async def call_tool(
    name: str,
    arguments: dict[str, Any] | None,
    credentials: TenantCredentials,
    *,
    client_factory: ClientFactory = create_cloudflare_client,
) -> CallToolResult:
    """Run one tool for one tenant and return its content block.

    Failures never escape: classified errors and unexpected exceptions alike
    come back as an ``isError`` result.
    """
    handler = TOOL_HANDLERS.get(name)
    if handler is None:
        logger.warning("tool=%s unknown", name)
        return _unknown_tool(name)

    arguments = arguments or {}
    t0 = time.perf_counter()
    try:
        validate_arguments(name, arguments)
        client = client_factory(credentials)
        result = await handler(client, arguments)
    except ToolError as exc:
        elapsed = (time.perf_counter() - t0) * 1000
        logger.warning("tool=%s failed ms=%.1f error=%s", name, elapsed, format_error_for_logging(exc))
        return format_error_response(exc)
    except Exception as exc:
        elapsed = (time.perf_counter() - t0) * 1000
        logger.exception("tool=%s crashed ms=%.1f", name, elapsed)
        return format_error_response(exc)

    elapsed = (time.perf_counter() - t0) * 1000
    logger.info("tool=%s ok ms=%.1f", name, elapsed)
    return result


def create_mcp_server(credentials: TenantCredentials) -> Server:
    """Low-level MCP server bound to one tenant's credentials."""
    server = Server(settings.mcp_server_name, version=settings.mcp_server_version)

    @server.list_tools()
    async def handle_list_tools() -> list[Tool]:
        return list_tools()

    @server.call_tool()
    async def handle_call_tool(name: str, arguments: dict | None) -> CallToolResult:
        return await call_tool(name, arguments, credentials)

    return server
