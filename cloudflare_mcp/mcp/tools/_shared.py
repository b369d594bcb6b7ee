"""Schema fragments and argument helpers shared by the tool modules."""

from __future__ import annotations

import json
import logging
from typing import Any, Awaitable, Callable

from mcp.types import CallToolResult

from cloudflare_mcp.client import CloudflareClient
from cloudflare_mcp.errors import InvalidArgumentError
from cloudflare_mcp.schemas.common import PaginatedResult, ResponseFormat
from cloudflare_mcp.utils.pagination import create_paginated_response

logger = logging.getLogger("mcp.tools")

ToolHandler = Callable[[CloudflareClient, dict[str, Any]], Awaitable[CallToolResult]]

FORMAT_PROPERTY: dict[str, Any] = {
    "type": "string",
    "enum": [f.value for f in ResponseFormat],
    "default": ResponseFormat.JSON.value,
    "description": "Response format ('json' or 'markdown')",
}

PAGE_PROPERTY: dict[str, Any] = {
    "type": "integer",
    "minimum": 1,
    "default": 1,
    "description": "Page number",
}

PER_PAGE_PROPERTY: dict[str, Any] = {
    "type": "integer",
    "minimum": 1,
    "maximum": 100,
    "default": 20,
    "description": "Results per page (1-100)",
}


def string_property(description: str, **extra: Any) -> dict[str, Any]:
    return {"type": "string", "description": description, **extra}


def object_schema(properties: dict[str, Any], required: list[str] | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


def response_format(arguments: dict[str, Any]) -> ResponseFormat:
    return ResponseFormat(arguments.get("format") or ResponseFormat.JSON.value)


def unpaginated(items: list[Any]) -> PaginatedResult:
    """Wrap a bare provider array so every list tool answers with the same shape."""
    return create_paginated_response(items, None)


def parse_json_array(raw: str, *, title: str, hint: str) -> list[Any]:
    """Decode a string argument that must hold a JSON array.

    Raises ``InvalidArgumentError`` (no provider call is made) when the
    text is not JSON or decodes to something other than a list.
    """
    try:
        value = json.loads(raw)
    except (TypeError, ValueError) as exc:
        logger.debug("rejected argument: %s", title)
        raise InvalidArgumentError(title, hint) from exc
    if not isinstance(value, list):
        logger.debug("rejected argument: %s", title)
        raise InvalidArgumentError(title, hint)
    return value


def parse_string_array(raw: str, *, field: str) -> list[str]:
    """JSON array of strings, e.g. URLs, cache tags or hostnames."""
    title = f"Invalid {'URLs' if field == 'urls' else field} format"
    hint = f"{field} must be a valid JSON array of strings"
    values = parse_json_array(raw, title=title, hint=hint)
    if not all(isinstance(value, str) for value in values):
        raise InvalidArgumentError(title, hint)
    return values
