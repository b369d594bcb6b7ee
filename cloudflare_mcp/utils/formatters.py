"""Projection of tool results into MCP text content.

JSON output is the result serialised verbatim.  Markdown output depends on
the shape of the result:

* paginated  -> header, count summary, entity table
* array      -> entity table
* object     -> header plus one ``**Key:** value`` line per field
* scalar     -> the value as text

Entity tables are looked up in ``TABLE_RENDERERS`` by entity tag; tags
without a renderer fall back to ``render_generic_table``.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any, Callable, Sequence

from mcp.types import CallToolResult, TextContent

from cloudflare_mcp.config import settings
from cloudflare_mcp.errors import InvalidArgumentError, ToolError, format_error_for_logging
from cloudflare_mcp.schemas.common import PaginatedResult, ResponseFormat

logger = logging.getLogger("mcp.formatters")

PLACEHOLDER = "-"
NO_ITEMS = "_No items found._"
NO_DATA = "_No data returned._"
DNS_CONTENT_LIMIT = 40
GENERIC_CELL_LIMIT = 30
GENERIC_MAX_COLUMNS = 5

TableRenderer = Callable[[Sequence[Any]], str]


class ResultShape(str, Enum):
    PAGINATED = "paginated"
    ARRAY = "array"
    OBJECT = "object"
    SCALAR = "scalar"


def result_shape(data: Any) -> ResultShape:
    """Classify *data* for markdown rendering."""
    if isinstance(data, PaginatedResult):
        return ResultShape.PAGINATED
    if isinstance(data, (list, tuple)):
        return ResultShape.ARRAY
    if isinstance(data, dict):
        return ResultShape.OBJECT
    return ResultShape.SCALAR


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------


def text_result(text: str, is_error: bool = False) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=is_error)


def to_json(data: Any) -> str:
    if isinstance(data, PaginatedResult):
        data = data.to_payload()
    return json.dumps(data, indent=2, default=str)


def truncate_text(text: str, limit: int | None = None) -> str:
    limit = limit or settings.character_limit
    if len(text) <= limit:
        return text
    logger.debug("truncating output from %d to %d characters", len(text), limit)
    return f"{text[:limit]}\n\n... [truncated: output exceeded {limit} characters]"


def _shorten(value: str, limit: int) -> str:
    return f"{value[:limit]}..." if len(value) > limit else value


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _or_dash(value: Any) -> str:
    return PLACEHOLDER if value is None or value == "" else _scalar(value)


def _yes_no(value: Any) -> str:
    return "Yes" if value else "No"


def _capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]


def _title_key(key: str) -> str:
    return " ".join(_capitalize(word) for word in key.split("_"))


def _table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    lines = [
        "| " + " | ".join(headers) + " |",
        "|" + "|".join("---" for _ in headers) + "|",
    ]
    lines.extend("| " + " | ".join(row) + " |" for row in rows)
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Entity tables
# ---------------------------------------------------------------------------

TABLE_RENDERERS: dict[str, TableRenderer] = {}


def register_table(entity_type: str) -> Callable[[TableRenderer], TableRenderer]:
    def decorator(func: TableRenderer) -> TableRenderer:
        TABLE_RENDERERS[entity_type] = func
        return func

    return decorator


@register_table("zones")
def render_zones_table(zones: Sequence[dict[str, Any]]) -> str:
    rows = [
        [
            _or_dash(zone.get("id")),
            _or_dash(zone.get("name")),
            _or_dash(zone.get("status")),
            _or_dash((zone.get("plan") or {}).get("name")),
            _or_dash(zone.get("type")),
        ]
        for zone in zones
    ]
    return _table(["ID", "Name", "Status", "Plan", "Type"], rows)


@register_table("dns_records")
def render_dns_records_table(records: Sequence[dict[str, Any]]) -> str:
    rows = [
        [
            _or_dash(record.get("id")),
            _or_dash(record.get("type")),
            _or_dash(record.get("name")),
            _shorten(str(record.get("content") or ""), DNS_CONTENT_LIMIT) or PLACEHOLDER,
            _or_dash(record.get("ttl")),
            _yes_no(record.get("proxied")),
        ]
        for record in records
    ]
    return _table(["ID", "Type", "Name", "Content", "TTL", "Proxied"], rows)


@register_table("workers")
def render_workers_table(workers: Sequence[dict[str, Any]]) -> str:
    rows = [
        [
            _or_dash(worker.get("id")),
            ", ".join(worker.get("handlers") or []) or PLACEHOLDER,
            _or_dash(worker.get("modified_on")),
        ]
        for worker in workers
    ]
    return _table(["ID", "Handlers", "Modified"], rows)


@register_table("kv_namespaces")
def render_kv_namespaces_table(namespaces: Sequence[dict[str, Any]]) -> str:
    rows = [[_or_dash(ns.get("id")), _or_dash(ns.get("title"))] for ns in namespaces]
    return _table(["ID", "Title"], rows)


@register_table("d1_databases")
def render_d1_databases_table(databases: Sequence[dict[str, Any]]) -> str:
    rows = []
    for db in databases:
        file_size = db.get("file_size")
        size = f"{file_size / 1024:.2f} KB" if file_size is not None else PLACEHOLDER
        rows.append(
            [
                _or_dash(db.get("uuid")),
                _or_dash(db.get("name")),
                _or_dash(db.get("num_tables")),
                size,
            ]
        )
    return _table(["UUID", "Name", "Tables", "Size"], rows)


@register_table("r2_buckets")
def render_r2_buckets_table(buckets: Sequence[dict[str, Any]]) -> str:
    rows = [
        [
            _or_dash(bucket.get("name")),
            _or_dash(bucket.get("location")),
            _or_dash(bucket.get("creation_date")),
        ]
        for bucket in buckets
    ]
    return _table(["Name", "Location", "Created"], rows)


@register_table("pages_projects")
def render_pages_projects_table(projects: Sequence[dict[str, Any]]) -> str:
    rows = []
    for project in projects:
        subdomain = project.get("subdomain")
        rows.append(
            [
                _or_dash(project.get("name")),
                f"{subdomain}.pages.dev" if subdomain else PLACEHOLDER,
                ", ".join(project.get("domains") or []) or PLACEHOLDER,
                _or_dash(project.get("created_on")),
            ]
        )
    return _table(["Name", "Subdomain", "Domains", "Created"], rows)


@register_table("deployments")
def render_deployments_table(deployments: Sequence[dict[str, Any]]) -> str:
    rows = []
    for deployment in deployments:
        build = next(
            (stage for stage in deployment.get("stages") or [] if stage.get("name") == "build"),
            {},
        )
        rows.append(
            [
                _or_dash(deployment.get("short_id")),
                _or_dash(deployment.get("environment")),
                _or_dash(deployment.get("url")),
                _or_dash(build.get("status")),
                _or_dash(deployment.get("created_on")),
            ]
        )
    return _table(["ID", "Environment", "URL", "Status", "Created"], rows)


@register_table("load_balancers")
def render_load_balancers_table(lbs: Sequence[dict[str, Any]]) -> str:
    rows = [
        [
            _or_dash(lb.get("id")),
            _or_dash(lb.get("name")),
            _yes_no(lb.get("enabled")),
            str(len(lb.get("default_pools") or [])),
            lb.get("steering_policy") or "off",
        ]
        for lb in lbs
    ]
    return _table(["ID", "Name", "Enabled", "Pools", "Steering"], rows)


def _generic_cell(value: Any) -> str:
    if value is None:
        return PLACEHOLDER
    if isinstance(value, (dict, list, tuple)):
        return "[object]"
    return _shorten(_scalar(value), GENERIC_CELL_LIMIT)


def render_generic_table(items: Sequence[Any]) -> str:
    """Columns are the first item's keys, at most five of them."""
    if not items:
        return NO_ITEMS
    first = items[0]
    if not isinstance(first, dict):
        return _table(["Value"], [[_generic_cell(item)] for item in items])

    keys = list(first)[:GENERIC_MAX_COLUMNS]
    rows = [
        [_generic_cell(item.get(key)) if isinstance(item, dict) else PLACEHOLDER for key in keys]
        for item in items
    ]
    return _table(keys, rows)


def render_table(items: Sequence[Any], entity_type: str) -> str:
    renderer = TABLE_RENDERERS.get(entity_type, render_generic_table)
    return renderer(items)


# ---------------------------------------------------------------------------
# Markdown
# ---------------------------------------------------------------------------


def _paginated_markdown(data: PaginatedResult, entity_type: str) -> str:
    lines = [f"## {_capitalize(entity_type)}", ""]
    if data.total is not None:
        lines.append(f"**Total:** {data.total} | **Showing:** {data.count}")
    else:
        lines.append(f"**Showing:** {data.count}")

    if data.has_more:
        if data.page is not None:
            lines.append(f"**More available:** Yes (page {data.page})")
        elif data.cursor:
            lines.append(f"**More available:** Yes (cursor `{data.cursor}`)")
        else:
            lines.append("**More available:** Yes")
    lines.append("")

    if not data.items:
        lines.append(NO_ITEMS)
    else:
        lines.append(render_table(data.items, entity_type))
    return "\n".join(lines)


def _object_markdown(data: dict[str, Any], entity_type: str) -> str:
    singular = entity_type[:-1] if entity_type.endswith("s") else entity_type
    lines = [f"## {_capitalize(singular.replace('_', ' '))}", ""]
    for key, value in data.items():
        if value is None:
            continue
        label = _title_key(key)
        if isinstance(value, (dict, list)):
            lines.append(f"**{label}:**")
            lines.append("```json")
            lines.append(json.dumps(value, indent=2, default=str))
            lines.append("```")
        else:
            lines.append(f"**{label}:** {_scalar(value)}")
    return "\n".join(lines)


def to_markdown(data: Any, entity_type: str, shape: ResultShape | None = None) -> str:
    shape = shape or result_shape(data)
    if shape is ResultShape.PAGINATED:
        return _paginated_markdown(data, entity_type)
    if shape is ResultShape.ARRAY:
        return render_table(list(data), entity_type) if data else NO_ITEMS
    if shape is ResultShape.OBJECT:
        return _object_markdown(data, entity_type)
    return NO_DATA if data is None else _scalar(data)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def format_response(
    data: Any,
    fmt: ResponseFormat | str = ResponseFormat.JSON,
    entity_type: str = "result",
    shape: ResultShape | None = None,
) -> CallToolResult:
    """Render a successful result in the caller's chosen format."""
    if ResponseFormat(fmt) is ResponseFormat.MARKDOWN:
        return text_result(truncate_text(to_markdown(data, entity_type, shape)))
    return text_result(to_json(data))


def format_success(message: str, **fields: Any) -> CallToolResult:
    """Confirmation block for mutations: ``{"success": true, "message": ..., **fields}``."""
    return text_result(to_json({"success": True, "message": message, **fields}))


def format_text(text: str) -> CallToolResult:
    """Raw provider text (scripts, zone files, KV values)."""
    return text_result(truncate_text(text))


def format_error_response(error: BaseException) -> CallToolResult:
    """Error block flagged with ``isError`` so clients need not parse the text."""
    if isinstance(error, InvalidArgumentError):
        return text_result(to_json({"error": error.title, "message": error.message}), is_error=True)

    message = f"Error: {error.message if isinstance(error, ToolError) else error}"
    if getattr(error, "retryable", False):
        message += " (retryable)"
    payload = {"error": message, "details": format_error_for_logging(error)}
    return text_result(to_json(payload), is_error=True)
