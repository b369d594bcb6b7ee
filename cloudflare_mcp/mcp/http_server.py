"""HTTP transport for the Cloudflare MCP gateway.

Two ways to talk MCP over HTTP:

* ``POST /mcp`` - stateless JSON-RPC.  Credentials are read from the
  headers of each request and discarded once the response is written.
* ``GET /sse`` + ``POST /messages?session_id=<id>`` - Server-Sent Events.
  Credentials are read once when the stream opens and held only in memory
  for the life of that stream.

Run with:
    python -m cloudflare_mcp.main

Health check: GET /health
Service info: GET /
"""

from __future__ import annotations

import asyncio
import json
import logging
import uuid
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sse_starlette.sse import EventSourceResponse

from cloudflare_mcp.auth.credentials import (
    ACCOUNT_ID_HEADER,
    API_KEY_HEADER,
    API_TOKEN_HEADER,
    EMAIL_HEADER,
    MISSING_CREDENTIALS_MESSAGE,
    REQUIRED_HEADERS_HINT,
    TenantCredentials,
    has_valid_credentials,
    parse_tenant_credentials,
)
from cloudflare_mcp.config import settings
from cloudflare_mcp.mcp.server import call_tool, list_tools
from cloudflare_mcp.mcp.tools import TOOL_CATEGORIES, TOOL_DEFINITIONS
from cloudflare_mcp.middleware.security import SecurityHeadersMiddleware, parse_cors_origins

logger = logging.getLogger("mcp.http")

PROTOCOL_VERSION = "2024-11-05"
KEEPALIVE_SECONDS = 30.0

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602

# Open SSE streams: session_id -> (outbound queue, credentials captured at connect)
_sessions: dict[str, tuple[asyncio.Queue, TenantCredentials]] = {}


# ---------------------------------------------------------------------------
# JSON-RPC routing
# ---------------------------------------------------------------------------


def _rpc_result(rpc_id: Any, result: dict[str, Any]) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "result": result}


def _rpc_error(rpc_id: Any, code: int, message: str) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "error": {"code": code, "message": message}}


def _dump(model: Any) -> dict[str, Any]:
    return model.model_dump(by_alias=True, exclude_none=True, mode="json")


async def handle_rpc(body: Any, credentials: TenantCredentials) -> dict[str, Any] | None:
    """Answer one JSON-RPC message.  Notifications yield ``None``."""
    if not isinstance(body, dict):
        return _rpc_error(None, INVALID_REQUEST, "Request must be a JSON-RPC object")

    method = body.get("method")
    params = body.get("params")
    rpc_id = body.get("id")

    if params is None:
        params = {}
    if not isinstance(method, str):
        return _rpc_error(rpc_id, INVALID_REQUEST, "Request method must be a string")
    if not isinstance(params, dict):
        return _rpc_error(rpc_id, INVALID_REQUEST, "Request params must be an object")

    if method.startswith("notifications/"):
        return None

    if method == "initialize":
        return _rpc_result(
            rpc_id,
            {
                "protocolVersion": params.get("protocolVersion", PROTOCOL_VERSION),
                "capabilities": {"tools": {"listChanged": False}},
                "serverInfo": {
                    "name": settings.mcp_server_name,
                    "version": settings.mcp_server_version,
                },
            },
        )

    if method == "ping":
        return _rpc_result(rpc_id, {})

    if method == "tools/list":
        return _rpc_result(rpc_id, {"tools": [_dump(tool) for tool in list_tools()]})

    if method == "tools/call":
        name = params.get("name")
        if not isinstance(name, str):
            return _rpc_error(rpc_id, INVALID_PARAMS, "tools/call requires a string 'name'")
        result = await call_tool(name, params.get("arguments"), credentials)
        return _rpc_result(rpc_id, _dump(result))

    return _rpc_error(rpc_id, METHOD_NOT_FOUND, f"Method '{method}' not found")


def _unauthorized() -> JSONResponse:
    return JSONResponse(
        status_code=401,
        content={
            "error": "Unauthorized",
            "message": MISSING_CREDENTIALS_MESSAGE,
            "required_headers": REQUIRED_HEADERS_HINT,
        },
    )


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Cloudflare MCP gateway starting on %s:%s (%d tools)",
        settings.fastapi_host,
        settings.fastapi_port,
        len(TOOL_DEFINITIONS),
    )
    yield
    logger.info("Cloudflare MCP gateway shutting down")
    _sessions.clear()


app = FastAPI(
    title="Cloudflare MCP Gateway",
    version=settings.mcp_server_version,
    lifespan=lifespan,
)

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=parse_cors_origins(settings.allowed_origins),
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "service": settings.mcp_server_name,
        "version": settings.mcp_server_version,
    }


@app.get("/")
async def index():
    return {
        "name": settings.mcp_server_name,
        "version": settings.mcp_server_version,
        "description": "Multi-tenant MCP server for the Cloudflare API",
        "endpoints": {
            "mcp": "/mcp",
            "sse": "/sse",
            "messages": "/messages?session_id=<id>",
            "health": "/health",
        },
        "authentication": {
            "description": "Pass Cloudflare credentials as request headers",
            "required_headers": {
                API_TOKEN_HEADER: "Cloudflare API token (recommended)",
            },
            "alternative_headers": {
                EMAIL_HEADER: "Account email (legacy auth)",
                API_KEY_HEADER: "Global API key (legacy auth)",
            },
            "optional_headers": {
                ACCOUNT_ID_HEADER: "Default account ID",
            },
        },
        "tool_count": len(TOOL_DEFINITIONS),
        "tools": TOOL_CATEGORIES,
    }


@app.post("/mcp")
async def mcp_endpoint(request: Request):
    """Stateless JSON-RPC: one request in, one response out."""
    credentials = parse_tenant_credentials(request.headers)
    if not has_valid_credentials(credentials):
        return _unauthorized()

    body = await _read_json(request)
    if body is None:
        return JSONResponse(status_code=400, content=_rpc_error(None, PARSE_ERROR, "Parse error"))

    response = await handle_rpc(body, credentials)
    if response is None:
        return Response(status_code=202)
    return JSONResponse(content=response)


@app.get("/sse")
async def sse_endpoint(request: Request):
    """Open an event stream.  The first event names the URL to POST requests to."""
    credentials = parse_tenant_credentials(request.headers)
    if not has_valid_credentials(credentials):
        return _unauthorized()

    session_id = uuid.uuid4().hex
    queue: asyncio.Queue = asyncio.Queue()
    _sessions[session_id] = (queue, credentials)
    logger.info("SSE session opened session=%s", session_id)

    async def event_generator():
        yield {"event": "endpoint", "data": f"/messages?session_id={session_id}"}
        try:
            while True:
                if await request.is_disconnected():
                    break
                try:
                    message = await asyncio.wait_for(queue.get(), timeout=KEEPALIVE_SECONDS)
                    yield {"event": "message", "data": json.dumps(message, default=str)}
                except asyncio.TimeoutError:
                    yield {"comment": "keepalive"}
        finally:
            _sessions.pop(session_id, None)
            logger.info("SSE session closed session=%s", session_id)

    return EventSourceResponse(event_generator())


@app.post("/messages")
async def messages_endpoint(request: Request, session_id: str):
    """Accept a JSON-RPC request for an open stream; the reply goes out on that stream."""
    session = _sessions.get(session_id)
    if session is None:
        return JSONResponse(
            status_code=404,
            content={"error": f"Session '{session_id}' not found. Connect to /sse first."},
        )
    queue, credentials = session

    body = await _read_json(request)
    if body is None:
        await queue.put(_rpc_error(None, PARSE_ERROR, "Parse error"))
        return Response(status_code=202, content="Accepted")

    method = body.get("method") if isinstance(body, dict) else None
    logger.debug("SSE recv session=%s method=%s", session_id, method)
    response = await handle_rpc(body, credentials)
    if response is not None:
        await queue.put(response)
    return Response(status_code=202, content="Accepted")
