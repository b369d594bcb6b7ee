"""Tests for the FastAPI transport: auth gate, JSON-RPC routing, SSE sessions, headers."""

from __future__ import annotations

import asyncio

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from conftest import TOKEN_CREDENTIALS

from cloudflare_mcp.config import settings
from cloudflare_mcp.mcp import http_server
from cloudflare_mcp.mcp.http_server import app, handle_rpc
from cloudflare_mcp.middleware.security import SECURITY_HEADERS, parse_cors_origins

TOKEN_HEADERS = {"X-CF-API-Token": "test-token"}


@pytest_asyncio.fixture
async def http():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def _rpc(method: str, params: dict | None = None, rpc_id: int | None = 1) -> dict:
    body: dict = {"jsonrpc": "2.0", "method": method}
    if params is not None:
        body["params"] = params
    if rpc_id is not None:
        body["id"] = rpc_id
    return body


# ---------------------------------------------------------------------------
# Public endpoints
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_health(http):
    response = await http.get("/health")
    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "service": settings.mcp_server_name,
        "version": settings.mcp_server_version,
    }


@pytest.mark.asyncio
async def test_index_lists_tools_and_auth_headers(http):
    response = await http.get("/")
    body = response.json()
    assert body["tool_count"] == 75
    assert "cloudflare_list_zones" in body["tools"]["zones"]
    assert "X-CF-API-Token" in body["authentication"]["required_headers"]
    assert body["endpoints"]["mcp"] == "/mcp"


# ---------------------------------------------------------------------------
# Stateless JSON-RPC
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_mcp_requires_credentials(http):
    response = await http.post("/mcp", json=_rpc("tools/list"))
    assert response.status_code == 401
    body = response.json()
    assert body["error"] == "Unauthorized"
    assert body["required_headers"] == ["X-CF-API-Token", "or X-CF-API-Email + X-CF-API-Key"]


@pytest.mark.asyncio
async def test_mcp_rejects_half_legacy_credentials(http):
    response = await http.post("/mcp", json=_rpc("tools/list"), headers={"X-CF-API-Email": "ops@example.com"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_tools_list(http):
    response = await http.post("/mcp", json=_rpc("tools/list"), headers=TOKEN_HEADERS)
    assert response.status_code == 200
    tools = response.json()["result"]["tools"]
    assert len(tools) == 75
    assert all("inputSchema" in tool for tool in tools)


@pytest.mark.asyncio
async def test_initialize(http):
    response = await http.post(
        "/mcp",
        json=_rpc("initialize", {"protocolVersion": "2024-11-05", "capabilities": {}}),
        headers={"X-CF-API-Email": "ops@example.com", "X-CF-API-Key": "legacy-key"},
    )
    result = response.json()["result"]
    assert result["protocolVersion"] == "2024-11-05"
    assert result["serverInfo"] == {
        "name": settings.mcp_server_name,
        "version": settings.mcp_server_version,
    }
    assert "tools" in result["capabilities"]


@pytest.mark.asyncio
async def test_unknown_method(http):
    response = await http.post("/mcp", json=_rpc("resources/list"), headers=TOKEN_HEADERS)
    assert response.json()["error"]["code"] == -32601


@pytest.mark.asyncio
async def test_notification_is_accepted_without_body(http):
    response = await http.post(
        "/mcp", json=_rpc("notifications/initialized", rpc_id=None), headers=TOKEN_HEADERS
    )
    assert response.status_code == 202
    assert response.content == b""


@pytest.mark.asyncio
async def test_invalid_json(http):
    response = await http.post(
        "/mcp",
        content=b"{not json",
        headers={**TOKEN_HEADERS, "Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == -32700


@pytest.mark.asyncio
async def test_tools_call_argument_error_needs_no_network(http):
    response = await http.post(
        "/mcp",
        json=_rpc(
            "tools/call",
            {"name": "cloudflare_purge_cache_by_url", "arguments": {"zone_id": "z1", "urls": "nope"}},
        ),
        headers=TOKEN_HEADERS,
    )
    result = response.json()["result"]
    assert result["isError"] is True
    assert "Invalid URLs format" in result["content"][0]["text"]


@pytest.mark.asyncio
async def test_handle_rpc_rejects_non_objects():
    response = await handle_rpc([1, 2], TOKEN_CREDENTIALS)
    assert response["error"]["code"] == -32600


@pytest.mark.asyncio
async def test_null_method_is_an_invalid_request(http):
    response = await http.post("/mcp", json={"jsonrpc": "2.0", "id": 1, "method": None}, headers=TOKEN_HEADERS)
    assert response.status_code == 200
    assert response.json()["error"] == {"code": -32600, "message": "Request method must be a string"}


@pytest.mark.asyncio
async def test_list_params_are_an_invalid_request(http):
    response = await http.post("/mcp", json=_rpc("tools/call", []), headers=TOKEN_HEADERS)
    assert response.json()["error"]["code"] == -32600


@pytest.mark.asyncio
async def test_tools_call_without_name(http):
    response = await http.post("/mcp", json=_rpc("tools/call", {"arguments": {}}), headers=TOKEN_HEADERS)
    assert response.json()["error"]["code"] == -32602


@pytest.mark.asyncio
async def test_tools_call_schema_error(http):
    response = await http.post(
        "/mcp",
        json=_rpc("tools/call", {"name": "cloudflare_get_zone", "arguments": {}}),
        headers=TOKEN_HEADERS,
    )
    result = response.json()["result"]
    assert result["isError"] is True
    assert "'zone_id' is a required property" in result["content"][0]["text"]


@pytest.mark.asyncio
async def test_handle_rpc_ping():
    assert await handle_rpc(_rpc("ping", rpc_id=7), TOKEN_CREDENTIALS) == {
        "jsonrpc": "2.0",
        "id": 7,
        "result": {},
    }


# ---------------------------------------------------------------------------
# SSE sessions
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_sse_requires_credentials(http):
    response = await http.get("/sse")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_messages_unknown_session(http):
    response = await http.post("/messages", params={"session_id": "missing"}, json=_rpc("ping"))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_messages_reply_goes_to_session_queue(http):
    queue: asyncio.Queue = asyncio.Queue()
    http_server._sessions["session-1"] = (queue, TOKEN_CREDENTIALS)
    try:
        response = await http.post("/messages", params={"session_id": "session-1"}, json=_rpc("ping", rpc_id=3))
        assert response.status_code == 202
        assert queue.get_nowait() == {"jsonrpc": "2.0", "id": 3, "result": {}}

        await http.post(
            "/messages",
            params={"session_id": "session-1"},
            json=_rpc("notifications/initialized", rpc_id=None),
        )
        assert queue.empty()
    finally:
        http_server._sessions.pop("session-1", None)


# ---------------------------------------------------------------------------
# Headers
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_security_headers_present(http):
    response = await http.get("/health")
    for name, value in SECURITY_HEADERS.items():
        assert response.headers[name] == value


@pytest.mark.asyncio
async def test_request_id_is_echoed_or_generated(http):
    echoed = await http.get("/health", headers={"X-Request-ID": "req-123"})
    assert echoed.headers["X-Request-ID"] == "req-123"

    generated = await http.get("/health")
    assert generated.headers["X-Request-ID"]
    assert generated.headers["X-Request-ID"] != "req-123"


@pytest.mark.asyncio
async def test_cors_preflight(http):
    response = await http.options(
        "/mcp",
        headers={
            "Origin": "https://client.example",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "X-CF-API-Token",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("*", ["*"]),
        (" * ", ["*"]),
        ("https://a.example, https://b.example", ["https://a.example", "https://b.example"]),
        ("https://a.example,,", ["https://a.example"]),
    ],
)
def test_parse_cors_origins(raw, expected):
    assert parse_cors_origins(raw) == expected
