"""Shared pytest fixtures: a scripted Cloudflare API behind httpx.MockTransport."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from cloudflare_mcp.auth.credentials import TenantCredentials
from cloudflare_mcp.client import CloudflareClient

API_PREFIX = "/client/v4"

TOKEN_CREDENTIALS = TenantCredentials(api_token="test-token", account_id="acc-1")
LEGACY_CREDENTIALS = TenantCredentials(email="ops@example.com", api_key="legacy-key")


def envelope(
    result: Any = None,
    *,
    success: bool = True,
    errors: list[dict] | None = None,
    result_info: dict | None = None,
) -> dict[str, Any]:
    """Build a Cloudflare v4 response body."""
    body: dict[str, Any] = {
        "success": success,
        "errors": errors or [],
        "messages": [],
        "result": result,
    }
    if result_info is not None:
        body["result_info"] = result_info
    return body


class StubCloudflare:
    """Answers requests from a table of ``(method, path) -> response``.

    Paths are matched without the ``/client/v4`` prefix and after URL
    decoding.  Unmatched requests get a 404 envelope.  Every request is
    recorded in ``requests``.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        status: int = 200,
        text: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            if text is not None:
                return httpx.Response(status, text=text, headers=headers)
            if body is None:
                return httpx.Response(status, headers=headers)
            return httpx.Response(status, json=body, headers=headers)

        self.routes[(method, path)] = respond

    def add_handler(self, method: str, path: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[(method, path)] = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.startswith(API_PREFIX):
            path = path[len(API_PREFIX):]
        route = self.routes.get((request.method, path))
        if route is None:
            return httpx.Response(
                404,
                json=envelope(success=False, errors=[{"code": 7003, "message": f"No route for {path}"}]),
            )
        return route(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)

    def client(self, credentials: TenantCredentials | None = None) -> CloudflareClient:
        return CloudflareClient(
            credentials or TOKEN_CREDENTIALS,
            transport=httpx.MockTransport(self.handle),
        )


@pytest.fixture
def stub() -> StubCloudflare:
    return StubCloudflare()


@pytest.fixture
def client(stub: StubCloudflare) -> CloudflareClient:
    return stub.client()


def result_json(result) -> Any:
    """Decode the single text block of a ``CallToolResult``."""
    return json.loads(result.content[0].text)
