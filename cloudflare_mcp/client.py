"""Cloudflare API v4 client.

Every tool talks to Cloudflare through one ``CloudflareClient``.  A client
is bound to one tenant's credentials and is built fresh for each tool
invocation (``create_cloudflare_client``); instances are never cached or
shared, so two tenants can never see each other's auth headers.

Resource-family operations live in ``cloudflare_mcp.services`` and take the
client as their first argument.

API reference: https://developers.cloudflare.com/api/
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx
from pydantic import ValidationError

from cloudflare_mcp.auth.credentials import TenantCredentials
from cloudflare_mcp.config import settings
from cloudflare_mcp.errors import (
    DEFAULT_RETRY_AFTER_SECONDS,
    AuthenticationError,
    CloudflareApiError,
    RateLimitError,
    TransportError,
)
from cloudflare_mcp.schemas.common import ProviderEnvelope

logger = logging.getLogger("cloudflare.client")

JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain"

NO_CREDENTIALS_MESSAGE = (
    "No credentials provided. Include X-CF-API-Token header, "
    "or both X-CF-API-Email and X-CF-API-Key headers."
)
AUTH_FAILED_MESSAGE = "Authentication failed. Check your API credentials."


def parse_retry_after(value: str | None) -> int:
    """Seconds from a ``Retry-After`` header; 60 when absent, negative or not an integer."""
    if value is None:
        return DEFAULT_RETRY_AFTER_SECONDS
    try:
        seconds = int(value.strip())
    except ValueError:
        return DEFAULT_RETRY_AFTER_SECONDS
    return seconds if seconds >= 0 else DEFAULT_RETRY_AFTER_SECONDS


class CloudflareClient:
    """HTTP dispatch plus envelope handling for one tenant.

    Args:
        credentials: The tenant's credentials, checked on every dispatch.
        base_url: Override for the API root (defaults to settings).
        timeout: Transport timeout in seconds (defaults to settings).
        transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests.
    """

    def __init__(
        self,
        credentials: TenantCredentials,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._credentials = credentials
        self._base_url = (base_url or settings.cloudflare_api_base_url).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.request_timeout_seconds
        self._transport = transport

    @property
    def account_id(self) -> str | None:
        """Account scope sent by the tenant, if any."""
        return self._credentials.account_id

    def __repr__(self) -> str:
        return f"<CloudflareClient base_url={self._base_url}>"

    # ── Auth ──────────────────────────────────────────────────────────────

    def _auth_headers(self) -> dict[str, str]:
        creds = self._credentials
        if creds.api_token:
            return {"Authorization": f"Bearer {creds.api_token}"}
        if creds.email and creds.api_key:
            return {"X-Auth-Email": creds.email, "X-Auth-Key": creds.api_key}
        raise AuthenticationError(NO_CREDENTIALS_MESSAGE)

    # ── Dispatch ──────────────────────────────────────────────────────────

    async def _send(
        self,
        endpoint: str,
        *,
        method: str = "GET",
        params: Mapping[str, Any] | None = None,
        json_body: Any = None,
        content: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        # Raises before any network activity when credentials are incomplete.
        auth = self._auth_headers()
        merged = {"Content-Type": JSON_CONTENT_TYPE, **(headers or {}), **auth}
        query = {k: v for k, v in (params or {}).items() if v is not None}
        url = f"{self._base_url}{endpoint}"

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as http:
                response = await http.request(
                    method,
                    url,
                    params=query or None,
                    json=json_body,
                    content=content,
                    headers=merged,
                )
        except httpx.TransportError as exc:
            logger.warning("%s %s transport failure: %s", method, endpoint, type(exc).__name__)
            raise TransportError(f"Could not reach the Cloudflare API: {exc}") from exc

        logger.debug("%s %s -> %d", method, endpoint, response.status_code)

        if response.status_code == 429:
            raise RateLimitError(
                "Rate limit exceeded",
                parse_retry_after(response.headers.get("Retry-After")),
            )
        if response.status_code in (401, 403):
            raise AuthenticationError(AUTH_FAILED_MESSAGE)
        return response

    async def request(
        self,
        endpoint: str,
        *,
        method: str = "GET",
        params: Mapping[str, Any] | None = None,
        json_body: Any = None,
        content: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> ProviderEnvelope:
        """Issue a call whose reply is the standard JSON envelope.

        A 204 yields an empty successful envelope whose ``result`` is ``None``.
        """
        response = await self._send(
            endpoint,
            method=method,
            params=params,
            json_body=json_body,
            content=content,
            headers=headers,
        )
        status = response.status_code
        if status == 204:
            return ProviderEnvelope(success=True)

        try:
            envelope = ProviderEnvelope.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise CloudflareApiError(
                f"Unexpected response from Cloudflare API (HTTP {status})", status
            ) from exc

        if not envelope.success:
            message = envelope.errors[0].message if envelope.errors else ""
            raise CloudflareApiError(message or "Unknown Cloudflare API error", status)
        return envelope

    async def request_raw(
        self,
        endpoint: str,
        *,
        method: str = "GET",
        params: Mapping[str, Any] | None = None,
        content: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> str:
        """Issue a call whose reply body is plain text (scripts, zone files, KV values)."""
        response = await self._send(
            endpoint,
            method=method,
            params=params,
            content=content,
            headers=headers,
        )
        if not response.is_success:
            raise CloudflareApiError(f"API error: {response.status_code}", response.status_code)
        return response.text


def create_cloudflare_client(
    credentials: TenantCredentials,
    transport: httpx.AsyncBaseTransport | None = None,
) -> CloudflareClient:
    """Build a client for one tool invocation.  Never cache the result."""
    return CloudflareClient(credentials, transport=transport)
