"""Per-request tenant credentials.

A single deployment serves many Cloudflare tenants.  Each inbound request
carries its own identity in headers; nothing is stored server-side and the
values are never logged.

Headers:
    X-CF-API-Token   API token (preferred)
    X-CF-API-Email   email for legacy global-key auth
    X-CF-API-Key     legacy global API key
    X-CF-Account-ID  optional account scope
"""

from __future__ import annotations

from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field

from cloudflare_mcp.errors import AuthenticationError

API_TOKEN_HEADER = "X-CF-API-Token"
EMAIL_HEADER = "X-CF-API-Email"
API_KEY_HEADER = "X-CF-API-Key"
ACCOUNT_ID_HEADER = "X-CF-Account-ID"

MISSING_CREDENTIALS_MESSAGE = (
    f"Missing credentials. Provide either {API_TOKEN_HEADER} header, "
    f"or both {EMAIL_HEADER} and {API_KEY_HEADER} headers."
)

REQUIRED_HEADERS_HINT = [API_TOKEN_HEADER, f"or {EMAIL_HEADER} + {API_KEY_HEADER}"]


class TenantCredentials(BaseModel):
    """Identity of one tenant for the lifetime of one request / session."""

    model_config = ConfigDict(frozen=True)

    api_token: str | None = Field(None, repr=False)
    email: str | None = None
    api_key: str | None = Field(None, repr=False)
    account_id: str | None = None

    @property
    def has_api_token(self) -> bool:
        return bool(self.api_token)

    @property
    def has_legacy_key(self) -> bool:
        return bool(self.email) and bool(self.api_key)


def _header(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is None:
        lowered = name.lower()
        for key, candidate in headers.items():
            if key.lower() == lowered:
                value = candidate
                break
    return value or None


def parse_tenant_credentials(headers: Mapping[str, str]) -> TenantCredentials:
    """Read the four credential headers.  Pure extraction, no validation."""
    return TenantCredentials(
        api_token=_header(headers, API_TOKEN_HEADER),
        email=_header(headers, EMAIL_HEADER),
        api_key=_header(headers, API_KEY_HEADER),
        account_id=_header(headers, ACCOUNT_ID_HEADER),
    )


def has_valid_credentials(credentials: TenantCredentials) -> bool:
    return credentials.has_api_token or credentials.has_legacy_key


def validate_credentials(credentials: TenantCredentials) -> None:
    """Raise ``AuthenticationError`` unless a token or a full email+key pair is present."""
    if not has_valid_credentials(credentials):
        raise AuthenticationError(MISSING_CREDENTIALS_MESSAGE)
