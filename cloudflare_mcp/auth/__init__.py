"""Tenant credential resolution."""

from cloudflare_mcp.auth.credentials import (
    TenantCredentials,
    has_valid_credentials,
    parse_tenant_credentials,
    validate_credentials,
)

__all__ = [
    "TenantCredentials",
    "has_valid_credentials",
    "parse_tenant_credentials",
    "validate_credentials",
]
