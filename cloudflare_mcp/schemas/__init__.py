"""Pydantic schemas: wire envelope, pagination and request bodies."""

from cloudflare_mcp.schemas.common import (
    ErrorDetail,
    PaginatedResult,
    PaginationParams,
    ProviderEnvelope,
    ProviderMessage,
    ResponseFormat,
    ResultInfo,
)

__all__ = [
    "ErrorDetail",
    "PaginatedResult",
    "PaginationParams",
    "ProviderEnvelope",
    "ProviderMessage",
    "ResponseFormat",
    "ResultInfo",
]
