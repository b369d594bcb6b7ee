"""Shared envelope, pagination and error schemas."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ResponseFormat(str, Enum):
    """Rendering requested by the caller for a single tool call."""

    JSON = "json"
    MARKDOWN = "markdown"


class ErrorDetail(BaseModel):
    """Logging-oriented description of a failure, attached to every error block."""

    name: str
    message: str
    status_code: int | None = None
    retryable: bool | None = None
    retry_after: int | None = None


# ---------------------------------------------------------------------------
# Cloudflare wire format
# ---------------------------------------------------------------------------


class ProviderMessage(BaseModel):
    """One entry of the envelope's ``errors`` or ``messages`` list."""

    model_config = ConfigDict(extra="allow")

    code: int | None = None
    message: str = ""


class ResultInfo(BaseModel):
    """``result_info`` block.  ``cursor`` is only sent by KV key listings."""

    model_config = ConfigDict(extra="allow")

    page: int | None = None
    per_page: int | None = None
    count: int | None = None
    total_count: int | None = None
    total_pages: int | None = None
    cursor: str | None = None


class ProviderEnvelope(BaseModel):
    """``{success, errors, messages, result, result_info}`` wrapper around every JSON reply."""

    model_config = ConfigDict(extra="allow")

    success: bool
    errors: list[ProviderMessage] = Field(default_factory=list)
    messages: list[ProviderMessage] = Field(default_factory=list)
    result: Any = None
    result_info: ResultInfo | None = None


# ---------------------------------------------------------------------------
# Normalised pagination
# ---------------------------------------------------------------------------


class PaginationParams(BaseModel):
    """Caller-side page request after defaults and clamping."""

    page: int
    per_page: int


class PaginatedResult(BaseModel):
    """Uniform list result handed to the output layer.

    Serialises with the camelCase keys clients already know
    (``hasMore``, ``totalPages``); absent fields are dropped.
    """

    model_config = ConfigDict(populate_by_name=True)

    items: list[Any] = Field(default_factory=list)
    count: int = 0
    total: int | None = None
    has_more: bool = Field(False, alias="hasMore")
    page: int | None = None
    total_pages: int | None = Field(None, alias="totalPages")
    cursor: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
