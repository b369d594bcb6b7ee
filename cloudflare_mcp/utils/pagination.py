"""Page-number pagination helpers for Cloudflare list endpoints."""

from __future__ import annotations

from typing import Any, Sequence

from cloudflare_mcp.config import settings
from cloudflare_mcp.schemas.common import PaginatedResult, PaginationParams, ResultInfo

DEFAULT_PAGE = 1


def normalize_pagination_params(
    page: int | None = None,
    per_page: int | None = None,
    max_per_page: int | None = None,
) -> PaginationParams:
    """Apply defaults and clamp a caller's page request.

    ``page`` below 1 falls back to 1, a missing or non-positive ``per_page``
    falls back to the configured default, and anything above
    ``max_per_page`` is silently reduced.
    """
    ceiling = max_per_page or settings.max_page_size
    effective_page = page if page and page >= 1 else DEFAULT_PAGE
    effective_per_page = per_page if per_page and per_page >= 1 else settings.default_page_size
    return PaginationParams(page=effective_page, per_page=min(effective_per_page, ceiling))


def build_pagination_query(
    page: int | None = None,
    per_page: int | None = None,
) -> dict[str, Any]:
    """Query-string parameters for a paged list call."""
    return normalize_pagination_params(page, per_page).model_dump()


def create_paginated_response(
    items: Sequence[Any] | None,
    result_info: ResultInfo | None = None,
) -> PaginatedResult:
    """Wrap a result array and its ``result_info`` in a ``PaginatedResult``.

    Without ``result_info`` the list is treated as complete.
    """
    items = list(items or [])
    if result_info is None:
        return PaginatedResult(items=items, count=len(items), has_more=False)

    page = result_info.page
    total_pages = result_info.total_pages
    has_more = page is not None and total_pages is not None and page < total_pages
    return PaginatedResult(
        items=items,
        count=result_info.count if result_info.count is not None else len(items),
        total=result_info.total_count,
        has_more=has_more,
        page=page,
        total_pages=total_pages,
    )


def empty_paginated_response() -> PaginatedResult:
    return PaginatedResult(items=[], count=0, has_more=False)
