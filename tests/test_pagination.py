"""Page-number pagination: request clamping and result normalisation."""

from __future__ import annotations

import pytest

from cloudflare_mcp.schemas.common import PaginatedResult, ResultInfo
from cloudflare_mcp.utils.pagination import (
    build_pagination_query,
    create_paginated_response,
    empty_paginated_response,
    normalize_pagination_params,
)


@pytest.mark.parametrize(
    "page, per_page, expected",
    [
        (None, None, (1, 20)),
        (0, 0, (1, 20)),
        (-3, -1, (1, 20)),
        (3, 50, (3, 50)),
        (1, 500, (1, 100)),
        (2, 100, (2, 100)),
    ],
)
def test_normalize_pagination_params(page, per_page, expected):
    params = normalize_pagination_params(page, per_page)
    assert (params.page, params.per_page) == expected


def test_normalize_respects_explicit_ceiling():
    assert normalize_pagination_params(1, 80, max_per_page=50).per_page == 50


def test_build_pagination_query():
    assert build_pagination_query(2, 500) == {"page": 2, "per_page": 100}


def test_response_without_meta_is_complete():
    result = create_paginated_response([{"id": 1}, {"id": 2}])
    assert result.count == 2
    assert result.has_more is False
    assert result.total is None
    assert result.page is None
    assert result.total_pages is None


def test_response_with_meta():
    info = ResultInfo(page=1, per_page=2, count=2, total_count=5, total_pages=3)
    result = create_paginated_response([{"id": 1}, {"id": 2}], info)
    assert result.count == 2
    assert result.total == 5
    assert result.page == 1
    assert result.total_pages == 3
    assert result.has_more is True


@pytest.mark.parametrize(
    "page, total_pages, has_more",
    [(1, 1, False), (1, 2, True), (2, 2, False), (4, 3, False), (1, 0, False)],
)
def test_has_more_iff_page_below_total_pages(page, total_pages, has_more):
    info = ResultInfo(page=page, total_pages=total_pages, count=0, total_count=0)
    assert create_paginated_response([], info).has_more is has_more


def test_missing_count_falls_back_to_item_count():
    info = ResultInfo(page=1, total_pages=1)
    assert create_paginated_response(["a", "b", "c"], info).count == 3


def test_normalisation_is_idempotent():
    first = create_paginated_response(
        [{"id": 1}],
        ResultInfo(page=2, per_page=1, count=1, total_count=3, total_pages=3),
    )
    again = create_paginated_response(
        first.items,
        ResultInfo(
            page=first.page,
            count=first.count,
            total_count=first.total,
            total_pages=first.total_pages,
        ),
    )
    assert again == first


def test_payload_uses_wire_field_names():
    result = create_paginated_response(
        [{"id": 1}], ResultInfo(page=1, count=1, total_count=4, total_pages=4)
    )
    assert result.to_payload() == {
        "items": [{"id": 1}],
        "count": 1,
        "total": 4,
        "hasMore": True,
        "page": 1,
        "totalPages": 4,
    }


def test_payload_drops_absent_fields():
    assert empty_paginated_response().to_payload() == {"items": [], "count": 0, "hasMore": False}


def test_model_accepts_alias_and_field_names():
    assert PaginatedResult(hasMore=True).has_more is True
    assert PaginatedResult(has_more=True, totalPages=2).total_pages == 2
