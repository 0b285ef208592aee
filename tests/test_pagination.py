# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-14
# Description: test_pagination.py
# -----------------------------------------------------------------------------
import settings
from utility.pagination import PaginationParams, paginated_response, parse_pagination_params


def test_defaults_and_clamping():
    assert parse_pagination_params() == PaginationParams(0, settings.PAGINATION_DEFAULT_LIMIT)
    assert parse_pagination_params(-5, 0) == PaginationParams(0, 1)
    assert parse_pagination_params(10, 10_000) == PaginationParams(10, settings.PAGINATION_MAX_LIMIT)


def test_has_more():
    window = PaginationParams(offset=0, limit=2)
    assert paginated_response([1, 2], 3, window)["has_more"] is True
    assert paginated_response([1, 2], 2, window)["has_more"] is False

    page = paginated_response([3], 3, PaginationParams(offset=2, limit=2))
    assert page == {"data": [3], "total": 3, "offset": 2, "limit": 2, "has_more": False}
