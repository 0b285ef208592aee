# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-02
# Description: pagination.py
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import settings


@dataclass(frozen=True)
class PaginationParams:
    offset: int = 0
    limit: int = settings.PAGINATION_DEFAULT_LIMIT


def parse_pagination_params(offset: Optional[int] = None, limit: Optional[int] = None) -> PaginationParams:
    """
    Clamp raw offset/limit into a usable window.
    Negative offsets become 0; limit is forced into [1, PAGINATION_MAX_LIMIT].
    """
    valid_offset = max(0, offset or 0)
    if limit is None:
        limit = settings.PAGINATION_DEFAULT_LIMIT
    valid_limit = min(settings.PAGINATION_MAX_LIMIT, max(1, limit))
    return PaginationParams(offset=valid_offset, limit=valid_limit)


def paginated_response(data: List[Any], total: int, pagination: PaginationParams) -> Dict[str, Any]:
    return {
        "data": data,
        "total": total,
        "offset": pagination.offset,
        "limit": pagination.limit,
        "has_more": pagination.offset + len(data) < total,
    }
