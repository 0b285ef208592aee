# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-13
# Description: common.py
# -----------------------------------------------------------------------------
from datetime import datetime, timezone
from typing import Annotated, Generic, List, Optional, TypeVar

from pydantic import AfterValidator, BaseModel

T = TypeVar("T")


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Stored datetimes are naive UTC; aware inputs are converted, naive ones taken as UTC."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


UTCDateTime = Annotated[datetime, AfterValidator(to_naive_utc)]


class Page(BaseModel, Generic[T]):
    data: List[T]
    total: int
    offset: int
    limit: int
    has_more: bool


class CountResponse(BaseModel):
    count: int
