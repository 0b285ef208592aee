# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-13
# Description: stats.py
# -----------------------------------------------------------------------------
import logging
from typing import Any, Dict, Literal

from fastapi import APIRouter, Depends

from api.dependencies import get_current_user_id, get_stats_service
from services.CRMStatsService import CRMStatsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("")
def get_stats(
    time_range: Literal["7d", "30d", "all"] = "all",
    user_id: str = Depends(get_current_user_id),
    svc: CRMStatsService = Depends(get_stats_service),
) -> Dict[str, Any]:
    logger.info("GET /stats time_range=%s", time_range)
    return svc.get_stats(user_id, time_range)
