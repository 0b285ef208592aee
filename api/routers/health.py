# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-09-13
# Description: health.py
# -----------------------------------------------------------------------------
import hmac
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query

import settings
from api.dependencies import get_health_service
from api.schemas.health import DeepHealthResponse, HealthResponse, KeepAliveResponse
from services.CRMHealthService import CRMHealthService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    return HealthResponse(status="ok", message="CRM Assistant API running")


@router.get("/health/deep", response_model=DeepHealthResponse)
def deep_health_check(
    svc: CRMHealthService = Depends(get_health_service),
    run_heavy_openai: bool = Query(False, description="Run heavier OpenAI tool-call test"),
) -> DeepHealthResponse:
    logger.info("GET /health/deep called (run_heavy_openai=%s)", run_heavy_openai)
    try:
        result = svc.deep_health(run_heavy_openai=run_heavy_openai)
    except Exception as e:
        logger.exception("GET /health/deep failed: %s", e)
        raise HTTPException(status_code=500, detail=f"deep health failed: {e}")

    logger.info("GET /health/deep completed (status=%s)", result.status)
    return result


@router.api_route("/keepalive", methods=["GET", "HEAD"], response_model=KeepAliveResponse)
def keep_alive(
    svc: CRMHealthService = Depends(get_health_service),
    secret: Optional[str] = Query(None),
    x_keepalive_secret: Optional[str] = Header(None, alias="X-Keepalive-Secret"),
) -> KeepAliveResponse:
    expected = settings.KEEPALIVE_SECRET
    if expected:
        provided = secret or x_keepalive_secret or ""
        if not hmac.compare_digest(provided.encode(), expected.encode()):
            logger.warning("Keep-alive called with an invalid secret")
            raise HTTPException(status_code=401, detail="Unauthorized")

    return svc.keep_alive()
