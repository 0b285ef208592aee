# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-13
# Description: search router
# -----------------------------------------------------------------------------
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_current_user_id, get_search_service
from api.schemas.search import (
    CompanySearchResponse,
    HybridSearchResponse,
    SemanticHit,
    SemanticSearchResponse,
)
from embedding.CRMEmbedder import EmbeddingProviderError
from persistence.models import ENTITY_TYPES
from services.CRMSearchService import CRMSearchService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])


@router.get("", response_model=HybridSearchResponse)
def search_contacts(
    query: str = Query(..., description="Free-text contact search"),
    user_id: str = Depends(get_current_user_id),
    svc: CRMSearchService = Depends(get_search_service),
) -> HybridSearchResponse:
    query_text = (query or "").strip()
    if not query_text:
        raise HTTPException(status_code=400, detail="query must not be empty")

    logger.info("GET /search (start) query='%s'", query_text)
    try:
        result = svc.search(user_id, query_text)
    except Exception as e:
        logger.exception("GET /search -> 500 query='%s': %s", query_text, e)
        raise HTTPException(status_code=500, detail=f"Search failed: {e}")

    logger.info(
        "GET /search (done) best=%d fuzzy=%d semantic=%d",
        len(result["best_matches"]), len(result["fuzzy_matches"]), len(result["semantic_matches"]),
    )
    return HybridSearchResponse(**result)


@router.get("/companies", response_model=CompanySearchResponse)
def search_companies(
    query: str = Query(..., description="Free-text company search"),
    user_id: str = Depends(get_current_user_id),
    svc: CRMSearchService = Depends(get_search_service),
) -> CompanySearchResponse:
    query_text = (query or "").strip()
    if not query_text:
        raise HTTPException(status_code=400, detail="query must not be empty")

    try:
        result = svc.search_companies(user_id, query_text)
    except Exception as e:
        logger.exception("GET /search/companies -> 500 query='%s': %s", query_text, e)
        raise HTTPException(status_code=500, detail=f"Company search failed: {e}")
    return CompanySearchResponse(**result)


@router.get("/semantic", response_model=SemanticSearchResponse)
def semantic_search(
    query: str = Query(..., description="Natural-language query"),
    entity_types: Optional[List[str]] = Query(None, description="Restrict to these entity types"),
    limit: int = Query(10, ge=1, le=100),
    user_id: str = Depends(get_current_user_id),
    svc: CRMSearchService = Depends(get_search_service),
) -> SemanticSearchResponse:
    query_text = (query or "").strip()
    if not query_text:
        raise HTTPException(status_code=400, detail="query must not be empty")

    unknown = [t for t in (entity_types or []) if t not in ENTITY_TYPES]
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unknown entity types: {unknown}")

    try:
        hits = svc.semantic_search(user_id, query_text, entity_types=entity_types, limit=limit)
    except EmbeddingProviderError as e:
        logger.error("GET /search/semantic -> 502: %s", e)
        raise HTTPException(status_code=502, detail=f"Embedding provider failed: {e}")

    return SemanticSearchResponse(results=[SemanticHit(**h) for h in hits])
