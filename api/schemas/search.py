# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-13
# Description: search.py
# -----------------------------------------------------------------------------
from typing import Any, Dict, List

from pydantic import BaseModel


class HybridSearchResponse(BaseModel):
    best_matches: List[Dict[str, Any]]
    fuzzy_matches: List[Dict[str, Any]]
    semantic_matches: List[Dict[str, Any]]


class CompanySearchResponse(BaseModel):
    companies: List[Dict[str, Any]]


class SemanticHit(BaseModel):
    entity_type: str
    entity_id: str
    score: float
    source_text: str


class SemanticSearchResponse(BaseModel):
    results: List[SemanticHit]
