# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-13
# Description: interactions.py
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from api.schemas.common import UTCDateTime

InteractionType = Literal["call", "email", "meeting", "other"]
Sentiment = Literal["positive", "neutral", "negative"]

class InteractionCreateRequest(BaseModel):
    contact_id: str = Field(..., min_length=1)
    type: InteractionType
    summary: Optional[str] = None
    outcome: Optional[str] = None
    sentiment: Optional[Sentiment] = None
    occurred_at: UTCDateTime

class InteractionUpdateRequest(BaseModel):
    type: Optional[InteractionType] = None
    summary: Optional[str] = None
    outcome: Optional[str] = None
    sentiment: Optional[Sentiment] = None
    occurred_at: Optional[UTCDateTime] = None

class InteractionInfo(BaseModel):
    id: str
    contact_id: str
    type: str
    summary: Optional[str] = None
    outcome: Optional[str] = None
    sentiment: Optional[str] = None
    occurred_at: Optional[str] = None
    created_at: Optional[str] = None

class InteractionListItem(InteractionInfo):
    contact: Optional[Dict[str, Any]] = None
    notes: Optional[List[Dict[str, Any]]] = None

class InteractionDetail(InteractionInfo):
    contact: Optional[Dict[str, Any]] = None
    notes: List[Dict[str, Any]] = []
    notifications: List[Dict[str, Any]] = []
