# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-13
# Description: notes.py
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class NoteCreateRequest(BaseModel):
    content: str = Field(..., min_length=1)
    contact_id: Optional[str] = None
    company_id: Optional[str] = None
    interaction_id: Optional[str] = None


class NoteUpdateRequest(BaseModel):
    content: Optional[str] = Field(None, min_length=1)
    contact_id: Optional[str] = None
    company_id: Optional[str] = None
    interaction_id: Optional[str] = None


class NoteInfo(BaseModel):
    id: str
    content: str
    contact_id: Optional[str] = None
    company_id: Optional[str] = None
    interaction_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class NoteDetail(NoteInfo):
    contact: Optional[Dict[str, Any]] = None
    company: Optional[Dict[str, Any]] = None
    interaction: Optional[Dict[str, Any]] = None
