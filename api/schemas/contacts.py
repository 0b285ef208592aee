# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-13
# Description: contacts.py
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from api.schemas.companies import CompanyInfo


class ContactCreateRequest(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=200)
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    job_title: Optional[str] = None
    company_id: Optional[str] = None


class ContactUpdateRequest(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=200)
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    job_title: Optional[str] = None
    company_id: Optional[str] = None


class ContactInfo(BaseModel):
    id: str
    first_name: str
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    job_title: Optional[str] = None
    company_id: Optional[str] = None
    company: Optional[CompanyInfo] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ContactListItem(ContactInfo):
    last_interaction_at: Optional[str] = None


class ContactDetail(ContactInfo):
    # Nested rows are passed through as serialised by the service layer
    interactions: List[Dict[str, Any]] = []
    notes: List[Dict[str, Any]] = []
    notifications: List[Dict[str, Any]] = []
